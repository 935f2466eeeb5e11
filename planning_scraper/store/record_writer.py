import logging
import sqlite3
from datetime import date

from planning_scraper.exceptions import StoreError
from planning_scraper.models import PlanningApplicationRecord, WriteOutcome
from planning_scraper.store.record_store import RecordStore


def is_duplicate(record: PlanningApplicationRecord, store: RecordStore) -> bool:
    """
    Check whether a record with the same council reference is already stored.
    Records without a council reference are always treated as new.
    """
    if not record.council_reference:
        return False

    existing_entry = store.query(f'SELECT 1 FROM {store.table} WHERE council_reference = ? LIMIT 1',
                                 (record.council_reference,))

    return len(existing_entry) > 0


class RecordWriter:
    def __init__(self, store: RecordStore, dry_run: bool = False, today=date.today):
        self.store = store
        self.dry_run = dry_run
        self.today = today

    def write(self, record: PlanningApplicationRecord) -> WriteOutcome:
        """
        Insert the record unless its council reference is already stored.
        :param record: extracted record, date_scraped is filled in here
        :return: the outcome of the write
        """
        with self.store.transaction():
            if is_duplicate(record, self.store):
                logging.info(f'Duplicate entry for job at {record.address} '
                             f'({record.council_reference}). Skipping insertion.')
                return WriteOutcome.SKIPPED_DUPLICATE

            record.date_scraped = self.today().isoformat()
            if self.dry_run:
                logging.info(f'Dry run, not saving job with location {record.address}.')
                return WriteOutcome.DRY_RUN

            fields = {key: value for key, value in record.to_row().items() if value is not None}
            try:
                self.store.insert(self.store.table, fields)
            except sqlite3.IntegrityError as e:
                if 'council_reference' not in str(e):
                    raise StoreError(f'insert() error: {e}') from e
                logging.info(f'Duplicate entry for job at {record.address} '
                             f'({record.council_reference}). Skipping insertion.')
                return WriteOutcome.SKIPPED_DUPLICATE

        logging.info(f'Data for job with location {record.address} saved to database.')
        return WriteOutcome.INSERTED
