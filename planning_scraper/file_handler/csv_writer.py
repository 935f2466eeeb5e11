import logging
import os

import pandas as pd

from planning_scraper.store.record_store import COLUMNS, RecordStore


class CsvWriter:
    def write(self, store: RecordStore, file_path: str) -> int:
        """
        Export every stored record to a CSV file.
        :param store: record store to read from
        :param file_path: destination CSV path
        :return: the number of rows written
        """
        output_dir = os.path.dirname(os.path.abspath(file_path))
        os.makedirs(output_dir, exist_ok=True)

        df = pd.DataFrame(store.rows(), columns=list(COLUMNS))
        df.to_csv(file_path, index=False)
        logging.info(f'Exported {len(df)} rows from {store.table} to {file_path}')

        return len(df)
