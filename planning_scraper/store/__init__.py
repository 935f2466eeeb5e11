from planning_scraper.store.record_store import DEFAULT_DB_PATH, TABLE_NAME, RecordStore
from planning_scraper.store.record_writer import RecordWriter, is_duplicate
