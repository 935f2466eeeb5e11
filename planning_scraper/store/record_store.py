import logging
import re
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path

from planning_scraper.exceptions import StoreError

DEFAULT_DB_PATH = 'data.sqlite'
TABLE_NAME = 'southernmidlands'

COLUMNS = (
    'id',
    'description',
    'date_scraped',
    'date_received',
    'on_notice_to',
    'address',
    'council_reference',
    'applicant',
    'owner',
    'stage_description',
    'stage_status',
    'document_description',
    'title_reference',
)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY,
    description TEXT,
    date_scraped TEXT,
    date_received TEXT,
    on_notice_to TEXT,
    address TEXT,
    council_reference TEXT,
    applicant TEXT,
    owner TEXT,
    stage_description TEXT,
    stage_status TEXT,
    document_description TEXT,
    title_reference TEXT
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_{table}_council_reference
    ON {table}(council_reference);
"""

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


class RecordStore:
    """
    sqlite3 backed store for scraped planning applications.

    Writes go through transaction(), which holds a lock for its whole body so
    only one writer touches the table at a time.
    """

    def __init__(self, db_path=DEFAULT_DB_PATH, table: str = TABLE_NAME):
        if not IDENTIFIER_PATTERN.match(table):
            raise ValueError(f'Invalid table name: {table}')

        self.db_path = str(db_path)
        self.table = table
        self._lock = threading.RLock()

        if self.db_path != ':memory:':
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self.connection = sqlite3.connect(self.db_path, isolation_level=None, check_same_thread=False)
        except sqlite3.Error as e:
            error_message = f'Failed to open record store {self.db_path}: {e}'
            logging.error(error_message)
            raise StoreError(error_message) from e

    def create_table(self):
        logging.info(f'Create table {self.table}')
        try:
            with self._lock:
                self.connection.executescript(SCHEMA_SQL.format(table=self.table))
        except sqlite3.Error as e:
            error_message = f'create_table() error: {e}'
            logging.error(error_message)
            raise StoreError(error_message) from e

    def query(self, sql: str, params=()) -> list:
        try:
            with self._lock:
                return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            error_message = f'query() error: {e}'
            logging.error(error_message)
            raise StoreError(error_message) from e

    def insert(self, table: str, fields: dict):
        """
        Insert one row.
        :param table: table name
        :param fields: column name to value mapping, unknown columns are rejected
        :raises sqlite3.IntegrityError: when the row breaks a constraint of the table
        :raises StoreError: for any other database failure
        """
        unknown = [name for name in fields if name not in COLUMNS]
        if unknown or not IDENTIFIER_PATTERN.match(table):
            raise ValueError(f'Cannot insert into {table}, unknown columns: {unknown}')

        names = ', '.join(fields)
        placeholders = ', '.join('?' for _ in fields)
        sql = f'INSERT INTO {table} ({names}) VALUES ({placeholders})'
        try:
            with self._lock:
                self.connection.execute(sql, tuple(fields.values()))
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            error_message = f'insert() error: {e}'
            logging.error(error_message)
            raise StoreError(error_message) from e

    @contextmanager
    def transaction(self):
        with self._lock:
            try:
                self.connection.execute('BEGIN IMMEDIATE')
            except sqlite3.Error as e:
                error_message = f'transaction() error: {e}'
                logging.error(error_message)
                raise StoreError(error_message) from e

            try:
                yield self
            except BaseException:
                self.connection.execute('ROLLBACK')
                raise
            else:
                self.connection.execute('COMMIT')

    def count(self) -> int:
        return self.query(f'SELECT COUNT(*) FROM {self.table}')[0][0]

    def rows(self) -> list:
        """All stored records as dictionaries, oldest first."""
        cursor_rows = self.query(f'SELECT {", ".join(COLUMNS)} FROM {self.table} ORDER BY id')
        return [dict(zip(COLUMNS, row)) for row in cursor_rows]

    def close(self):
        with self._lock:
            self.connection.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
