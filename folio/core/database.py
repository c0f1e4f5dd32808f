import os
import sqlite3
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class Database:
    """
    Storage client handle for one SQLite database file.

    Built once by the Folio extension and handed to whatever needs storage
    (services, the logging service), so tests can point it at a temp file.
    """

    def __init__(self, path):
        self.path = path

    def __repr__(self):
        return f"<Database {self.path}>"

    def ensure_directory(self):
        """Create the directory holding the database file if needed"""
        db_dir = os.path.dirname(os.path.abspath(self.path))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def connect(self):
        """Open a new connection with dict-like rows and foreign keys enabled"""
        # isolation_level=None leaves BEGIN/COMMIT to transaction()
        conn = sqlite3.connect(self.path, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA foreign_keys = ON')
        return conn

    @contextmanager
    def connection(self):
        """Autocommit connection for single statements and reads"""
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self):
        """
        All-or-nothing scope.

        Yields a connection inside BEGIN; commits when the block exits
        normally, rolls back and re-raises on any exception.
        """
        conn = self.connect()
        try:
            conn.execute('BEGIN')
            try:
                yield conn
            except BaseException:
                conn.execute('ROLLBACK')
                logger.warning(f"Transaction on {self.path} rolled back")
                raise
            conn.execute('COMMIT')
        finally:
            conn.close()

    def executescript(self, script):
        with self.connection() as conn:
            conn.executescript(script)
