"""
Centralized logging service for Folio.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
from datetime import datetime, timedelta
from flask import current_app, request, has_app_context, has_request_context

logger = logging.getLogger(__name__)


class LoggingService:
    """Persists application log entries to the app_logs table"""

    def __init__(self, database=None, table='app_logs'):
        self.database = database
        self.table = table
        self._table_ready = False

    def _ensure_logs_table(self):
        """Ensure the app_logs table exists"""
        if self._table_ready:
            return
        with self.database.connection() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT
                )
            """)
            conn.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON {self.table}(timestamp DESC)
            """)
            conn.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_level
                ON {self.table}(level)
            """)
        self._table_ready = True

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    def log(self, level, source, message, details=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (posts, uploads, site, ...)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
        """
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        if self.database is None:
            logger.log(logging.getLevelName(level.upper()), f"[{source}] {message}")
            return

        try:
            self._ensure_logs_table()
            ip_address, user_agent, request_path = self._get_request_context()
            with self.database.connection() as conn:
                conn.execute(f"""
                    INSERT INTO {self.table}
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level.upper(), source, message, details,
                    ip_address, user_agent, request_path
                ))
        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{datetime.now().isoformat()}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    def info(self, source, message, details=None):
        self.log('INFO', source, message, details)

    def warning(self, source, message, details=None):
        self.log('WARNING', source, message, details)

    def error(self, source, message, details=None):
        self.log('ERROR', source, message, details)

    def get_recent_logs(self, limit=100, source=None):
        """Most recent entries first, optionally for one source"""
        self._ensure_logs_table()
        with self.database.connection() as conn:
            if source:
                rows = conn.execute(
                    f"SELECT * FROM {self.table} WHERE source = ? ORDER BY id DESC LIMIT ?",
                    (source, limit)
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT * FROM {self.table} ORDER BY id DESC LIMIT ?", (limit,)
                ).fetchall()
        return [dict(row) for row in rows]

    def cleanup_old_logs(self, days_to_keep=30):
        """Clean up old log entries"""
        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            self._ensure_logs_table()
            with self.database.connection() as conn:
                cursor = conn.execute(
                    f"DELETE FROM {self.table} WHERE timestamp < ?", (cutoff_iso,)
                )
                deleted_count = cursor.rowcount
            self.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count
        except Exception as e:
            self.error('system', f"Failed to cleanup old logs: {e}")
            return 0


def db_log(level, source, message, details=None):
    """Persist a log entry through the current app's LoggingService"""
    service = None
    if has_app_context():
        service = getattr(current_app.extensions.get('folio'), 'log_service', None)
    if service is None:
        logger.log(logging.getLevelName(level.upper()), f"[{source}] {message}")
        return
    service.log(level, source, message, details)
