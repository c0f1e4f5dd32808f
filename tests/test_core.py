"""
Database handle and logging service tests.
"""

import os

import pytest

from folio.core import Database, LoggingService


@pytest.fixture
def db(tmp_dir):
    database = Database(os.path.join(tmp_dir, "nested", "core.db"))
    database.ensure_directory()
    database.executescript("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL);")
    return database


def _count(db):
    with db.connection() as conn:
        return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]


def test_transaction_commits(db):
    with db.transaction() as conn:
        conn.execute("INSERT INTO items (name) VALUES ('a')")
        conn.execute("INSERT INTO items (name) VALUES ('b')")
    assert _count(db) == 2


def test_transaction_rolls_back_every_statement(db):
    with pytest.raises(ValueError):
        with db.transaction() as conn:
            conn.execute("INSERT INTO items (name) VALUES ('a')")
            raise ValueError("boom")
    assert _count(db) == 0


def test_rows_behave_like_dicts(db):
    with db.transaction() as conn:
        conn.execute("INSERT INTO items (name) VALUES ('a')")
    with db.connection() as conn:
        row = conn.execute("SELECT * FROM items").fetchone()
    assert dict(row) == {"id": 1, "name": "a"}


def test_logging_service_persists(db):
    service = LoggingService(db)
    service.info("posts", "Post created", {"id": 1})
    service.error("uploads", "Disk full")

    entries = service.get_recent_logs()
    assert [e["level"] for e in entries] == ["ERROR", "INFO"]
    assert service.get_recent_logs(source="posts")[0]["details"].startswith("{")


def test_logging_service_cleanup(db):
    service = LoggingService(db)
    service.info("posts", "fresh")
    with db.connection() as conn:
        conn.execute(
            "INSERT INTO app_logs (timestamp, level, source, message) "
            "VALUES ('2000-01-01T00:00:00', 'INFO', 'posts', 'ancient')"
        )

    assert service.cleanup_old_logs(days_to_keep=30) == 1
    messages = [e["message"] for e in service.get_recent_logs(source="posts")]
    assert messages == ["fresh"]


def test_logging_service_without_database_does_not_raise():
    LoggingService().warning("posts", "no storage configured")
