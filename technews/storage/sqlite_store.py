"""SQLite backend for the article store."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from technews.storage.article_store import ArticleStore
from technews.storage.schema import SQLITE_SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class SQLiteArticleStore(ArticleStore):
    backend = "sqlite"
    param = "?"
    driver_error = sqlite3.Error
    schema_statements = SQLITE_SCHEMA_STATEMENTS

    def __init__(self, db_path: str = "news.db"):
        self.db_path = db_path
        super().__init__()

    def _ensure_db_directory(self):
        """Ensure database directory exists"""
        if self.db_path == MEMORY_PATH:
            return
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        try:
            self._ensure_db_directory()
        except OSError as e:
            raise sqlite3.OperationalError(f"cannot create directory for {self.db_path}: {e}") from e
        # isolation_level=None: every statement is committed when execute() returns.
        conn = sqlite3.connect(
            self.db_path,
            timeout=30.0,
            isolation_level=None,
            check_same_thread=False,
        )
        if self.db_path != MEMORY_PATH:
            conn.execute('PRAGMA journal_mode=WAL;')
        conn.execute('PRAGMA synchronous=FULL;')
        logger.debug("Connected to SQLite database at %s", self.db_path)
        return conn
