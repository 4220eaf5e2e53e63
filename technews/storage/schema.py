"""Schema statements for the article store.

Creation is idempotent (CREATE IF NOT EXISTS); there is no migration step.
"""

from __future__ import annotations


SQLITE_SCHEMA_STATEMENTS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS articles (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      title TEXT NOT NULL,
      description TEXT,
      url TEXT UNIQUE NOT NULL,
      source TEXT,
      published_at TEXT,
      is_read INTEGER NOT NULL DEFAULT 0
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles (published_at DESC)",
]


POSTGRES_SCHEMA_STATEMENTS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS articles (
      id BIGSERIAL PRIMARY KEY,
      title TEXT NOT NULL,
      description TEXT,
      url TEXT UNIQUE NOT NULL,
      source TEXT,
      published_at TEXT,
      is_read BOOLEAN NOT NULL DEFAULT FALSE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles (published_at DESC);",
]
