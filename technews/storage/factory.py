"""Pick an article store backend from a database URL."""

from __future__ import annotations

import logging

from technews.storage.article_store import ArticleStore

logger = logging.getLogger(__name__)

POSTGRES_SCHEMES = ("postgres://", "postgresql://")
SQLITE_SCHEME = "sqlite:///"


def open_store(database_url: str) -> ArticleStore:
    """Open the store for `database_url`.

    - postgres://... or postgresql://...  -> PostgresArticleStore
    - sqlite:///path/to/news.db            -> SQLiteArticleStore
    - anything else is treated as a SQLite file path (":memory:" included)
    """
    url = (database_url or "").strip()
    if not url:
        raise ValueError("database url is empty")

    if url.lower().startswith(POSTGRES_SCHEMES):
        # Imported lazily so SQLite deployments don't need libpq.
        from technews.storage.postgres_store import PostgresArticleStore

        logger.info("Using Postgres article store")
        return PostgresArticleStore(url)

    from technews.storage.sqlite_store import SQLiteArticleStore

    path = url[len(SQLITE_SCHEME):] if url.startswith(SQLITE_SCHEME) else url
    logger.info("Using SQLite article store at %s", path)
    return SQLiteArticleStore(path)
