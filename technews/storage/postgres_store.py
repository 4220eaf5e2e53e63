"""Postgres backend for the article store (psycopg 3)."""

from __future__ import annotations

import psycopg

from technews.storage.article_store import ArticleStore
from technews.storage.schema import POSTGRES_SCHEMA_STATEMENTS


class PostgresArticleStore(ArticleStore):
    backend = "postgres"
    param = "%s"
    driver_error = psycopg.Error
    schema_statements = POSTGRES_SCHEMA_STATEMENTS

    def __init__(self, pg_dsn: str):
        self.pg_dsn = pg_dsn
        super().__init__()

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.pg_dsn, autocommit=True)
