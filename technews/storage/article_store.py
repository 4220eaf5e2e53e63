"""Durable article store.

One connection handle per store: opened at construction, shared by reference
with the pipeline, tracker and web layer, closed once by `close()`. A closed
store is never re-opened; every call on it raises StorageUnavailable.

Uniqueness of `url` is enforced by the UNIQUE index. Inserts go through
`INSERT ... ON CONFLICT (url) DO NOTHING` so concurrent submissions of the
same url cannot both land, even from separate processes.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Type

from technews.ingestion.article_types import ArticleCandidate
from technews.storage.errors import StorageUnavailable
from technews.storage.models import MAX_ARTICLE_ID, Article, MarkReadResult, UpsertOutcome

logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = "id, title, description, url, source, published_at, is_read"


class ArticleStore:
    """Backend-neutral article persistence.

    Subclasses provide the driver connection, the driver's base exception
    type, the parameter marker and the schema statements.
    """

    backend: str = "base"
    param: str = "%s"
    driver_error: Type[BaseException] = Exception
    schema_statements: Sequence[str] = ()

    def __init__(self):
        self._lock = threading.Lock()
        self._conn: Any = None
        try:
            self._conn = self._connect()
        except self.driver_error as exc:
            raise StorageUnavailable(f"Could not open {self.backend} article store: {exc}") from exc
        try:
            self.init_schema()
        except StorageUnavailable:
            self.close()
            raise
        logger.info("Opened %s article store", self.backend)

    def _connect(self) -> Any:
        raise NotImplementedError

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        with self._lock:
            if self._conn is None:
                raise StorageUnavailable(f"{self.backend} article store is closed")
            try:
                cur = self._conn.cursor()
                try:
                    yield cur
                finally:
                    cur.close()
            except self.driver_error as exc:
                raise StorageUnavailable(f"{self.backend} storage error: {exc}") from exc

    def _sql(self, statement: str) -> str:
        # Statements are written with "?" markers.
        return statement.replace("?", self.param)

    def init_schema(self) -> None:
        with self._cursor() as cur:
            for statement in self.schema_statements:
                cur.execute(statement)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            finally:
                self._conn = None
        logger.info("Closed %s article store", self.backend)

    def __enter__(self) -> "ArticleStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def ping(self) -> None:
        """Round-trip to the storage medium; raises StorageUnavailable on failure."""
        with self._cursor() as cur:
            cur.execute("SELECT 1")
            cur.fetchone()

    def upsert_if_absent(self, candidate: ArticleCandidate) -> UpsertOutcome:
        """Insert the candidate unless an article with the same url exists.

        An existing row is left untouched (first-seen version wins).
        """
        if not candidate.title or not candidate.url:
            raise ValueError("candidate requires a title and url")
        with self._cursor() as cur:
            cur.execute(
                self._sql(
                    """
                    INSERT INTO articles (title, description, url, source, published_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT (url) DO NOTHING
                    """
                ),
                (
                    candidate.title,
                    candidate.description,
                    candidate.url,
                    candidate.source_name,
                    candidate.published_at,
                ),
            )
            inserted = cur.rowcount > 0
        if inserted:
            return UpsertOutcome.INSERTED
        logger.debug("Duplicate url skipped: %s", candidate.url)
        return UpsertOutcome.DUPLICATE

    def list_all(self) -> List[Article]:
        """All articles, newest `published_at` first.

        Ordering is a string comparison, which matches chronological order for
        ISO-8601 timestamps. Rows without a timestamp come last.
        """
        with self._cursor() as cur:
            cur.execute(
                f"""
                SELECT {ARTICLE_COLUMNS}
                FROM articles
                ORDER BY (published_at IS NULL), published_at DESC, id DESC
                """
            )
            rows = cur.fetchall()
        return [self._row_to_article(row) for row in rows]

    def get(self, article_id: int) -> Optional[Article]:
        if not 0 < article_id <= MAX_ARTICLE_ID:
            return None
        with self._cursor() as cur:
            cur.execute(self._sql(f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE id = ?"), (article_id,))
            row = cur.fetchone()
        return self._row_to_article(row) if row else None

    def mark_read(self, article_id: int) -> MarkReadResult:
        """Set is_read on the article. Re-marking a read article succeeds."""
        if not 0 < article_id <= MAX_ARTICLE_ID:
            return MarkReadResult.NOT_FOUND
        with self._cursor() as cur:
            cur.execute(self._sql("UPDATE articles SET is_read = ? WHERE id = ?"), (True, article_id))
            matched = cur.rowcount
        if matched == 0:
            return MarkReadResult.NOT_FOUND
        return MarkReadResult.SUCCESS

    def _row_to_article(self, row: Tuple[Any, ...]) -> Article:
        aid, title, description, url, source, published_at, is_read = row
        return Article(
            id=int(aid),
            title=title,
            description=description,
            url=url,
            source=source,
            published_at=published_at,
            is_read=bool(is_read),
        )
