"""Read-state transitions for stored articles."""

from __future__ import annotations

import logging
from typing import Any, Optional

from technews.storage.article_store import ArticleStore
from technews.storage.models import MAX_ARTICLE_ID, MarkReadResult

logger = logging.getLogger(__name__)


def _parse_article_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        article_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return article_id if 0 < article_id <= MAX_ARTICLE_ID else None


class ReadStateTracker:
    """Flips articles from unread to read. Never resets them."""

    def __init__(self, store: ArticleStore):
        self.store = store

    def mark_read(self, article_id: Any) -> MarkReadResult:
        """Mark one article read.

        Ids arriving from a transport may be strings; anything that is not a
        positive integer cannot name an article and yields NOT_FOUND without a
        store call. StorageUnavailable propagates.
        """
        parsed = _parse_article_id(article_id)
        if parsed is None:
            logger.info("Rejected mark-read for invalid article id %r", article_id)
            return MarkReadResult.NOT_FOUND
        result = self.store.mark_read(parsed)
        if result is MarkReadResult.NOT_FOUND:
            logger.info("Mark-read target %d does not exist", parsed)
        return result
