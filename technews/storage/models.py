"""Article record and store outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


# Largest id either backend can bind (signed 64-bit).
MAX_ARTICLE_ID = 2**63 - 1


class UpsertOutcome(str, Enum):
    INSERTED = "inserted"
    DUPLICATE = "duplicate"


class MarkReadResult(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Article:
    """A persisted article row.

    `published_at` is the producer's timestamp string, kept verbatim and only
    used for ordering.
    """

    id: int
    title: str
    url: str
    description: Optional[str] = None
    source: Optional[str] = None
    published_at: Optional[str] = None
    is_read: bool = False

    def as_dict(self) -> Dict[str, Any]:
        # Field names follow the read API consumed by the dashboard.
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "publishedAt": self.published_at,
            "isRead": self.is_read,
        }
