"""Shared ingestion data types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _source_name(source: Any) -> Optional[str]:
    # NewsAPI sends {"id": ..., "name": ...}; other producers send a bare label.
    if isinstance(source, Mapping):
        return _clean_text(source.get("name"))
    return _clean_text(source)


@dataclass(frozen=True)
class ArticleCandidate:
    """Validated candidate article, ready to be submitted to the store."""

    title: str
    url: str
    description: Optional[str] = None
    source_name: Optional[str] = None
    published_at: Optional[str] = None

    @classmethod
    def from_raw(cls, record: Any) -> Optional["ArticleCandidate"]:
        """Build a candidate from a raw feed record.

        Returns None when the record lacks a title or url.
        """
        if not isinstance(record, Mapping):
            return None
        title = _clean_text(record.get("title"))
        url = _clean_text(record.get("url"))
        if not title or not url:
            return None
        description = record.get("description")
        published_at = record.get("publishedAt", record.get("published_at"))
        return cls(
            title=title,
            url=url,
            description=_clean_text(description) if isinstance(description, str) else None,
            source_name=_source_name(record.get("source")),
            published_at=str(published_at) if published_at else None,
        )
