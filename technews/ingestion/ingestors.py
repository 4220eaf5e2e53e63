"""NewsAPI feed client.

Produces raw article records (NewsAPI's own JSON shape); validation and
normalization happen in the ingestion pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://newsapi.org/v2/top-headlines"


class FeedUnavailable(Exception):
    """The upstream feed could not be fetched or answered with an error"""
    pass


class BaseIngestor:
    name: str = "base"

    def fetch(self) -> List[Dict[str, Any]]:
        raise NotImplementedError


@dataclass(frozen=True)
class NewsAPIIngestor(BaseIngestor):
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    category: str = "technology"
    language: str = "en"
    page_size: int = 100
    timeout: float = 30.0

    name: str = "newsapi"

    @classmethod
    def from_settings(cls, settings) -> "NewsAPIIngestor":
        return cls(
            api_key=settings.news_api_key,
            endpoint=settings.news_api_endpoint,
            category=settings.news_category,
            language=settings.news_language,
            page_size=settings.news_page_size,
        )

    def fetch(self) -> List[Dict[str, Any]]:
        if not self.api_key:
            raise FeedUnavailable("NEWS_API_KEY is not configured")
        params = {
            "category": self.category,
            "language": self.language,
            "pageSize": min(max(self.page_size, 1), 100),
        }
        headers = {"X-Api-Key": self.api_key, "User-Agent": "TechNews/1.0"}

        logger.info("Fetching %s headlines from %s", self.category, self.endpoint)
        try:
            resp = requests.get(self.endpoint, params=params, headers=headers, timeout=self.timeout)
            data = resp.json() or {}
        except requests.RequestException as e:
            raise FeedUnavailable(f"Network error fetching {self.endpoint}: {e}") from e
        except ValueError as e:
            raise FeedUnavailable(f"Invalid JSON from {self.endpoint}: {e}") from e

        # NewsAPI reports failures in the body as {"status": "error", "message": ...}
        if not isinstance(data, dict) or data.get("status") != "ok":
            message = (data.get("message") if isinstance(data, dict) else None) or f"HTTP {resp.status_code}"
            raise FeedUnavailable(f"NewsAPI error: {message}")

        articles = [a for a in (data.get("articles") or []) if isinstance(a, dict)]
        logger.info("Fetched %d articles", len(articles))
        return articles
