#!/usr/bin/env python3
"""NewsAPI ingestion worker.

Runs one ingestion cycle (or scheduled) that fetches tech headlines and
stores the new ones. Article rows are deduplicated by url in the store.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import schedule

from technews.config import Settings, load_settings
from technews.ingestion.ingestors import BaseIngestor, FeedUnavailable, NewsAPIIngestor
from technews.ingestion.pipeline import IngestResult, ingest
from technews.storage.article_store import ArticleStore
from technews.storage.factory import open_store

logger = logging.getLogger(__name__)


def run_once(store: ArticleStore, ingestor: BaseIngestor) -> Optional[IngestResult]:
    """One fetch-and-ingest cycle.

    A feed outage skips the cycle. StorageUnavailable propagates.
    """
    try:
        articles = ingestor.fetch()
    except FeedUnavailable as e:
        logger.error("[ingest] feed unavailable, skipping cycle: %s", e)
        return None
    result = ingest(store, articles)
    logger.info(
        "[ingest] fetched=%d accepted=%d duplicates=%d",
        len(articles),
        result.accepted,
        result.duplicates,
    )
    return result


def run_scheduled(store: ArticleStore, ingestor: BaseIngestor, interval_minutes: int) -> None:
    run_once(store, ingestor)
    schedule.every(interval_minutes).minutes.do(run_once, store, ingestor)
    while True:
        schedule.run_pending()
        time.sleep(5)


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ingestor = NewsAPIIngestor.from_settings(settings)
    with open_store(settings.database_url) as store:
        if settings.ingest_mode == "scheduled":
            run_scheduled(store, ingestor, settings.ingest_interval_minutes)
        else:
            run_once(store, ingestor)


if __name__ == "__main__":
    main()
