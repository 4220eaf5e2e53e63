"""Turn a batch of raw feed records into store submissions.

Each candidate is an independent submission: there is no batch transaction.
A StorageUnavailable from the store aborts the rest of the batch and
propagates; rows inserted before the failure stay committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from technews.ingestion.article_types import ArticleCandidate
from technews.storage.article_store import ArticleStore
from technews.storage.models import UpsertOutcome

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    accepted: int = 0
    duplicates: int = 0
    # Records missing a title or url. Not part of the caller-facing summary.
    skipped: int = 0

    @property
    def submitted(self) -> int:
        return self.accepted + self.duplicates + self.skipped

    def as_dict(self) -> Dict[str, int]:
        return {"accepted": self.accepted, "duplicates": self.duplicates}


def ingest(store: ArticleStore, candidates: Iterable[Any]) -> IngestResult:
    """Submit candidates to the store in input order and count the outcomes."""
    result = IngestResult()
    for record in candidates:
        candidate = ArticleCandidate.from_raw(record)
        if candidate is None:
            result.skipped += 1
            continue
        outcome = store.upsert_if_absent(candidate)
        if outcome is UpsertOutcome.INSERTED:
            result.accepted += 1
        else:
            result.duplicates += 1

    logger.info(
        "Ingested batch: accepted=%d duplicates=%d skipped=%d",
        result.accepted,
        result.duplicates,
        result.skipped,
    )
    return result
