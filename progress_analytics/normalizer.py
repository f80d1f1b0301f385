"""Enrich raw progress records and XP transactions with derived labels."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from progress_analytics.classifier import classify_category, classify_kind, classify_language
from progress_analytics.schema import EnrichedRecord, EnrichedTransaction, ProgressRecord, XPTransaction
from progress_analytics.status import DEFAULT_THRESHOLD, resolve_status

logger = logging.getLogger(__name__)


def enrich(record: ProgressRecord, threshold: float = DEFAULT_THRESHOLD) -> EnrichedRecord:
    return EnrichedRecord.from_record(
        record,
        language=classify_language(record.raw_language),
        category=classify_category(record.raw_type, record.raw_language),
        kind=classify_kind(record.raw_type),
        status=resolve_status(record, threshold),
    )


def normalize(records: Iterable[ProgressRecord], threshold: float = DEFAULT_THRESHOLD) -> list[EnrichedRecord]:
    """Classify and grade every record once, preserving input order."""

    enriched = [enrich(record, threshold) for record in records]
    logger.debug("Normalized %d progress records (threshold=%s)", len(enriched), threshold)
    return enriched


def normalize_transactions(transactions: Iterable[XPTransaction]) -> list[EnrichedTransaction]:
    """Attach the display language and kind to each XP transaction."""

    enriched = [
        EnrichedTransaction.from_transaction(
            transaction,
            language=classify_language(transaction.raw_language),
            kind=classify_kind(transaction.raw_type),
        )
        for transaction in transactions
    ]
    logger.debug("Normalized %d XP transactions", len(enriched))
    return enriched
