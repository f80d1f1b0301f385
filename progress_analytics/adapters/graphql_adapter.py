"""Adapter for already-fetched GraphQL dashboard payloads."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from progress_analytics.schema import ActivityObject, ProgressRecord, UserTotals, XPTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityPayload:
    """Typed collections parsed from one dashboard query response."""

    user: UserTotals = field(default_factory=UserTotals)
    progress: tuple[ProgressRecord, ...] = ()
    transactions: tuple[XPTransaction, ...] = ()


def _parse_timestamp(raw: Any, label: str) -> datetime:
    if not raw:
        raise ValueError(f"{label}: missing createdAt")
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        timestamp = datetime.fromisoformat(text)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed createdAt '{raw}'") from exc
    # Offset-less timestamps are UTC on the platform
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def _optional_number(raw: Any, label: str, name: str) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: invalid {name}") from exc


def _parse_object(raw: Any) -> Optional[ActivityObject]:
    if not isinstance(raw, dict):
        return None

    attrs = raw.get("attrs")
    language = attrs.get("language") if isinstance(attrs, dict) else None

    return ActivityObject(
        id=raw.get("id"),
        name=raw.get("name"),
        type=raw.get("type"),
        language=None if language is None else str(language),
    )


def _attempt_max(row: dict) -> Any:
    aggregate = (row.get("results_aggregate") or {}).get("aggregate") or {}
    return (aggregate.get("max") or {}).get("grade")


def _parse_progress(row: Any, index: int) -> ProgressRecord:
    label = f"Progress {index}"
    if not isinstance(row, dict):
        raise ValueError(f"{label}: expected an object")

    return ProgressRecord(
        id=row.get("id"),
        created_at=_parse_timestamp(row.get("createdAt"), label),
        is_done=bool(row.get("isDone")),
        grade=_optional_number(row.get("grade"), label, "grade"),
        results_max_grade=_optional_number(_attempt_max(row), label, "attempt grade"),
        object=_parse_object(row.get("object")),
    )


def _parse_transaction(row: Any, index: int) -> XPTransaction:
    label = f"Transaction {index}"
    if not isinstance(row, dict):
        raise ValueError(f"{label}: expected an object")

    amount = _optional_number(row.get("amount"), label, "amount")
    return XPTransaction(
        amount=amount or 0.0,
        created_at=_parse_timestamp(row.get("createdAt"), label),
        object=_parse_object(row.get("object")),
    )


def _parse_user(raw: Any) -> UserTotals:
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if not isinstance(raw, dict):
        return UserTotals()

    return UserTotals(
        id=raw.get("id"),
        login=raw.get("login") or "(unknown)",
        first_name=raw.get("firstName") or "",
        total_up=_optional_number(raw.get("totalUp"), "User", "totalUp") or 0.0,
        total_down=_optional_number(raw.get("totalDown"), "User", "totalDown") or 0.0,
    )


def _collection(data: dict, key: str) -> list:
    rows = data.get(key)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ValueError(f"'{key}' must be a list of objects")
    return rows


def parse_payload(payload: Any) -> ActivityPayload:
    """Parse a decoded response, either the ``data`` object or the full envelope."""

    if not isinstance(payload, dict):
        raise ValueError("GraphQL payload must be an object")

    errors = payload.get("errors")
    if errors:
        messages = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        raise ValueError(f"GraphQL payload contains errors: {messages}")

    data = payload.get("data", payload)
    if not isinstance(data, dict):
        raise ValueError("GraphQL 'data' must be an object")

    result = ActivityPayload(
        user=_parse_user(data.get("user")),
        progress=tuple(_parse_progress(row, i) for i, row in enumerate(_collection(data, "progress"), start=1)),
        transactions=tuple(
            _parse_transaction(row, i) for i, row in enumerate(_collection(data, "transaction"), start=1)
        ),
    )
    logger.info(
        "Parsed payload: %d progress rows, %d XP transactions", len(result.progress), len(result.transactions)
    )
    return result


def parse(file_path: str) -> ActivityPayload:
    """Parse a JSON file holding a dashboard query response."""

    with open(file_path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{file_path}: not valid JSON") from exc

    return parse_payload(payload)
