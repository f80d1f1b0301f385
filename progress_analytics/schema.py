"""Core data schema for learning-platform activity records."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional

PENDING = "Pending"
PASSED = "Passed"
FAILED = "Failed"

OVERALL = "Overall"


@dataclass(frozen=True)
class ActivityObject:
    """The exercise, project or exam a record refers to."""

    id: Optional[int] = None
    name: Optional[str] = None
    type: Optional[str] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class ProgressRecord:
    """One attempt at an activity object by the user."""

    id: Optional[int]
    created_at: datetime
    is_done: bool = False
    grade: Optional[float] = None
    results_max_grade: Optional[float] = None
    object: Optional[ActivityObject] = None

    @property
    def raw_type(self) -> Optional[str]:
        return self.object.type if self.object else None

    @property
    def raw_language(self) -> Optional[str]:
        return self.object.language if self.object else None

    @property
    def name(self) -> Optional[str]:
        return self.object.name if self.object else None


@dataclass(frozen=True)
class EnrichedRecord(ProgressRecord):
    """Progress record plus the fields derived by the normalizer."""

    language: str = "Other"
    category: str = "Other"
    kind: str = "(unknown)"
    status: str = PENDING

    @classmethod
    def from_record(cls, record: ProgressRecord, **derived) -> "EnrichedRecord":
        base = {f.name: getattr(record, f.name) for f in fields(ProgressRecord)}
        return cls(**base, **derived)


@dataclass(frozen=True)
class XPTransaction:
    """An XP gain (or loss) credited to the user."""

    amount: float
    created_at: datetime
    object: Optional[ActivityObject] = None

    @property
    def raw_type(self) -> Optional[str]:
        return self.object.type if self.object else None

    @property
    def raw_language(self) -> Optional[str]:
        return self.object.language if self.object else None

    @property
    def name(self) -> Optional[str]:
        return self.object.name if self.object else None


@dataclass(frozen=True)
class EnrichedTransaction(XPTransaction):
    language: str = "Other"
    kind: str = "(unknown)"

    @classmethod
    def from_transaction(cls, transaction: XPTransaction, **derived) -> "EnrichedTransaction":
        base = {f.name: getattr(transaction, f.name) for f in fields(XPTransaction)}
        return cls(**base, **derived)


@dataclass(frozen=True)
class UserTotals:
    """Authoritative account figures returned alongside the activity rows."""

    id: Optional[int] = None
    login: str = "(unknown)"
    first_name: str = ""
    total_up: float = 0.0
    total_down: float = 0.0


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: float


@dataclass(frozen=True)
class LanguageTotal:
    language: str
    total: float


@dataclass(frozen=True)
class RankedEntry:
    name: str
    language: str
    category: str
    grade: float
