"""Canonical language, category and kind labels for raw activity attributes."""

from __future__ import annotations

from typing import Optional

_LANGUAGE_ALIASES = {
    "dom": "JavaScript",
    "sh": "Shell",
    "bash": "Shell",
    "shell": "Shell",
    "js": "JavaScript",
    "javascript": "JavaScript",
    "ts": "TypeScript",
    "typescript": "TypeScript",
    "py": "Python",
    "python": "Python",
    "go": "Go",
    "golang": "Go",
}

_CATEGORIES = {
    "exercise": "Quest",
    "quest": "Quest",
    "project": "Project",
    "checkpoint": "Checkpoint",
    "exam": "Checkpoint",
}

_KINDS = {**_CATEGORIES, "raid": "Raid"}

PISCINE_TAG = "unknown"


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def classify_language(raw_tag: Optional[str]) -> str:
    """Map a raw ``attrs.language`` tag to a display language.

    A missing tag is ``Other``; an empty tag or the platform's ``unknown``
    marker is ``Piscine``. Unrecognized tags are passed through capitalized.
    """

    if raw_tag is None:
        return "Other"

    value = str(raw_tag).strip().lower()
    if not value or value == PISCINE_TAG:
        return "Piscine"
    if value in _LANGUAGE_ALIASES:
        return _LANGUAGE_ALIASES[value]
    if "rust" in value:
        return "Rust"
    return _capitalize(value)


def classify_category(raw_type: Optional[str], raw_language: Optional[str] = None) -> str:
    """Map a raw object type to Quest/Project/Checkpoint/Piscine/Other."""

    if raw_language == PISCINE_TAG:
        return "Piscine"
    return _CATEGORIES.get(str(raw_type or "").lower(), "Other")


def classify_kind(raw_type: Optional[str]) -> str:
    """Display label for a raw object type; unlike categories, unknown types pass through."""

    if not raw_type:
        return "(unknown)"
    value = str(raw_type).lower()
    return _KINDS.get(value, _capitalize(value))
