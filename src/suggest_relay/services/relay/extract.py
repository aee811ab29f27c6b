"""Shape-tolerant field extraction for upstream search hits.

The backend returns attribute values in one of three shapes depending on the
index that produced the hit::

    "common.title": [{"raw": "Annual report", "highlighted": "..."}]
    "common.title": ["Annual report"]
    "common.title": "Annual report"

Strategies are tried in that order and the first one yielding a string wins.
Only the first element of an array is inspected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Tuple

TITLE_FIELD = "common.title"
DISPLAY_URL_FIELD = "displayurl"

Strategy = Callable[[object], "str | None"]


@dataclass(frozen=True, slots=True)
class Extraction:
    """Outcome of reading one field from a hit: a value or the reason there is none."""

    value: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def success(cls, value: str) -> "Extraction":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "Extraction":
        return cls(reason=reason)


def _raw_in_array(candidate: object) -> str | None:
    if isinstance(candidate, list) and candidate:
        first = candidate[0]
        if isinstance(first, Mapping):
            raw = first.get("raw")
            if isinstance(raw, str):
                return raw
    return None


def _string_in_array(candidate: object) -> str | None:
    if isinstance(candidate, list) and candidate and isinstance(candidate[0], str):
        return candidate[0]
    return None


def _plain_string(candidate: object) -> str | None:
    return candidate if isinstance(candidate, str) else None


STRATEGIES: Tuple[Strategy, ...] = (_raw_in_array, _string_in_array, _plain_string)


def extract_field(item: object, field: str) -> Extraction:
    """Read ``field`` from an upstream hit using the ordered :data:`STRATEGIES`."""
    if not isinstance(item, Mapping):
        return Extraction.failure(f"hit is {type(item).__name__}, not an object")
    if field not in item:
        return Extraction.failure(f"missing '{field}'")
    candidate = item[field]
    for strategy in STRATEGIES:
        value = strategy(candidate)
        if value is not None:
            return Extraction.success(value)
    return Extraction.failure(f"unsupported shape for '{field}': {type(candidate).__name__}")


@dataclass(frozen=True, slots=True)
class Hit:
    """Title and relative display URL pulled from one upstream result item."""

    title: str
    display_url: str


@dataclass(frozen=True, slots=True)
class HitExtraction:
    """Outcome of reading a whole hit: the :class:`Hit` or why it was skipped."""

    hit: Hit | None = None
    reason: str | None = None


def extract_hit(item: object) -> HitExtraction:
    """Read title and display URL from ``item``.

    Empty strings count as unusable so the widget never renders blank rows.
    """
    title = extract_field(item, TITLE_FIELD)
    if not title.ok:
        return HitExtraction(reason=title.reason)
    display_url = extract_field(item, DISPLAY_URL_FIELD)
    if not display_url.ok:
        return HitExtraction(reason=display_url.reason)
    if not title.value or not display_url.value:
        return HitExtraction(reason="empty title or display url")
    return HitExtraction(hit=Hit(title=title.value, display_url=display_url.value))


__all__ = [
    "TITLE_FIELD",
    "DISPLAY_URL_FIELD",
    "Extraction",
    "STRATEGIES",
    "extract_field",
    "Hit",
    "HitExtraction",
    "extract_hit",
]
