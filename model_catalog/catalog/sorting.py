from __future__ import annotations

import unicodedata
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from .config import DEFAULT_SCALE_CONFIG, ScaleConfig
from .diagnostics import record_fallback
from .models import ModelRecord
from .rating import score_of


def _collation_key(text: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering, raw text breaking ties."""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, text


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class SortKey(str, Enum):
    rating = "rating"
    name = "name"
    recent = "recent"
    price = "price"
    recordings = "recordings"

    def key_func(self, config: ScaleConfig = DEFAULT_SCALE_CONFIG) -> Callable[[ModelRecord], Any]:
        """Return the ascending sort key for this option."""
        if self is SortKey.rating:
            return lambda r: score_of(r.ratings.overall, config)
        if self is SortKey.name:
            return lambda r: _collation_key(r.name)
        if self is SortKey.recent:
            return lambda r: r.added_at.timestamp() if r.added_at else 0.0
        if self is SortKey.price:
            return lambda r: r.pricing.rate if r.pricing.rate is not None else 0.0
        return lambda r: r.recordings

    @property
    def default_direction(self) -> SortDirection:
        if self in (SortKey.name, SortKey.price):
            return SortDirection.asc
        return SortDirection.desc


_KEY_ALIASES: dict[str, SortKey] = {
    "overall": SortKey.rating,
    "recs": SortKey.recordings,
    "added": SortKey.recent,
}

_DIRECTION_ALIASES: dict[str, SortDirection] = {
    "ascending": SortDirection.asc,
    "descending": SortDirection.desc,
}


def _lookup_sort_key(key: SortKey | str | None) -> SortKey | None:
    if isinstance(key, SortKey):
        return key
    if key is None or not key.strip():
        return SortKey.rating
    text = key.strip().lower()
    if text in _KEY_ALIASES:
        return _KEY_ALIASES[text]
    try:
        return SortKey(text)
    except ValueError:
        return None


def resolve_sort_key(key: SortKey | str | None) -> SortKey:
    """Resolve a user-supplied key, falling back to rating."""
    sort_key = _lookup_sort_key(key)
    if sort_key is None:
        record_fallback("unknown_sort_key", key)
        return SortKey.rating
    return sort_key


def resolve_direction(direction: SortDirection | str | None, key: SortKey) -> SortDirection:
    if isinstance(direction, SortDirection):
        return direction
    if direction is None or not direction.strip():
        return key.default_direction
    text = direction.strip().lower()
    if text in _DIRECTION_ALIASES:
        return _DIRECTION_ALIASES[text]
    try:
        return SortDirection(text)
    except ValueError:
        record_fallback("unknown_sort_direction", direction)
        return key.default_direction


def sort_models(
    records: Sequence[ModelRecord],
    key: SortKey | str | None = None,
    direction: SortDirection | str | None = None,
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> list[ModelRecord]:
    """
    Return a new list ordered by ``key``; the input is left untouched.

    Equal keys keep their input order in both directions. An unknown key
    sorts by rating, descending.
    """
    sort_key = _lookup_sort_key(key)
    if sort_key is None:
        # Unknown key: the default ordering applies regardless of direction
        record_fallback("unknown_sort_key", key)
        sort_key, sort_direction = SortKey.rating, SortDirection.desc
    else:
        sort_direction = resolve_direction(direction, sort_key)

    # sorted(reverse=True) is still stable for equal keys
    return sorted(
        records,
        key=sort_key.key_func(config),
        reverse=sort_direction is SortDirection.desc,
    )
