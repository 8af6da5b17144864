from __future__ import annotations

from collections.abc import Sequence

from .diagnostics import record_fallback
from .models import TIER_ORDER, FilterCriteria, ModelRecord


def _matches_search(record: ModelRecord, needle: str) -> bool:
    if needle in record.username.casefold():
        return True
    if record.display_name and needle in record.display_name.casefold():
        return True
    return any(needle in tag.casefold() for tag in record.tags)


def _has_all_tags(record: ModelRecord, wanted_lower: list[str]) -> bool:
    record_tags = {tag.casefold() for tag in record.tags}
    return all(tag in record_tags for tag in wanted_lower)


def filter_models(
    records: Sequence[ModelRecord],
    criteria: FilterCriteria | None = None,
) -> list[ModelRecord]:
    """
    Return the records passing every active predicate, in input order.

    Blank or missing criteria fields impose no constraint. An unrecognised
    rating tier is ignored rather than matching nothing.
    """
    if criteria is None:
        return list(records)

    # Whitespace-only search is blank; otherwise the text is matched as typed
    search = criteria.search or ""
    needle = search.casefold() if search.strip() else ""

    rating_tier = criteria.rating_tier or None
    if rating_tier is not None and rating_tier not in TIER_ORDER:
        record_fallback("unknown_filter_tier", rating_tier)
        rating_tier = None

    # Pre-lowercase requested tags once
    wanted_tags = [t.strip().casefold() for t in criteria.tags if t and t.strip()]

    result: list[ModelRecord] = []
    for record in records:
        if needle and not _matches_search(record, needle):
            continue
        if rating_tier is not None and record.ratings.overall.value != rating_tier:
            continue
        if wanted_tags and not _has_all_tags(record, wanted_tags):
            continue
        if criteria.min_recordings is not None and record.recordings < criteria.min_recordings:
            continue
        if criteria.prospect_only is not None and record.prospect != criteria.prospect_only:
            continue
        result.append(record)
    return result
