from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence

from .config import DEFAULT_SCALE_CONFIG, ScaleConfig
from .models import (
    TIER_ORDER,
    DashboardSummary,
    ModelRecord,
    RecordingStats,
    TagCategories,
    TopRecordedModel,
)
from .rating import score_of
from .sorting import SortDirection, SortKey, sort_models

PRICE_BUCKETS = ["<=25", "26-49", ">=50"]


def _price_bucket(rate: float | None) -> str:
    value = rate or 0.0
    if value <= 25:
        return "<=25"
    if value < 50:
        return "26-49"
    return ">=50"


def _tag_histogram(records: Sequence[ModelRecord]) -> dict[str, int]:
    """Count every tag occurrence, grouping case-insensitively under the first spelling seen."""
    labels: dict[str, str] = {}
    counter: Counter[str] = Counter()
    for r in records:
        for tag in r.tags:
            cleaned = tag.strip()
            if not cleaned:
                continue
            label = labels.setdefault(cleaned.casefold(), cleaned)
            counter[label] += 1
    return dict(counter)


def summarize(
    records: Sequence[ModelRecord],
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> DashboardSummary:
    total = len(records)

    # Average score
    scores = [score_of(r.ratings.overall, config) for r in records]
    avg_score = sum(scores) / total if total else 0.0

    # Rating distribution, every tier present
    distribution = {tier: 0 for tier in TIER_ORDER}
    for r in records:
        distribution[r.ratings.overall.value] += 1

    # Pricing buckets
    buckets = {name: 0 for name in PRICE_BUCKETS}
    for r in records:
        buckets[_price_bucket(r.pricing.rate)] += 1

    # Recording stats
    total_recordings = sum(r.recordings for r in records)
    top_recorded = sorted(records, key=lambda r: r.recordings, reverse=True)
    top_recorded = top_recorded[: config.top_recorded_limit]

    return DashboardSummary(
        total_models=total,
        average_score=avg_score,
        rating_distribution=distribution,
        top_tags=_tag_histogram(records),
        pricing_buckets=buckets,
        recording_stats=RecordingStats(
            total_recordings=total_recordings,
            average_per_model=total_recordings / total if total else 0.0,
            auto_record_enabled=sum(1 for r in records if r.auto_record),
            top_recorded_models=[
                TopRecordedModel(username=r.username, count=r.recordings)
                for r in top_recorded
            ],
        ),
    )


def top_tags(
    counts: Mapping[str, int],
    limit: int | None = None,
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> list[tuple[str, int]]:
    """Return the ``limit`` most frequent tags; ties keep first-seen order."""
    n = config.top_tags_limit if limit is None else limit
    return Counter(counts).most_common(n)


def tag_categories(records: Sequence[ModelRecord]) -> dict[str, list[str]]:
    """Union of every record's categorised tags, first spelling wins."""
    categories: dict[str, list[str]] = {name: [] for name in TagCategories.model_fields}
    seen: dict[str, set[str]] = {name: set() for name in categories}
    for r in records:
        if r.tag_categories is None:
            continue
        for name in categories:
            for tag in getattr(r.tag_categories, name):
                cleaned = tag.strip()
                if cleaned and cleaned.casefold() not in seen[name]:
                    seen[name].add(cleaned.casefold())
                    categories[name].append(cleaned)
    return categories


def recent_tags(
    records: Sequence[ModelRecord],
    limit: int | None = None,
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> list[str]:
    """Distinct tags of the most recently added models, newest first."""
    n = config.recent_tags_limit if limit is None else limit
    if n <= 0:
        return []
    tags: list[str] = []
    seen: set[str] = set()
    for r in sort_models(records, SortKey.recent, SortDirection.desc, config):
        for tag in r.tags:
            cleaned = tag.strip()
            if cleaned and cleaned.casefold() not in seen:
                seen.add(cleaned.casefold())
                tags.append(cleaned)
                if len(tags) >= n:
                    return tags
    return tags
