from __future__ import annotations

from collections.abc import Sequence

from .config import DEFAULT_SCALE_CONFIG, ScaleConfig
from .models import ModelCard, ModelRecord
from .rating import is_premium, tier_class
from .value import is_value_deal, price_or_zero, value_score, value_tier


def recent_notes(record: ModelRecord, limit: int) -> list[str]:
    """Newest note texts first; stored order says nothing about recency."""
    ordered = sorted(record.notes, key=lambda n: n.time.timestamp(), reverse=True)
    return [n.note for n in ordered[:limit]]


def build_card(record: ModelRecord, config: ScaleConfig = DEFAULT_SCALE_CONFIG) -> ModelCard:
    overall = record.ratings.overall
    profile = record.enriched_profile
    # Resolve a missing price once for all the price-derived fields
    rate = price_or_zero(record.pricing.rate)
    return ModelCard(
        username=record.username,
        site=record.site,
        name=record.name,
        avatar_url=profile.avatar_url if profile else None,
        age=profile.age if profile else None,
        origin=profile.origin if profile else None,
        rating=overall,
        tier_class=tier_class(overall),
        is_premium=is_premium(overall),
        value_score=value_score(rate, overall, config),
        is_value_deal=is_value_deal(rate, config),
        value_tier=value_tier(rate, config),
        recordings=record.recordings,
        pricing=record.pricing,
        ratings=record.ratings,
        tags=record.tags[: config.card_tag_limit],
        tip_menu=profile.tip_menu[: config.tip_menu_preview_limit] if profile else [],
        recent_notes=recent_notes(record, config.recent_notes_limit),
        review_snippets=(
            [r.text for r in profile.reviews[: config.review_snippet_limit]] if profile else []
        ),
        prospect=record.prospect,
    )


def select_cards(
    records: Sequence[ModelRecord],
    usernames: Sequence[str] | None = None,
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> list[ModelCard]:
    """
    Cards for the requested usernames, in request order.

    Unknown usernames are skipped; no usernames means every record in roster order.
    """
    if not usernames:
        return [build_card(r, config) for r in records]
    by_name = {r.username.casefold(): r for r in records}
    cards: list[ModelCard] = []
    seen: set[str] = set()
    for username in usernames:
        key = username.strip().casefold()
        if key in seen or key not in by_name:
            continue
        seen.add(key)
        cards.append(build_card(by_name[key], config))
    return cards
