from __future__ import annotations

import math

from .config import DEFAULT_SCALE_CONFIG, ScaleConfig
from .diagnostics import record_fallback
from .models import RatingTier, ValueTier
from .rating import score_of


def price_or_zero(price: float | None) -> float:
    """Missing prices count as free."""
    if price is None:
        record_fallback("missing_price")
        return 0.0
    return float(price)


def value_score(
    price: float | None,
    tier: RatingTier | str | None,
    config: ScaleConfig = DEFAULT_SCALE_CONFIG,
) -> int:
    """
    Blend quality and affordability into a single 0-10 score.

    Halves round up, so (88 + 82) / 20 = 8.5 scores 9.
    """
    affordability = max(0.0, 100.0 - price_or_zero(price))
    raw = (score_of(tier, config) + affordability) / 20
    return min(10, max(0, math.floor(raw + 0.5)))


def is_value_deal(price: float | None, config: ScaleConfig = DEFAULT_SCALE_CONFIG) -> bool:
    return price_or_zero(price) <= config.value_threshold


def value_tier(price: float | None, config: ScaleConfig = DEFAULT_SCALE_CONFIG) -> ValueTier:
    budget, standard, premium = config.value_tier_bounds
    value = price_or_zero(price)
    if value <= budget:
        return ValueTier.budget
    if value < standard:
        return ValueTier.standard
    if value < premium:
        return ValueTier.premium
    return ValueTier.luxury
