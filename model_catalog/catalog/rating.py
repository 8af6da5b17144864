from __future__ import annotations

from .config import DEFAULT_SCALE_CONFIG, ScaleConfig
from .diagnostics import record_fallback
from .models import RatingTier


def _tier_text(tier: RatingTier | str | None) -> str:
    if isinstance(tier, RatingTier):
        return tier.value
    return tier if isinstance(tier, str) else ""


def score_of(tier: RatingTier | str | None, config: ScaleConfig = DEFAULT_SCALE_CONFIG) -> int:
    """Map a rating tier to its 0-100 score. Unknown tiers score 0."""
    score = config.tier_scores.get(_tier_text(tier))
    if score is None:
        record_fallback("unknown_tier", tier)
        return 0
    return score


def is_premium(tier: RatingTier | str | None) -> bool:
    return _tier_text(tier).startswith("S")


def tier_class(tier: RatingTier | str | None) -> str:
    """Coarse grouping used for badges: premium, high, standard or low."""
    text = _tier_text(tier)
    if text.startswith("S"):
        return "premium"
    if text.startswith("A"):
        return "high"
    if text == "B":
        return "standard"
    return "low"
