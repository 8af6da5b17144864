from __future__ import annotations

from model_catalog.catalog.config import ScaleConfig
from model_catalog.catalog.diagnostics import get_fallback_stats
from model_catalog.catalog.models import TIER_ORDER, RatingTier
from model_catalog.catalog.rating import is_premium, score_of, tier_class


def test_score_table():
    assert [score_of(t) for t in TIER_ORDER] == [100, 95, 88, 82, 75, 65, 50, 35]


def test_scores_strictly_decrease_with_rank():
    scores = [score_of(t) for t in TIER_ORDER]
    assert all(a > b for a, b in zip(scores, scores[1:]))


def test_score_accepts_enum_members():
    assert score_of(RatingTier.a_plus) == 82


def test_unknown_tier_scores_zero_and_is_counted():
    assert score_of("Z") == 0
    assert score_of(None) == 0
    assert score_of("s") == 0
    stats = get_fallback_stats()
    assert stats["by_kind"]["unknown_tier"] == 3


def test_alternate_scale():
    cfg = ScaleConfig(tier_scores={"S": 10, "A": 5})
    assert score_of("S", cfg) == 10
    assert score_of("B", cfg) == 0


def test_is_premium():
    assert is_premium("S++")
    assert is_premium(RatingTier.s)
    assert not is_premium("A+")
    assert not is_premium(None)


def test_tier_class():
    assert tier_class("S+") == "premium"
    assert tier_class("A") == "high"
    assert tier_class("B") == "standard"
    assert tier_class("D") == "low"
