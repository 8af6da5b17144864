from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

DEFAULT_TIER_SCORES: dict[str, int] = {
    "S++": 100,
    "S+": 95,
    "S": 88,
    "A+": 82,
    "A": 75,
    "B": 65,
    "C": 50,
    "D": 35,
}


@dataclass(frozen=True)
class ScaleConfig:
    """
    Scoring constants shared by the rating, value, sort and aggregation code.

    Pass an alternate instance to any catalog operation to swap the scale.
    """

    tier_scores: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_TIER_SCORES))
    value_threshold: float = float(os.getenv("VALUE_THRESHOLD", "30"))
    top_recorded_limit: int = 5
    top_tags_limit: int = 8
    card_tag_limit: int = 4
    recent_notes_limit: int = 3
    tip_menu_preview_limit: int = 2
    review_snippet_limit: int = 2
    recent_tags_limit: int = 10
    # budget <= 25 < standard < 50 <= premium < 75 <= luxury
    value_tier_bounds: tuple[float, float, float] = (25.0, 50.0, 75.0)
    dashboard_top_limit: int = 50


@dataclass(frozen=True)
class StoreConfig:
    roster_path: Path = Path(
        os.getenv(
            "ROSTER_PATH",
            str(Path(__file__).resolve().parent.parent / "data" / "processed" / "roster.json"),
        )
    )


DEFAULT_SCALE_CONFIG = ScaleConfig()
DEFAULT_STORE_CONFIG = StoreConfig()
