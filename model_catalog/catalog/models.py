from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RatingTier(str, Enum):
    s_plus_plus = "S++"
    s_plus = "S+"
    s = "S"
    a_plus = "A+"
    a = "A"
    b = "B"
    c = "C"
    d = "D"


# Highest first
TIER_ORDER: list[str] = [t.value for t in RatingTier]


class Ratings(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall: RatingTier
    face: RatingTier
    body: RatingTier
    ass: RatingTier
    boobs: RatingTier
    vibe: RatingTier
    production: RatingTier


class Pricing(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float | None = Field(default=None, ge=0.0, description="Cost per minute")
    minimum: int | None = Field(default=None, ge=0, description="Minimum billable minutes")
    secondary_rate: str | None = Field(default=None, description='e.g. "2/1low" or "1tk/5sec"')
    toy_costs: list[str] = Field(default_factory=list)


class Note(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime
    note: str
    source: str | None = None
    url: str | None = None


class TipMenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: float = Field(..., ge=0.0)
    description: str | None = None


class Review(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str | None = None
    rating: float | None = None
    text: str
    date: str | None = None


class EnrichedProfile(BaseModel):
    """Details scraped from the public profile page; every field is optional."""

    model_config = ConfigDict(frozen=True)

    # Demographics
    name: str | None = None
    age: int | str | None = None
    origin: str | None = Field(default=None, description='e.g. "CO" or "Colombia"')
    languages: list[str] = Field(default_factory=list)

    # Appearance
    body_type: str | None = None
    ethnicity: str | None = None
    hair: str | None = None
    eye_color: str | None = None
    specifics: list[str] = Field(default_factory=list)

    # Personality
    subculture: str | None = None
    interests: list[str] = Field(default_factory=list)

    # Pricing as shown on the profile page
    pvt_rate: str | None = None
    pvt_min: str | None = None
    toy_costs: list[str] = Field(default_factory=list)

    tip_menu: list[TipMenuItem] = Field(default_factory=list)
    rating_out_of_5: float | str | None = None
    reviews: list[Review] = Field(default_factory=list)

    social_links: list[str] = Field(default_factory=list)
    avatar_url: str | None = None
    cover_url: str | None = None
    profile_url: str | None = None
    welcome_text: str | None = None

    last_crawled: datetime | None = None
    crawl_status: Literal["ok", "error", "skipped"] | None = None


class TagCategories(BaseModel):
    model_config = ConfigDict(frozen=True)

    appearance: list[str] = Field(default_factory=list)
    body_parts: list[str] = Field(default_factory=list)
    personality: list[str] = Field(default_factory=list)
    value: list[str] = Field(default_factory=list)
    special: list[str] = Field(default_factory=list)


class ValueTier(str, Enum):
    budget = "budget"
    standard = "standard"
    premium = "premium"
    luxury = "luxury"


class ModelRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    display_name: str | None = None
    site: str = ""
    ratings: Ratings
    pricing: Pricing = Field(default_factory=Pricing)
    tags: list[str] = Field(default_factory=list)
    tag_categories: TagCategories | None = None
    notes: list[Note] = Field(default_factory=list)
    recordings: int = Field(default=0, ge=0)
    prospect: bool = False
    auto_record: bool = False
    added_at: datetime | None = None
    last_updated: datetime
    structured_notes: str | None = Field(
        default=None, description="Bracket shorthand, e.g. [O:S+] [F:S] [B:A]"
    )
    enriched_profile: EnrichedProfile | None = None

    @property
    def name(self) -> str:
        """Display name, falling back to the username."""
        return self.display_name or self.username


class FilterCriteria(BaseModel):
    search: str | None = None
    rating_tier: str | None = None
    tags: list[str] = Field(default_factory=list)
    min_recordings: int | None = None
    prospect_only: bool | None = None


class TopRecordedModel(BaseModel):
    username: str
    count: int


class RecordingStats(BaseModel):
    total_recordings: int
    average_per_model: float
    auto_record_enabled: int
    top_recorded_models: list[TopRecordedModel]


class DashboardSummary(BaseModel):
    total_models: int
    average_score: float
    rating_distribution: dict[str, int]
    top_tags: dict[str, int]
    pricing_buckets: dict[str, int]
    recording_stats: RecordingStats


class DashboardData(BaseModel):
    generated_at: datetime
    summary: DashboardSummary
    top50: list[ModelRecord]
    models: list[ModelRecord]
    prospects: list[ModelRecord]
    enriched_profiles: dict[str, EnrichedProfile] = Field(default_factory=dict)


class ModelCard(BaseModel):
    username: str
    site: str
    name: str
    avatar_url: str | None = None
    age: int | str | None = None
    origin: str | None = None
    rating: RatingTier
    tier_class: str
    is_premium: bool
    value_score: int
    is_value_deal: bool
    value_tier: ValueTier
    recordings: int
    pricing: Pricing
    ratings: Ratings
    tags: list[str]
    tip_menu: list[TipMenuItem] = Field(default_factory=list)
    recent_notes: list[str]
    review_snippets: list[str] = Field(default_factory=list)
    prospect: bool


class ModelListResponse(BaseModel):
    models: list[ModelRecord]
    total: int


class CardListResponse(BaseModel):
    cards: list[ModelCard]


class TagCount(BaseModel):
    tag: str
    count: int


class TagsResponse(BaseModel):
    categories: dict[str, list[str]] = Field(default_factory=dict)
    recent: list[str] = Field(default_factory=list)
    popular: list[TagCount]
