from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Query

from .catalog.aggregator import recent_tags, summarize, tag_categories, top_tags
from .catalog.cards import build_card, select_cards
from .catalog.config import DEFAULT_SCALE_CONFIG
from .catalog.data_store import find_model, get_roster
from .catalog.diagnostics import get_fallback_stats
from .catalog.filtering import filter_models
from .catalog.models import (
    TIER_ORDER,
    CardListResponse,
    DashboardData,
    DashboardSummary,
    FilterCriteria,
    ModelListResponse,
    ModelRecord,
    TagCount,
    TagsResponse,
)
from .catalog.sorting import SortKey, sort_models

app = FastAPI(title="Model Catalog API", version="1.0.0")


def catalog_query(
    search: str | None = None,
    rating: str | None = None,
    tags: str | None = Query(default=None, description="Comma-separated tags, all required"),
    min_recs: int | None = Query(default=None, alias="minRecs"),
    prospect: bool | None = None,
) -> FilterCriteria:
    return FilterCriteria(
        search=search,
        rating_tier=rating,
        tags=[t.strip() for t in tags.split(",") if t.strip()] if tags else [],
        min_recordings=min_recs,
        prospect_only=prospect,
    )


def _select(
    criteria: FilterCriteria, sort: str | None, order: str | None
) -> list[ModelRecord]:
    filtered = filter_models(get_roster(), criteria)
    return sort_models(filtered, sort, order, DEFAULT_SCALE_CONFIG)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    labels: dict[str, str] = {}
    for record in get_roster():
        for tag in record.tags:
            labels.setdefault(tag.casefold(), tag)
    return {
        "tiers": TIER_ORDER,
        "sort_keys": [k.value for k in SortKey],
        "tags": sorted(labels.values(), key=str.casefold),
    }


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/models", response_model=ModelListResponse)
def list_models(
    criteria: FilterCriteria = Depends(catalog_query),
    sort: str | None = None,
    order: str | None = None,
) -> ModelListResponse:
    models = _select(criteria, sort, order)
    return ModelListResponse(models=models, total=len(models))


@app.get("/models/{username}", response_model=ModelRecord)
def get_model(username: str) -> ModelRecord:
    record = find_model(username)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Model {username!r} not found")
    return record


@app.get("/cards", response_model=CardListResponse)
def list_cards(
    criteria: FilterCriteria = Depends(catalog_query),
    sort: str | None = None,
    order: str | None = None,
) -> CardListResponse:
    models = _select(criteria, sort, order)
    return CardListResponse(cards=[build_card(m, DEFAULT_SCALE_CONFIG) for m in models])


@app.get("/tags", response_model=TagsResponse)
def tags(limit: int | None = Query(default=None, ge=1)) -> TagsResponse:
    roster = get_roster()
    summary = summarize(roster, DEFAULT_SCALE_CONFIG)
    return TagsResponse(
        categories=tag_categories(roster),
        recent=recent_tags(roster, config=DEFAULT_SCALE_CONFIG),
        popular=[
            TagCount(tag=tag, count=count)
            for tag, count in top_tags(summary.top_tags, limit, DEFAULT_SCALE_CONFIG)
        ],
    )


# ── Dashboard endpoints ──────────────────────────────────────────────────


@app.get("/analytics/summary", response_model=DashboardSummary)
def analytics_summary() -> DashboardSummary:
    return summarize(get_roster(), DEFAULT_SCALE_CONFIG)


@app.get("/dashboard", response_model=DashboardData)
def dashboard() -> DashboardData:
    roster = list(get_roster())
    by_rating = sort_models(roster, SortKey.rating, config=DEFAULT_SCALE_CONFIG)
    return DashboardData(
        generated_at=datetime.now(timezone.utc),
        summary=summarize(roster, DEFAULT_SCALE_CONFIG),
        top50=by_rating[: DEFAULT_SCALE_CONFIG.dashboard_top_limit],
        models=roster,
        prospects=filter_models(roster, FilterCriteria(prospect_only=True)),
        enriched_profiles={
            r.username: r.enriched_profile for r in roster if r.enriched_profile is not None
        },
    )


@app.get("/dashboard/cards", response_model=CardListResponse)
def dashboard_cards(
    username: str | None = Query(default=None, description="Comma-separated usernames"),
) -> CardListResponse:
    usernames = [u.strip() for u in username.split(",") if u.strip()] if username else []
    return CardListResponse(cards=select_cards(get_roster(), usernames, DEFAULT_SCALE_CONFIG))


@app.get("/diagnostics")
def diagnostics() -> dict:
    return get_fallback_stats()
