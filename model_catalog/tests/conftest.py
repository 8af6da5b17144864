from __future__ import annotations

from typing import Any

import pytest

from model_catalog.catalog.data_store import reload_roster
from model_catalog.catalog.diagnostics import clear_fallbacks
from model_catalog.catalog.models import ModelRecord


def _record(
    username: str,
    overall: str = "A",
    rate: float | None = 20.0,
    **overrides: Any,
) -> ModelRecord:
    payload: dict[str, Any] = {
        "username": username,
        "ratings": {
            "overall": overall,
            "face": overall,
            "body": overall,
            "ass": overall,
            "boobs": overall,
            "vibe": overall,
            "production": overall,
        },
        "pricing": {"rate": rate, "minimum": 10},
        "last_updated": "2024-05-01T12:00:00Z",
    }
    payload.update(overrides)
    return ModelRecord.model_validate(payload)


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def scenario_roster() -> list[ModelRecord]:
    """Three records rated S, A, B priced 20, 40, 10."""
    return [
        _record("alpha", "S", 20, tags=["Blonde", "Petite"], recordings=12, auto_record=True),
        _record("bravo", "A", 40, tags=["brunette"], recordings=3, prospect=True),
        _record("charlie", "B", 10, tags=["blonde", "Tattoos"], recordings=7),
    ]


@pytest.fixture(autouse=True)
def _reset_state():
    clear_fallbacks()
    yield
    clear_fallbacks()
    reload_roster()
