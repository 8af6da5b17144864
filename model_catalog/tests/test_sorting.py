from __future__ import annotations

import pytest

from model_catalog.catalog.diagnostics import get_fallback_stats
from model_catalog.catalog.sorting import (
    SortDirection,
    SortKey,
    resolve_direction,
    resolve_sort_key,
    sort_models,
)


def _names(records):
    return [r.username for r in records]


def test_price_ascending(scenario_roster):
    result = sort_models(scenario_roster, "price", "ascending")
    assert [r.pricing.rate for r in result] == [10, 20, 40]


def test_default_is_rating_descending(scenario_roster):
    shuffled = [scenario_roster[2], scenario_roster[0], scenario_roster[1]]
    assert _names(sort_models(shuffled)) == ["alpha", "bravo", "charlie"]


def test_sort_does_not_mutate_input(scenario_roster):
    before = list(scenario_roster)
    result = sort_models(scenario_roster, SortKey.price)
    assert scenario_roster == before
    assert result is not scenario_roster


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_ties_keep_input_order_in_both_directions(make_record, direction):
    roster = [
        make_record("first", "A", 30),
        make_record("low", "A", 10),
        make_record("second", "A", 30),
        make_record("third", "A", 30),
    ]
    result = _names(sort_models(roster, "price", direction))
    tied = [n for n in result if n != "low"]
    assert tied == ["first", "second", "third"]


def test_rating_ties_stable_descending(make_record):
    roster = [make_record("a", "B"), make_record("b", "S"), make_record("c", "B")]
    assert _names(sort_models(roster, "rating", "desc")) == ["b", "a", "c"]


def test_sort_is_idempotent(scenario_roster):
    for key in SortKey:
        for direction in SortDirection:
            once = sort_models(scenario_roster, key, direction)
            assert sort_models(once, key, direction) == once


def test_name_sort_uses_display_name_case_insensitively(make_record):
    roster = [
        make_record("zed", display_name="amber"),
        make_record("Bella"),
        make_record("carla"),
    ]
    assert _names(sort_models(roster, "name")) == ["zed", "Bella", "carla"]


def test_recent_treats_missing_timestamp_as_oldest(make_record):
    roster = [
        make_record("undated"),
        make_record("new", added_at="2024-03-01T00:00:00Z"),
        make_record("old", added_at="2023-01-01T00:00:00Z"),
    ]
    assert _names(sort_models(roster, "recent")) == ["new", "old", "undated"]
    assert _names(sort_models(roster, "recent", "asc")) == ["undated", "old", "new"]


def test_missing_price_sorts_as_zero(make_record):
    roster = [make_record("paid", rate=5), make_record("unpriced", rate=None)]
    assert _names(sort_models(roster, "price", "asc")) == ["unpriced", "paid"]


def test_recordings_default_descending(scenario_roster):
    assert _names(sort_models(scenario_roster, "recordings")) == ["alpha", "charlie", "bravo"]


def test_unknown_key_falls_back_to_rating_descending(scenario_roster):
    shuffled = list(reversed(scenario_roster))
    result = sort_models(shuffled, "popularity", "asc")
    assert _names(result) == ["alpha", "bravo", "charlie"]
    assert get_fallback_stats()["by_kind"]["unknown_sort_key"] == 1


def test_key_aliases():
    assert resolve_sort_key("recs") is SortKey.recordings
    assert resolve_sort_key("added") is SortKey.recent
    assert resolve_sort_key("overall") is SortKey.rating
    assert resolve_sort_key(" Price ") is SortKey.price
    assert resolve_sort_key(None) is SortKey.rating


def test_direction_resolution():
    assert resolve_direction(None, SortKey.name) is SortDirection.asc
    assert resolve_direction(None, SortKey.rating) is SortDirection.desc
    assert resolve_direction("descending", SortKey.name) is SortDirection.desc
    assert resolve_direction("sideways", SortKey.price) is SortDirection.asc
    assert get_fallback_stats()["by_kind"]["unknown_sort_direction"] == 1


def test_name_sort_folds_accents(make_record):
    roster = [
        make_record("u1", display_name="zoe"),
        make_record("u2", display_name="Émilie"),
        make_record("u3", display_name="adam"),
    ]
    result = sort_models(roster, "name", "asc")
    assert [r.name for r in result] == ["adam", "Émilie", "zoe"]


def test_name_sort_accented_and_plain_spellings_are_adjacent(make_record):
    roster = [
        make_record("u1", display_name="Zoë"),
        make_record("u2", display_name="Bruno"),
        make_record("u3", display_name="Zoe"),
        make_record("u4", display_name="Ana"),
    ]
    result = sort_models(roster, "name", "asc")
    assert [r.name for r in result] == ["Ana", "Bruno", "Zoe", "Zoë"]
