from __future__ import annotations

import threading

from model_catalog.catalog.diagnostics import clear_fallbacks, get_fallback_stats, record_fallback


def test_counts_by_kind():
    record_fallback("missing_price")
    record_fallback("missing_price")
    record_fallback("unknown_tier", "Z")
    stats = get_fallback_stats()
    assert stats == {"total": 3, "by_kind": {"missing_price": 2, "unknown_tier": 1}}


def test_clear():
    record_fallback("missing_price")
    clear_fallbacks()
    assert get_fallback_stats() == {"total": 0, "by_kind": {}}


def test_concurrent_hits_are_not_lost():
    def _hit():
        for _ in range(1000):
            record_fallback("unknown_sort_key")

    threads = [threading.Thread(target=_hit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert get_fallback_stats()["by_kind"]["unknown_sort_key"] == 8000
