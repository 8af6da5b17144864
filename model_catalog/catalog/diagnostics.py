from __future__ import annotations

import logging
import threading
from collections import Counter
from typing import Any

logger = logging.getLogger(__name__)

_fallbacks: Counter[str] = Counter()
_lock = threading.Lock()


def record_fallback(kind: str, detail: Any = None) -> None:
    """Count one silent-default hit. Never alters the fallback itself."""
    with _lock:
        _fallbacks[kind] += 1
    logger.debug("Fallback hit: %s (%r)", kind, detail)


def get_fallback_stats() -> dict[str, Any]:
    with _lock:
        by_kind = dict(_fallbacks)
    return {
        "total": sum(by_kind.values()),
        "by_kind": by_kind,
    }


def clear_fallbacks() -> None:
    with _lock:
        _fallbacks.clear()
