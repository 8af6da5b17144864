from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .models import ModelRecord

logger = logging.getLogger(__name__)

_roster: tuple[ModelRecord, ...] | None = None
_roster_path: Path | None = None


def _validate(entries: Iterable[ModelRecord | dict[str, Any]]) -> tuple[ModelRecord, ...]:
    records: list[ModelRecord] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        try:
            record = ModelRecord.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping invalid roster entry #%d", i, exc_info=True)
            continue
        key = record.username.casefold()
        if key in seen:
            logger.warning("Skipping duplicate roster entry for %s", record.username)
            continue
        seen.add(key)
        records.append(record)
    return tuple(records)


def _load(config: StoreConfig) -> tuple[ModelRecord, ...]:
    if not config.roster_path.exists():
        logger.warning("Roster file %s not found, serving an empty roster", config.roster_path)
        return ()
    with config.roster_path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    # Accept either a bare list or {"models": [...]}
    if isinstance(raw, dict):
        raw = raw.get("models", [])
    return _validate(raw)


def get_roster(config: StoreConfig | None = None) -> tuple[ModelRecord, ...]:
    """
    Return the in-memory roster snapshot, loading it on first call.

    Without a config, whatever snapshot is installed is served (the default
    file is loaded if none is). An explicit config reloads when its path
    differs from the one currently loaded.
    """
    global _roster, _roster_path
    if config is None:
        if _roster is None:
            _roster = _load(DEFAULT_STORE_CONFIG)
            _roster_path = DEFAULT_STORE_CONFIG.roster_path
        return _roster
    if _roster is None or _roster_path != config.roster_path:
        _roster = _load(config)
        _roster_path = config.roster_path
    return _roster


def set_roster(records: Iterable[ModelRecord | dict[str, Any]]) -> tuple[ModelRecord, ...]:
    """Install a roster snapshot directly, validating plain dicts."""
    global _roster, _roster_path
    _roster = _validate(records)
    _roster_path = None
    return _roster


def reload_roster() -> None:
    global _roster, _roster_path
    _roster = None
    _roster_path = None


def find_model(username: str, config: StoreConfig | None = None) -> ModelRecord | None:
    wanted = username.casefold()
    for record in get_roster(config):
        if record.username.casefold() == wanted:
            return record
    return None
