from __future__ import annotations

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, List

import pandas as pd
from pydantic import ValidationError

from ..catalog.models import TIER_ORDER, ModelRecord
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

RATING_AXES: List[str] = ["overall", "face", "body", "ass", "boobs", "vibe", "production"]

# Bracket shorthand codes, e.g. "[O:S+] [F:S] [B:A]"
STRUCTURED_NOTE_CODES: dict[str, str] = {
    "O": "overall",
    "F": "face",
    "B": "body",
    "A": "ass",
    "BB": "boobs",
    "V": "vibe",
    "P": "production",
}

_STRUCTURED_NOTE_RE = re.compile(r"\[\s*([A-Z]{1,2})\s*:\s*(S\+\+|S\+|S|A\+|A|B|C|D)\s*\]")
_PVT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:/\s*(\d+))?\s*$")

_TRUE_VALUES = {"true", "yes", "y", "1"}
_FALSE_VALUES = {"false", "no", "n", "0"}


def _parse_pvt(raw: str | None) -> tuple[float | None, int | None]:
    """Split a private-show string such as "44/10" into (rate, minimum)."""
    if not raw:
        return None, None
    match = _PVT_RE.match(raw)
    if not match:
        return None, None
    rate = float(match.group(1))
    minimum = int(match.group(2)) if match.group(2) else None
    return rate, minimum


def _parse_structured_notes(raw: str | None) -> dict[str, str]:
    if not raw:
        return {}
    ratings: dict[str, str] = {}
    for code, tier in _STRUCTURED_NOTE_RE.findall(raw):
        axis = STRUCTURED_NOTE_CODES.get(code)
        if axis and axis not in ratings:
            ratings[axis] = tier
    return ratings


def _parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def _split_tags(raw: str | None) -> list[str]:
    """Comma-separated tags, de-duplicated case-insensitively keeping the first spelling."""
    if not raw:
        return []
    seen: set[str] = set()
    tags: list[str] = []
    for part in raw.split(","):
        tag = part.strip()
        if tag and tag.casefold() not in seen:
            seen.add(tag.casefold())
            tags.append(tag)
    return tags


def _to_number(raw: str | None) -> float | None:
    """Parse a finite number; blanks, junk, nan and inf give None."""
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _normalize_tier(raw: str | None) -> str | None:
    if not raw:
        return None
    value = raw.strip().upper()
    return value if value in TIER_ORDER else None


def _row_to_entry(row: dict[str, str | None], config: IngestionConfig) -> dict[str, Any]:
    """Map one raw export row (already column-resolved) into a ModelRecord payload."""
    structured = _parse_structured_notes(row.get("structured_notes"))
    ratings: dict[str, str | None] = {}
    for axis in RATING_AXES:
        # Explicit columns win over the bracket shorthand
        ratings[axis] = _normalize_tier(row.get(axis)) or structured.get(axis)

    rate, minimum = _parse_pvt(row.get("pvt"))
    explicit_rate = _to_number(row.get("pvt_rate"))
    explicit_min = _to_number(row.get("pvt_min"))
    if explicit_rate is not None:
        rate = explicit_rate
    if explicit_min is not None:
        minimum = int(explicit_min)

    recordings = _to_number(row.get("recordings"))
    last_updated = row.get("last_updated") or None

    notes = []
    if row.get("notes"):
        notes.append({"time": last_updated, "note": row["notes"], "source": "import"})

    return {
        "username": (row.get("username") or "").strip(),
        "display_name": row.get("display_name") or None,
        "site": row.get("site") or config.default_site,
        "ratings": ratings,
        "pricing": {
            "rate": rate,
            "minimum": minimum,
            "secondary_rate": row.get("toy") or None,
            "toy_costs": [c.strip() for c in (row.get("toy_costs") or "").split(";") if c.strip()],
        },
        "tags": _split_tags(row.get("tags")),
        "notes": notes,
        "recordings": int(recordings) if recordings is not None else 0,
        "prospect": bool(_parse_bool(row.get("prospect"))),
        "auto_record": bool(_parse_bool(row.get("auto_record"))),
        "added_at": row.get("added_at") or None,
        "last_updated": last_updated,
        "structured_notes": row.get("structured_notes") or None,
    }


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the roster ingestion pipeline.

    Steps:
    - Read the raw crawler export (CSV).
    - Map raw fields into the canonical ModelRecord schema.
    - Reject rows that do not validate.
    - Persist the accepted records as JSON for the API.
    """

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    df = pd.read_csv(config.raw_export_path, dtype=str, keep_default_na=False)

    # These mappings are defensive so that minor column naming differences do not break ingestion.
    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    column_candidates: dict[str, List[str]] = {
        "username": ["username", "user", "handle"],
        "display_name": ["display_name", "displayName", "name"],
        "site": ["site"],
        "pvt": ["pvt", "private"],
        "pvt_rate": ["pvt_rate", "rate"],
        "pvt_min": ["pvt_min", "minimum"],
        "toy": ["toy", "toy_rate"],
        "toy_costs": ["toy_costs", "toyCosts"],
        "tags": ["tags"],
        "recordings": ["recordings", "recs"],
        "auto_record": ["auto_record", "autoRecord"],
        "prospect": ["prospect"],
        "added_at": ["added_at", "addedAt"],
        "last_updated": ["last_updated", "lastUpdated"],
        "structured_notes": ["structured_notes", "structuredNotes"],
        "notes": ["notes", "note"],
    }
    for axis in RATING_AXES:
        column_candidates[axis] = [axis, f"{axis}_rating", f"rating_{axis}"]
    resolved = {field: _first_present(cands) for field, cands in column_candidates.items()}

    accepted: list[ModelRecord] = []
    seen: set[str] = set()
    rejected = 0
    for raw_row in df.to_dict(orient="records"):
        row = {
            field: (str(raw_row[col]).strip() if col else None)
            for field, col in resolved.items()
        }
        entry = _row_to_entry(row, config)
        try:
            record = ModelRecord.model_validate(entry)
        except ValidationError as exc:
            rejected += 1
            logger.warning(
                "Rejecting row for %r: %d validation error(s)",
                entry["username"],
                exc.error_count(),
            )
            continue
        if record.username.casefold() in seen:
            rejected += 1
            logger.warning("Rejecting duplicate row for %r", record.username)
            continue
        seen.add(record.username.casefold())
        accepted.append(record)

    if rejected:
        logger.warning("Ingestion rejected %d of %d rows", rejected, len(df))

    # Write processed JSON
    output_path = config.processed_path
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump([r.model_dump(mode="json") for r in accepted], fh, indent=2)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Roster saved to: {path}")
