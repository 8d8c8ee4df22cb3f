"""JSON wire format for coordinate lists, tile records and stats.

Coordinate lists are ``[{"q": 0, "r": 0}, ...]``; tile records add a
``"tileType"`` code.  Absence of a result is the literal ``null``.

Decoding is best-effort: bad JSON or a non-array gives an empty list,
and records missing a required field are dropped.  Formal JSON Schemas
for the payloads live in ``schemas/``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import Hex, TileRecord, TileStats, TileType

log = logging.getLogger(__name__)

NULL = "null"
EMPTY = "[]"

_SEPARATORS = (",", ":")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _load_array(text: Optional[str]) -> List[Any]:
    if text is None:
        return []
    try:
        payload = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        log.debug("Dropping undecodable payload %.40r", text)
        return []
    if not isinstance(payload, list):
        return []
    return payload


# ═══════════════════════════════════════════════════════════════════
# Decoding
# ═══════════════════════════════════════════════════════════════════

def decode_coords(text: Optional[str]) -> List[Hex]:
    """Parse a coordinate list, keeping input order."""
    coords: List[Hex] = []
    dropped = 0
    for item in _load_array(text):
        if isinstance(item, dict) and _is_int(item.get("q")) and _is_int(item.get("r")):
            coords.append((item["q"], item["r"]))
        else:
            dropped += 1
    if dropped:
        log.debug("Dropped %d malformed coordinate records", dropped)
    return coords


def decode_tile_records(text: Optional[str]) -> List[TileRecord]:
    """Parse a tile-record list; records with unknown tile codes are dropped."""
    records: List[TileRecord] = []
    for item in _load_array(text):
        if not isinstance(item, dict):
            continue
        q, r = item.get("q"), item.get("r")
        tile_type = TileType.from_code(item.get("tileType"))
        if _is_int(q) and _is_int(r) and tile_type is not None:
            records.append(TileRecord(q, r, tile_type))
    return records


# ═══════════════════════════════════════════════════════════════════
# Encoding
# ═══════════════════════════════════════════════════════════════════

def coords_payload(coords: Iterable[Hex]) -> List[Dict[str, int]]:
    return [{"q": q, "r": r} for q, r in coords]


def tile_records_payload(records: Iterable[TileRecord]) -> List[Dict[str, int]]:
    return [{"q": rec.q, "r": rec.r, "tileType": int(rec.tile_type)} for rec in records]


def encode_coords(coords: Iterable[Hex]) -> str:
    return json.dumps(coords_payload(coords), separators=_SEPARATORS)


def encode_path(path: Optional[Sequence[Hex]]) -> str:
    """Encode a path, or ``null`` when there is none."""
    if path is None:
        return NULL
    return encode_coords(path)


def encode_tile_records(records: Iterable[TileRecord]) -> str:
    return json.dumps(tile_records_payload(records), separators=_SEPARATORS)


def encode_stats(stats: TileStats) -> str:
    return json.dumps(stats.to_dict(), separators=_SEPARATORS)


# ═══════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════

def validate_coord_payload(payload: Any, *, require_tile_type: bool = False) -> List[str]:
    """Check a decoded payload against the expected record structure.

    Returns a list of error messages (empty = valid).  This is a
    lightweight structural check; use the files in ``schemas/`` for
    formal validation with ``jsonschema``.
    """
    if not isinstance(payload, list):
        return ["payload must be a list"]

    errors: List[str] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            errors.append(f"Record {i}: must be an object")
            continue
        for key in ("q", "r"):
            if key not in item:
                errors.append(f"Record {i}: missing '{key}'")
            elif not _is_int(item[key]):
                errors.append(f"Record {i}: '{key}' must be an integer")
        if require_tile_type:
            if "tileType" not in item:
                errors.append(f"Record {i}: missing 'tileType'")
            elif TileType.from_code(item["tileType"]) is None:
                errors.append(f"Record {i}: unknown tileType {item['tileType']!r}")
    return errors
