"""Grid state — sparse tile classifications plus a pre-constraint overlay.

A :class:`GridState` holds two independent mappings from axial
coordinate to :class:`~models.TileType`:

- ``grid`` — the current layout, rebuilt by :meth:`GridState.generate_layout`
  and wiped by :meth:`GridState.clear`;
- ``pre_constraints`` — caller-supplied overrides that survive grid
  clears and are only changed by the explicit set/clear calls.

Every operation takes the instance lock, so one state object can be
shared between threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Optional

from .models import Hex, TileRecord, TileStats, TileType

log = logging.getLogger(__name__)

ABSENT = -1
"""Tile code reported for cells with no classification."""


class GridState:
    """Thread-safe owner of the grid and its pre-constraints."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._grid: Dict[Hex, TileType] = {}
        self._pre_constraints: Dict[Hex, TileType] = {}

    # ── layout ──────────────────────────────────────────────────────

    def clear(self) -> None:
        """Wipe the grid.  Pre-constraints are kept."""
        with self._lock:
            self._grid.clear()

    def generate_layout(self) -> None:
        """Rebuild the grid from the current pre-constraints."""
        with self._lock:
            self._grid.clear()
            self._grid.update(self._pre_constraints)

    # ── pre-constraints ─────────────────────────────────────────────

    def set_pre_constraint(self, q: int, r: int, code: object) -> bool:
        """Pin ``(q, r)`` to tile *code*; False if the code is unknown."""
        tile_type = TileType.from_code(code)
        if tile_type is None:
            log.debug("Rejected pre-constraint at (%d, %d): unknown tile code %r", q, r, code)
            return False
        with self._lock:
            self._pre_constraints[(q, r)] = tile_type
        return True

    def set_pre_constraints(self, records: Iterable[TileRecord]) -> int:
        """Apply records in order (later ones win); return the count applied."""
        with self._lock:
            applied = 0
            for rec in records:
                self._pre_constraints[rec.coord] = rec.tile_type
                applied += 1
            return applied

    def replace_pre_constraints(self, records: Iterable[TileRecord]) -> int:
        """Swap in *records* as the only pre-constraints and regenerate the grid.

        Runs as one locked step, so concurrent callers never see or
        produce a mix of two record sets.  Returns the count applied.
        """
        with self._lock:
            self._pre_constraints.clear()
            applied = self.set_pre_constraints(records)
            self.generate_layout()
            return applied

    def clear_pre_constraints(self) -> None:
        with self._lock:
            self._pre_constraints.clear()

    def pre_constraint_count(self) -> int:
        with self._lock:
            return len(self._pre_constraints)

    # ── queries ─────────────────────────────────────────────────────

    def get_tile(self, q: int, r: int) -> Optional[TileType]:
        with self._lock:
            return self._grid.get((q, r))

    def get_tile_code(self, q: int, r: int) -> int:
        """Tile code at ``(q, r)``, or :data:`ABSENT` for unset cells."""
        tile_type = self.get_tile(q, r)
        return ABSENT if tile_type is None else int(tile_type)

    def stats(self) -> TileStats:
        """Per-type counts over the grid."""
        with self._lock:
            stats = TileStats()
            for tile_type in self._grid.values():
                stats.add(tile_type)
            return stats

    def snapshot(self) -> Dict[Hex, TileType]:
        """Copy of the grid, safe to use outside the lock."""
        with self._lock:
            return dict(self._grid)

    def __len__(self) -> int:
        with self._lock:
            return len(self._grid)

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"GridState(cells={len(self._grid)}, "
                f"pre_constraints={len(self._pre_constraints)})"
            )
