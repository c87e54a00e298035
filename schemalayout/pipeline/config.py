"""Shared layout constants for the schematic pipeline.

These values describe the spacing heuristics of the placer and the
snapping tolerance of the router.  Every stage derives its module-level
constants from this single source of truth, and every engine function
accepts an optional ``rules`` override for callers that want a
different grid.

Downstream consumers may depend on the exact coordinates these defaults
produce, so changing a value here is a behavioural change.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Spacing and tolerance rules for placement and routing.

    All distances are in schematic units.
    """

    neighbor_offset: float = 50.0
    """Offset added on both axes to the mean of a component's already
    placed neighbours, so it never lands exactly on one of them."""

    grid_cell: float = 100.0
    """Side of one fallback grid cell for components with no placed
    neighbour."""

    grid_columns: int = 10
    """Cells per fallback grid row before wrapping to the next row."""

    route_tolerance: float = 1.0
    """Gaps at or below this size are not worth a routing bend."""

    # ── Derived helpers ────────────────────────────────────────────

    def grid_cell_origin(self, index: int) -> tuple[float, float]:
        """Top-left corner of the *index*-th fallback grid cell."""
        col = index % self.grid_columns
        row = index // self.grid_columns
        return (col * self.grid_cell, row * self.grid_cell)


# Shared default instance.
LAYOUT_RULES = LayoutRules()
