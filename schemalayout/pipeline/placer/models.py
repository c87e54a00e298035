"""Placer output dataclasses and configuration constants."""

from __future__ import annotations

from dataclasses import dataclass

from schemalayout.catalog.models import ComponentKind
from schemalayout.pipeline.circuit.models import ComponentInstance, Rotation


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class PositionedComponent:
    """A component with a resolved absolute position, footprint and rotation."""

    instance: ComponentInstance
    x: float
    y: float
    width: float
    height: float
    rotation: Rotation

    @property
    def instance_id(self) -> str:
        return self.instance.instance_id

    @property
    def kind(self) -> ComponentKind:
        return self.instance.kind

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def auto_placed(self) -> bool:
        return self.instance.position is None


@dataclass
class FullPlacement:
    """Placement of every component, in declaration order, ready for the router."""

    components: list[PositionedComponent]

    @property
    def positions(self) -> dict[str, tuple[float, float]]:
        return {pc.instance_id: pc.position for pc in self.components}

    def get(self, instance_id: str) -> PositionedComponent | None:
        for pc in self.components:
            if pc.instance_id == instance_id:
                return pc
        return None


# ── Configuration ──────────────────────────────────────────────────

from schemalayout.pipeline.config import LAYOUT_RULES

VALID_ROTATIONS = tuple(Rotation)

# ── Derived from shared LayoutRules (schemalayout.pipeline.config) ─
# Changing LAYOUT_RULES automatically updates these.
NEIGHBOR_OFFSET = LAYOUT_RULES.neighbor_offset
GRID_CELL = LAYOUT_RULES.grid_cell
GRID_COLUMNS = LAYOUT_RULES.grid_columns
