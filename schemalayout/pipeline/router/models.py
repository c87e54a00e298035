"""Router output dataclasses and configuration constants."""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import LineString

from schemalayout.pipeline.circuit.models import ConnectionEdge
from schemalayout.pipeline.config import LAYOUT_RULES


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class RoutedConnection:
    """A wire routed as an orthogonal polyline between two pin coordinates."""

    connection: ConnectionEdge
    path: tuple[tuple[float, float], ...]    # >= 2 waypoints, source first

    @property
    def start(self) -> tuple[float, float]:
        return self.path[0]

    @property
    def end(self) -> tuple[float, float]:
        return self.path[-1]

    @property
    def segments(self) -> list[tuple[tuple[float, float], tuple[float, float]]]:
        return list(zip(self.path, self.path[1:]))

    @property
    def length(self) -> float:
        """Total wire length along the polyline."""
        return LineString(self.path).length


@dataclass
class RoutingResult:
    """Every connection routed, in connection order, ready for the renderer."""

    connections: list[RoutedConnection]


# ── Router configuration ──────────────────────────────────────────
#
# Tolerance comes from the shared pipeline config
# (schemalayout.pipeline.config.LAYOUT_RULES).

ROUTE_TOLERANCE = LAYOUT_RULES.route_tolerance
