"""Main routing engine — orthogonal "Z" routing between pin coordinates.

No search and no obstacle awareness: each wire is routed on its own
from its two endpoints.  A diagonal wire becomes three segments,
half the horizontal run, the full vertical run, then the other half
of the horizontal run.
"""

from __future__ import annotations

import logging

from schemalayout.catalog.models import GeometryRegistry
from schemalayout.pipeline.circuit.models import ConnectionEdge
from schemalayout.pipeline.config import LAYOUT_RULES, LayoutRules
from schemalayout.pipeline.placer.models import FullPlacement

from .models import RoutedConnection, RoutingResult, ROUTE_TOLERANCE
from .pins import resolve_endpoint, placement_index


log = logging.getLogger(__name__)


def route(
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    tolerance: float = ROUTE_TOLERANCE,
) -> list[tuple[float, float]]:
    """Route an orthogonal polyline from *start* to *end*.

    The first waypoint is exactly *start* and the last exactly *end*.
    Gaps no larger than *tolerance* get no bend of their own.
    """
    path = [start]
    cx, cy = start
    ex, ey = end

    # Horizontal: only to the midpoint
    if abs(ex - cx) > tolerance:
        cx = cx + (ex - cx) / 2
        path.append((cx, cy))

    # Vertical: all the way
    if abs(ey - cy) > tolerance:
        cy = ey
        path.append((cx, cy))

    # Remaining horizontal half (or the sub-tolerance remainder)
    if abs(ex - cx) > tolerance:
        path.append(end)
    elif path[-1] != end:
        path.append(end)

    if len(path) == 1:
        # start == end: keep a zero-length segment so every wire has two points
        path.append(end)

    return path


def route_connections(
    placement: FullPlacement,
    connections: list[ConnectionEdge],
    registry: GeometryRegistry,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> RoutingResult:
    """Resolve both endpoints of every connection and route between them.

    Raises
    ------
    DanglingConnection
        An endpoint names an instance that is not in the placement.
    PinNotFound / UnknownComponentType
        An endpoint names a pin its component does not have.
    """
    index = placement_index(placement)
    routed: list[RoutedConnection] = []

    for edge in connections:
        ctx = f"connection '{edge}'"
        start = resolve_endpoint(edge.source, index, registry, context=ctx)
        end = resolve_endpoint(edge.target, index, registry, context=ctx)
        path = route(start, end, tolerance=rules.route_tolerance)
        routed.append(RoutedConnection(connection=edge, path=tuple(path)))
        log.debug("Routed %s with %d waypoints", edge, len(path))

    log.info("Routed %d connections", len(routed))
    return RoutingResult(connections=routed)
