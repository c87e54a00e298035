"""Main placement engine — single-pass, declaration-order placer."""

from __future__ import annotations

import logging

from schemalayout.catalog.models import GeometryRegistry
from schemalayout.pipeline.circuit.models import (
    Circuit, ComponentInstance, ConnectionEdge, Rotation,
)
from schemalayout.pipeline.config import LAYOUT_RULES, LayoutRules

from .models import PositionedComponent, FullPlacement
from .nets import build_adjacency, resolved_neighbor_positions


log = logging.getLogger(__name__)


def place(
    components: list[ComponentInstance],
    connections: list[ConnectionEdge],
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> dict[str, tuple[float, float]]:
    """Assign one absolute position to every component.

    1. Components with an explicit position keep it verbatim.
    2. The rest are visited once, in declaration order.  A component
       with already-placed neighbours goes to the mean of their
       positions plus ``rules.neighbor_offset`` on both axes; one
       without goes to the next fallback grid cell, indexed by the
       number of components placed so far.

    Neighbours placed *later* in the pass never move an earlier
    component, so the result depends on declaration order; the same
    order always yields the same coordinates.  Overlap is not
    prevented.

    Parameters
    ----------
    components : list[ComponentInstance]
        Components in declaration order.
    connections : list[ConnectionEdge]
        Wires; only their instance ids matter here.
    rules : LayoutRules
        Spacing constants (default ``LAYOUT_RULES``).

    Returns
    -------
    dict[str, tuple[float, float]]
        instance_id -> (x, y), one entry per component.
    """
    resolved: dict[str, tuple[float, float]] = {}

    # ── 1. Explicit positions ──────────────────────────────────────
    for ci in components:
        if ci.position is not None:
            resolved[ci.instance_id] = (ci.position[0], ci.position[1])

    adjacency = build_adjacency(connections)

    # ── 2. Auto-place the rest, strictly in declaration order ─────
    for ci in components:
        if ci.instance_id in resolved:
            continue

        neighbours = resolved_neighbor_positions(ci.instance_id, adjacency, resolved)
        if neighbours:
            n = len(neighbours)
            x = sum(p[0] for p in neighbours) / n + rules.neighbor_offset
            y = sum(p[1] for p in neighbours) / n + rules.neighbor_offset
            log.debug("Placed %s near %d neighbour(s) at (%.1f, %.1f)",
                      ci.instance_id, n, x, y)
        else:
            x, y = rules.grid_cell_origin(len(resolved))
            log.debug("Placed %s on grid cell %d at (%.1f, %.1f)",
                      ci.instance_id, len(resolved), x, y)

        resolved[ci.instance_id] = (x, y)

    return resolved


def place_components(
    circuit: Circuit,
    registry: GeometryRegistry,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> FullPlacement:
    """Place every component of *circuit* and attach footprint geometry.

    Raises
    ------
    UnknownComponentType
        If the registry has no template for a component's kind.
    InvalidRotation
        If a component carries a rotation outside the quarter turns.
    """
    positions = place(circuit.components, circuit.connections, rules=rules)

    placed: list[PositionedComponent] = []
    for ci in circuit.components:
        template = registry.lookup(ci.kind)
        x, y = positions[ci.instance_id]
        placed.append(PositionedComponent(
            instance=ci,
            x=x, y=y,
            width=template.width,
            height=template.height,
            rotation=Rotation.parse(ci.rotation),
        ))

    n_auto = sum(1 for pc in placed if pc.auto_placed)
    log.info("Placed %d components (%d explicit, %d auto)",
             len(placed), len(placed) - n_auto, n_auto)

    return FullPlacement(components=placed)
