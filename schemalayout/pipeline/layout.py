"""Layout pipeline — placement, routing and nets in one call.

The renderer consumes ``layout_to_dict``: every component with its
footprint and absolute pin coordinates, every wire as a polyline, and
every net as the list of pin points it joins, so no geometry has to be
recomputed downstream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from schemalayout.catalog.models import GeometryRegistry
from schemalayout.pipeline.circuit.models import Circuit, PinRef
from schemalayout.pipeline.config import LAYOUT_RULES, LayoutRules
from schemalayout.pipeline.nets import group_nets, resolve_circuit_nets
from schemalayout.pipeline.placer import (
    FullPlacement, PositionedComponent, layout_bounds, place_components,
    placement_to_dict,
)
from schemalayout.pipeline.router import (
    RoutedConnection, RoutingResult, component_pin_positions,
    route_connections, routing_to_dict,
)
from schemalayout.pipeline.router.pins import placement_index, resolve_endpoint


log = logging.getLogger(__name__)


@dataclass
class Layout:
    """A fully resolved schematic: positions, wires and net junctions."""

    components: list[PositionedComponent]
    connections: list[RoutedConnection]
    nets: dict[str, list[tuple[float, float]]] = field(default_factory=dict)
    net_map: dict[PinRef, str] = field(default_factory=dict)

    @property
    def bounds(self) -> tuple[float, float, float, float] | None:
        """(xmin, ymin, xmax, ymax) of all footprints, or None if empty."""
        return layout_bounds(self.components)


def calculate_layout(
    circuit: Circuit,
    registry: GeometryRegistry,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> Layout:
    """Place, route and resolve nets for *circuit*.

    The first failure aborts the whole call; nothing partial is returned.

    Raises
    ------
    DanglingConnection
        A connection or net names an instance that does not exist.
    UnknownComponentType / PinNotFound
        A kind has no template, or a referenced pin is not on it.
    InvalidRotation
        A component carries a rotation outside the quarter turns.
    """
    placement = place_components(circuit, registry, rules=rules)
    routing = route_connections(
        placement, circuit.connections, registry, rules=rules)
    net_map = resolve_circuit_nets(circuit, registry)
    nets = _net_points(net_map, placement, registry)

    log.info("Layout: %d components, %d wires, %d nets",
             len(placement.components), len(routing.connections), len(nets))
    return Layout(
        components=placement.components,
        connections=routing.connections,
        nets=nets,
        net_map=net_map,
    )


def _net_points(
    net_map: dict[PinRef, str],
    placement: FullPlacement,
    registry: GeometryRegistry,
) -> dict[str, list[tuple[float, float]]]:
    index = placement_index(placement)
    return {
        net.id: [
            resolve_endpoint(ref, index, registry, context=f"net '{net.id}'")
            for ref in sorted(net.members, key=str)
        ]
        for net in group_nets(net_map)
    }


def layout_to_dict(layout: Layout, registry: GeometryRegistry) -> dict:
    """Serialize a Layout for the renderer."""
    components = placement_to_dict(FullPlacement(components=layout.components))
    for entry, pc in zip(components["components"], layout.components):
        template = registry.lookup(pc.kind)
        entry["symbol"] = template.symbol
        entry["pins"] = {
            name: list(xy)
            for name, xy in component_pin_positions(pc, registry).items()
        }

    bounds = layout.bounds
    return {
        "components": components["components"],
        "connections": routing_to_dict(
            RoutingResult(connections=layout.connections))["connections"],
        "nets": {nid: [list(p) for p in pts] for nid, pts in layout.nets.items()},
        "bounds": list(bounds) if bounds is not None else None,
    }
