"""Connection adjacency graph for placement."""

from __future__ import annotations

from schemalayout.pipeline.circuit.models import ConnectionEdge


def build_adjacency(connections: list[ConnectionEdge]) -> dict[str, list[str]]:
    """Build an undirected multigraph: instance_id -> [neighbour ids].

    Pin names are ignored.  A component wired twice to the same
    neighbour lists it twice, so that neighbour weighs double in the
    placer's mean.  Neighbour lists keep edge order.
    """
    graph: dict[str, list[str]] = {}
    for edge in connections:
        a = edge.source.instance_id
        b = edge.target.instance_id
        graph.setdefault(a, []).append(b)
        graph.setdefault(b, []).append(a)
    return graph


def resolved_neighbor_positions(
    instance_id: str,
    adjacency: dict[str, list[str]],
    resolved: dict[str, tuple[float, float]],
) -> list[tuple[float, float]]:
    """Positions of the neighbours of *instance_id* that are already placed."""
    return [
        resolved[other]
        for other in adjacency.get(instance_id, [])
        if other in resolved
    ]
