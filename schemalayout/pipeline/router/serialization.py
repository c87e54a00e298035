"""Routing serialization — JSON conversion."""

from __future__ import annotations

from schemalayout.pipeline.circuit.models import ConnectionEdge, PinRef

from .models import RoutedConnection, RoutingResult


def routing_to_dict(result: RoutingResult) -> dict:
    """Serialize a RoutingResult to a JSON-safe dict."""
    return {
        "connections": [
            {
                "from": str(r.connection.source),
                "to": str(r.connection.target),
                "path": [list(p) for p in r.path],
                **({"properties": dict(r.connection.properties)}
                   if r.connection.properties else {}),
            }
            for r in result.connections
        ],
    }


def parse_routing(data: dict) -> RoutingResult:
    """Parse a routing.json dict back into a RoutingResult."""
    connections = [
        RoutedConnection(
            connection=ConnectionEdge(
                source=PinRef.parse(r["from"]),
                target=PinRef.parse(r["to"]),
                properties=dict(r.get("properties", {})),
            ),
            path=tuple((float(p[0]), float(p[1])) for p in r["path"]),
        )
        for r in data.get("connections", [])
    ]
    return RoutingResult(connections=connections)
