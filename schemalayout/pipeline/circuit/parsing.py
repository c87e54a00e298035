"""Circuit parsing — convert raw dicts/JSON into a Circuit.

The textual CDL grammar is handled upstream; this module accepts the
already-structured graph that the grammar stage (or a test) produces:

    {
      "components": [{"id": "R1", "type": "resistor", "value": "1k",
                      "position": [0, 0], "rotation": 90}],
      "connections": [{"from": "R1.2", "to": "R2.1"}],
      "nets": [{"name": "VCC", "pins": ["R1.1", "V1.+"]}]
    }
"""

from __future__ import annotations

from schemalayout.catalog.models import ComponentKind
from schemalayout.errors import CircuitParseError

from .models import (
    Circuit, ComponentInstance, ConnectionEdge, NetDeclaration, PinRef, Rotation,
)


def parse_circuit(data: dict) -> Circuit:
    """Parse a raw dict (from JSON / the grammar stage) into a Circuit.

    Raises CircuitParseError for missing or malformed fields,
    UnknownComponentType for unknown type tags and InvalidRotation for
    rotations outside the four quarter turns.
    """
    try:
        components = [_parse_component(c) for c in data["components"]]
        connections = [
            ConnectionEdge(
                source=PinRef.parse(c["from"]),
                target=PinRef.parse(c["to"]),
                properties=_parse_properties(c.get("properties")),
            )
            for c in data.get("connections", [])
        ]
        nets = [
            NetDeclaration(
                name=str(n["name"]),
                members=tuple(PinRef.parse(p) for p in n["pins"]),
            )
            for n in data.get("nets", [])
        ]
    except KeyError as exc:
        raise CircuitParseError(f"Missing field {exc}") from exc
    except (TypeError, AttributeError) as exc:
        raise CircuitParseError(f"Malformed circuit: {exc}") from exc

    return Circuit(components=components, connections=connections, nets=nets)


def _parse_component(c: dict) -> ComponentInstance:
    instance_id = str(c["id"])
    raw_pos = c.get("position")
    position = None
    if raw_pos is not None:
        try:
            position = (float(raw_pos[0]), float(raw_pos[1]))
        except (TypeError, ValueError, IndexError) as exc:
            raise CircuitParseError(
                f"Component '{instance_id}': invalid position {raw_pos!r}") from exc

    return ComponentInstance(
        instance_id=instance_id,
        kind=ComponentKind.parse(c["type"]),
        position=position,
        rotation=Rotation.parse(c.get("rotation", 0)),
        value=_opt_str(c.get("value")),
        label=_opt_str(c.get("label")),
        properties=_parse_properties(c.get("properties")),
    )


def _parse_properties(raw: dict | None) -> dict[str, str]:
    if not raw:
        return {}
    return {str(k): str(v) for k, v in raw.items()}


def _opt_str(value) -> str | None:
    return None if value is None else str(value)
