"""Circuit serialization — convert a Circuit to JSON-safe dicts."""

from __future__ import annotations

from .models import Circuit


def circuit_to_dict(circuit: Circuit) -> dict:
    """Convert a Circuit to a JSON-serializable dict (inverse of parse_circuit)."""
    return {
        "components": [
            {
                "id": ci.instance_id,
                "type": ci.kind.value,
                **({"position": list(ci.position)} if ci.position is not None else {}),
                **({"rotation": int(ci.rotation)} if ci.rotation else {}),
                **({"value": ci.value} if ci.value is not None else {}),
                **({"label": ci.label} if ci.label is not None else {}),
                **({"properties": dict(ci.properties)} if ci.properties else {}),
            }
            for ci in circuit.components
        ],
        "connections": [
            {
                "from": str(c.source),
                "to": str(c.target),
                **({"properties": dict(c.properties)} if c.properties else {}),
            }
            for c in circuit.connections
        ],
        "nets": [
            {"name": n.name, "pins": [str(p) for p in n.members]}
            for n in circuit.nets
        ],
    }
