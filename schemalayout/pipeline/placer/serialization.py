"""Placement serialization — JSON conversion."""

from __future__ import annotations

from schemalayout.catalog.models import ComponentKind
from schemalayout.pipeline.circuit.models import ComponentInstance, Rotation

from .models import PositionedComponent, FullPlacement


def placement_to_dict(fp: FullPlacement) -> dict:
    """Serialize a FullPlacement to a JSON-safe dict."""
    return {
        "components": [
            {
                "instance_id": c.instance_id,
                "kind": c.kind.value,
                "x": c.x,
                "y": c.y,
                "width": c.width,
                "height": c.height,
                "rotation": int(c.rotation),
                "auto_placed": c.auto_placed,
                **({"value": c.instance.value} if c.instance.value is not None else {}),
                **({"label": c.instance.label} if c.instance.label is not None else {}),
                **({"properties": dict(c.instance.properties)} if c.instance.properties else {}),
            }
            for c in fp.components
        ],
    }


def parse_placement(data: dict) -> FullPlacement:
    """Parse a placement.json dict back into a FullPlacement."""
    components = []
    for c in data["components"]:
        x, y = float(c["x"]), float(c["y"])
        rotation = Rotation.parse(c.get("rotation", 0))
        instance = ComponentInstance(
            instance_id=c["instance_id"],
            kind=ComponentKind.parse(c["kind"]),
            position=None if c.get("auto_placed", False) else (x, y),
            rotation=rotation,
            value=c.get("value"),
            label=c.get("label"),
            properties=dict(c.get("properties", {})),
        )
        components.append(PositionedComponent(
            instance=instance,
            x=x, y=y,
            width=float(c["width"]),
            height=float(c["height"]),
            rotation=rotation,
        ))
    return FullPlacement(components=components)
