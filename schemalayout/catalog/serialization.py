"""Catalog serialization — convert templates to JSON-safe dicts."""

from __future__ import annotations

from .models import ComponentTemplate, GeometryRegistry


def template_to_dict(t: ComponentTemplate) -> dict:
    """Serialize a single ComponentTemplate to a JSON-safe dict."""
    return {
        "kind": t.kind.value,
        "symbol": t.symbol,
        "width": t.width,
        "height": t.height,
        "pins": [
            {
                "name": p.name,
                "offset": list(p.offset),
                "direction": p.direction.value,
                "class": p.electrical_class.value,
            }
            for p in t.pins
        ],
    }


def catalog_to_dict(registry: GeometryRegistry) -> dict:
    """Serialize a whole registry, sorted by kind, for the renderer or a UI."""
    return {
        "components": [
            template_to_dict(t)
            for t in sorted(registry, key=lambda t: t.kind.value)
        ],
    }
