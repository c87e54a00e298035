"""Pin resolution — convert pin references to absolute coordinates.

Handles:
  - Direct lookup of a pin on a component kind (``resolve_pin``)
  - Endpoint references against a placement (``resolve_endpoint``)
  - All pin positions of a placed component, for the renderer

An unknown kind or pin is always an error; there is no fallback to the
component centre.
"""

from __future__ import annotations

from schemalayout.catalog.models import ComponentKind, GeometryRegistry
from schemalayout.errors import DanglingConnection, UnknownComponentType
from schemalayout.pipeline.circuit.models import PinRef, Rotation
from schemalayout.pipeline.placer.geometry import pin_world_xy
from schemalayout.pipeline.placer.models import FullPlacement, PositionedComponent


def resolve_pin(
    kind: ComponentKind,
    pin_name: str,
    base_position: tuple[float, float],
    rotation: Rotation | int,
    registry: GeometryRegistry,
    *,
    instance_id: str | None = None,
) -> tuple[float, float]:
    """Absolute coordinate of one pin: base + rotate(pin offset).

    Raises
    ------
    UnknownComponentType
        The registry has no template for *kind*.
    PinNotFound
        The template has no pin called *pin_name*.
    InvalidRotation
        *rotation* is not a quarter turn.
    """
    if kind not in registry:
        raise UnknownComponentType(getattr(kind, "value", str(kind)), instance_id)
    pin = registry.pin(kind, pin_name, instance_id)
    return pin_world_xy(pin.offset, base_position[0], base_position[1], rotation)


def resolve_endpoint(
    ref: PinRef,
    placement: dict[str, PositionedComponent],
    registry: GeometryRegistry,
    *,
    context: str = "",
) -> tuple[float, float]:
    """Absolute coordinate of a connection endpoint.

    *placement* maps instance_id -> PositionedComponent.  A reference to
    an instance that was never placed raises DanglingConnection.
    """
    pc = placement.get(ref.instance_id)
    if pc is None:
        raise DanglingConnection(ref.instance_id, context or str(ref))
    return resolve_pin(
        pc.kind, ref.pin, pc.position, pc.rotation, registry,
        instance_id=pc.instance_id,
    )


def component_pin_positions(
    pc: PositionedComponent,
    registry: GeometryRegistry,
) -> dict[str, tuple[float, float]]:
    """pin name -> absolute coordinate, in template order."""
    template = registry.lookup(pc.kind)
    return {
        pin.name: pin_world_xy(pin.offset, pc.x, pc.y, pc.rotation)
        for pin in template.pins
    }


def placement_index(placement: FullPlacement) -> dict[str, PositionedComponent]:
    """instance_id -> PositionedComponent (first occurrence wins)."""
    index: dict[str, PositionedComponent] = {}
    for pc in placement.components:
        index.setdefault(pc.instance_id, pc)
    return index
