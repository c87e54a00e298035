"""Low-level geometry helpers for the placer and router."""

from __future__ import annotations

from shapely.geometry import Polygon, box as shapely_box
from shapely.ops import unary_union

from schemalayout.pipeline.circuit.models import Rotation

from .models import PositionedComponent


def rotate_offset(
    offset: tuple[float, float], rotation: Rotation | int,
) -> tuple[float, float]:
    """Rotate a component-local offset by a quarter turn.

    Exact sign/swap arithmetic, so integer offsets stay integers and
    nothing drifts by a float epsilon.  Raises InvalidRotation for any
    other angle.
    """
    x, y = offset
    rot = Rotation.parse(rotation)
    if rot is Rotation.DEG_0:
        return (x, y)
    if rot is Rotation.DEG_90:
        return (-y, x)
    if rot is Rotation.DEG_180:
        return (-x, -y)
    return (y, -x)


def pin_world_xy(
    pin_local: tuple[float, float],
    cx: float, cy: float,
    rotation: Rotation | int,
) -> tuple[float, float]:
    """Transform a component-local pin position to absolute coordinates."""
    rx, ry = rotate_offset(pin_local, rotation)
    return (cx + rx, cy + ry)


def footprint_halfdims(
    width: float, height: float, rotation: Rotation | int,
) -> tuple[float, float]:
    """Return (half_width, half_height) of the footprint at a given rotation.

    Width and height swap at 90° and 270°.
    """
    if Rotation.parse(rotation) in (Rotation.DEG_90, Rotation.DEG_270):
        return (height / 2, width / 2)
    return (width / 2, height / 2)


def footprint_box(pc: PositionedComponent) -> Polygon:
    """Axis-aligned footprint rectangle centred on the component origin."""
    hw, hh = footprint_halfdims(pc.width, pc.height, pc.rotation)
    return shapely_box(pc.x - hw, pc.y - hh, pc.x + hw, pc.y + hh)


def layout_bounds(
    components: list[PositionedComponent],
) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax) covering every footprint, or None if empty."""
    if not components:
        return None
    return unary_union([footprint_box(pc) for pc in components]).bounds


def overlapping_pairs(
    components: list[PositionedComponent],
) -> list[tuple[str, str]]:
    """Pairs of instance ids whose footprints overlap.

    The placer does not prevent overlap; this lets callers report it.
    """
    boxes = [(pc.instance_id, footprint_box(pc)) for pc in components]
    pairs: list[tuple[str, str]] = []
    for i, (a, box_a) in enumerate(boxes):
        for b, box_b in boxes[i + 1:]:
            if box_a.intersection(box_b).area > 0:
                pairs.append((a, b))
    return pairs
