"""Placer — assigns one absolute position to every component.

Submodules:
  models        Output dataclasses and configuration constants.
  geometry      Rotation transform, footprint boxes, layout bounds.
  nets          Connection adjacency multigraph.
  engine        Declaration-order placement (explicit, neighbour mean, grid).
  serialization JSON conversion (placement_to_dict, parse_placement).
"""

from .models import PositionedComponent, FullPlacement
from .engine import place, place_components
from .serialization import placement_to_dict, parse_placement
from .geometry import (
    rotate_offset, pin_world_xy, footprint_halfdims, footprint_box,
    layout_bounds, overlapping_pairs,
)

__all__ = [
    # Models
    "PositionedComponent", "FullPlacement",
    # Engine
    "place", "place_components",
    # Serialization
    "placement_to_dict", "parse_placement",
    # Geometry
    "rotate_offset", "pin_world_xy", "footprint_halfdims", "footprint_box",
    "layout_bounds", "overlapping_pairs",
]
