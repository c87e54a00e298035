"""Nets — electrical equivalence classes over component pins.

Submodules:
  models        Net dataclass and the reserved ground id.
  union_find    Disjoint-set forest.
  resolver      Declarations + connections -> pin -> net id.
  serialization JSON conversion (nets_to_dict, parse_nets).
"""

from .models import Net, GROUND_NET
from .resolver import resolve_nets, resolve_circuit_nets, build_nets, group_nets
from .serialization import nets_to_dict, parse_nets

__all__ = [
    # Models
    "Net", "GROUND_NET",
    # Resolver
    "resolve_nets", "resolve_circuit_nets", "build_nets", "group_nets",
    # Serialization
    "nets_to_dict", "parse_nets",
]
