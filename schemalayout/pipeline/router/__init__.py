"""Router — orthogonal wire routing between component pins.

Submodules:
  models        Output dataclasses and configuration constants.
  pins          Pin resolution (kind + pin + position + rotation -> point).
  engine        "Z" routing per connection.
  serialization JSON conversion (routing_to_dict, parse_routing).
"""

from .models import RoutedConnection, RoutingResult
from .engine import route, route_connections
from .pins import resolve_pin, resolve_endpoint, component_pin_positions
from .serialization import routing_to_dict, parse_routing

__all__ = [
    # Models
    "RoutedConnection", "RoutingResult",
    # Engine
    "route", "route_connections",
    # Pins
    "resolve_pin", "resolve_endpoint", "component_pin_positions",
    # Serialization
    "routing_to_dict", "parse_routing",
]
