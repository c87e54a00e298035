"""Circuit graph — dataclasses, parsing, validation, and serialization."""

from .models import (
    Rotation, PinRef, ComponentInstance, ConnectionEdge, NetDeclaration, Circuit,
)
from .parsing import parse_circuit
from .validation import validate_circuit
from .serialization import circuit_to_dict

__all__ = [
    # Models
    "Rotation", "PinRef", "ComponentInstance", "ConnectionEdge",
    "NetDeclaration", "Circuit",
    # Parsing / Validation / Serialization
    "parse_circuit", "validate_circuit", "circuit_to_dict",
]
