"""schemalayout — schematic layout and net resolution engine."""

from schemalayout.catalog import default_registry, load_catalog, list_components
from schemalayout.errors import (
    LayoutError, PinNotFound, UnknownComponentType, DanglingConnection,
    InvalidRotation, CircuitParseError, CatalogError,
)
from schemalayout.pipeline.circuit import parse_circuit, validate_circuit
from schemalayout.pipeline.layout import Layout, calculate_layout, layout_to_dict
from schemalayout.pipeline.netlist import export_spice
from schemalayout.pipeline.nets import resolve_nets, build_nets, GROUND_NET

__all__ = [
    # Catalog
    "default_registry", "load_catalog", "list_components",
    # Errors
    "LayoutError", "PinNotFound", "UnknownComponentType", "DanglingConnection",
    "InvalidRotation", "CircuitParseError", "CatalogError",
    # Pipeline
    "parse_circuit", "validate_circuit",
    "Layout", "calculate_layout", "layout_to_dict",
    "export_spice",
    "resolve_nets", "build_nets", "GROUND_NET",
]
