"""Geometry catalog — load, validate, query, and serialize catalog/data/*.json."""

from .models import (
    ComponentKind, GROUND_KINDS, PinDirection, PinClass,
    PinTemplate, ComponentTemplate, GeometryRegistry,
    ValidationError, CatalogResult,
)
from .loader import load_catalog, default_registry, list_components, CATALOG_DIR
from .serialization import catalog_to_dict, template_to_dict

__all__ = [
    # Models
    "ComponentKind", "GROUND_KINDS", "PinDirection", "PinClass",
    "PinTemplate", "ComponentTemplate", "GeometryRegistry",
    "ValidationError", "CatalogResult",
    # Loader
    "load_catalog", "default_registry", "list_components", "CATALOG_DIR",
    # Serialization
    "catalog_to_dict", "template_to_dict",
]
