"""Catalog loader — reads catalog/data/*.json files, parses and validates them."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from schemalayout.errors import CatalogError

from .models import (
    ComponentKind, PinDirection, PinClass, PinTemplate, ComponentTemplate,
    GeometryRegistry, ValidationError, CatalogResult,
)


CATALOG_DIR = Path(__file__).resolve().parent / "data"

log = logging.getLogger(__name__)


# ── Validation ─────────────────────────────────────────────────────

def _validate_template(comp: ComponentTemplate) -> list[ValidationError]:
    """Run all validation checks on a single template."""
    errs: list[ValidationError] = []
    cid = comp.kind.value

    if comp.width <= 0:
        errs.append(ValidationError(cid, "width", "Must be > 0"))
    if comp.height <= 0:
        errs.append(ValidationError(cid, "height", "Must be > 0"))

    if not comp.pins:
        errs.append(ValidationError(cid, "pins", "Component has no pins"))

    # Pin names unique
    seen: set[str] = set()
    for pin in comp.pins:
        if pin.name in seen:
            errs.append(ValidationError(cid, f"pins.{pin.name}", "Duplicate pin name"))
        seen.add(pin.name)

    # Lead ends may stick out of the body, but by no more than one
    # half-footprint on each axis.
    for pin in comp.pins:
        px, py = pin.offset
        if abs(px) > comp.width or abs(py) > comp.height:
            errs.append(ValidationError(
                cid, f"pins.{pin.name}.offset",
                f"Offset {pin.offset} is far outside the {comp.width}×{comp.height} footprint"))

    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_pin(data: dict) -> PinTemplate:
    off = data.get("offset", [0, 0])
    return PinTemplate(
        name=str(data["name"]),
        offset=(float(off[0]), float(off[1])),
        direction=PinDirection(data.get("direction", "passive")),
        electrical_class=PinClass(data.get("class", "analog")),
    )


def _parse_template(data: dict, source_file: str = "") -> ComponentTemplate:
    return ComponentTemplate(
        kind=ComponentKind(data["kind"]),
        width=float(data["width"]),
        height=float(data["height"]),
        pins=tuple(_parse_pin(p) for p in data["pins"]),
        symbol=data.get("symbol", data["kind"]),
        source_file=source_file,
    )


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(catalog_dir: Path | None = None) -> CatalogResult:
    """Load all catalog/data/*.json files, parse and validate.

    Each file holds a ``components`` list of templates.  Returns a
    CatalogResult with the registry and any validation errors.
    Templates that fail to parse are skipped (error recorded).
    Templates that parse but have validation issues are still included.
    Every ComponentKind must be covered exactly once.
    """
    d = catalog_dir or CATALOG_DIR
    templates: list[ComponentTemplate] = []
    errors: list[ValidationError] = []

    json_files = sorted(d.glob("*.json"))
    if not json_files:
        errors.append(ValidationError("_catalog", "files", f"No .json files found in {d}"))
        return CatalogResult(registry=GeometryRegistry([]), errors=errors)

    for path in json_files:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            errors.append(ValidationError(
                path.stem, "json", f"Parse error: {exc}"))
            continue
        except OSError as exc:
            errors.append(ValidationError(
                path.stem, "file", f"Read error: {exc}"))
            continue

        for entry in raw.get("components", []):
            try:
                comp = _parse_template(entry, source_file=str(path))
            except (KeyError, TypeError, ValueError, IndexError) as exc:
                errors.append(ValidationError(
                    entry.get("kind", path.stem) if isinstance(entry, dict) else path.stem,
                    "parse", f"Missing/invalid field: {exc}"))
                continue

            errors.extend(_validate_template(comp))
            templates.append(comp)

    # Check for duplicate kinds across files
    kind_counts: dict[ComponentKind, int] = {}
    for comp in templates:
        kind_counts[comp.kind] = kind_counts.get(comp.kind, 0) + 1
    for kind, count in kind_counts.items():
        if count > 1:
            errors.append(ValidationError(
                kind.value, "kind", f"Duplicate template (appears {count} times)"))

    registry = GeometryRegistry(templates)

    # Exhaustiveness: the closed kind set must be fully covered
    for kind in registry.missing_kinds():
        errors.append(ValidationError(kind.value, "kind", "No template for this component kind"))

    log.debug("Loaded %d templates from %s (%d errors)",
              len(registry), d, len(errors))
    return CatalogResult(registry=registry, errors=errors)


@lru_cache(maxsize=1)
def default_registry() -> GeometryRegistry:
    """Load the bundled catalog once, raising CatalogError if it is not clean.

    A convenience for callers; the engine itself never reaches for this
    and always takes its registry as an argument.
    """
    result = load_catalog()
    if not result.ok:
        raise CatalogError(
            "Bundled catalog is invalid:\n  "
            + "\n  ".join(str(e) for e in result.errors))
    return result.registry


def list_components(registry: GeometryRegistry) -> list[str]:
    """Sorted type tags of every kind the registry can lay out."""
    return sorted(k.value for k in registry.kinds)
