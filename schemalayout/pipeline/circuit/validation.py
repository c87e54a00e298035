"""Circuit validation — check a Circuit against the geometry registry."""

from __future__ import annotations

import math

from schemalayout.catalog.models import ComponentKind, GeometryRegistry
from .models import Circuit


# Kinds whose value text should carry a given unit letter.
_VOLTAGE_KINDS = {ComponentKind.DC_VOLTAGE, ComponentKind.AC_VOLTAGE}
_CURRENT_KINDS = {ComponentKind.DC_CURRENT, ComponentKind.AC_CURRENT}
_NUMERIC_KINDS = {
    ComponentKind.RESISTOR, ComponentKind.CAPACITOR,
    ComponentKind.INDUCTOR, ComponentKind.POTENTIOMETER,
}


def validate_circuit(circuit: Circuit, registry: GeometryRegistry) -> list[str]:
    """Validate a Circuit against the registry. Returns error messages (empty = valid).

    The layout and netlist stages raise on the first bad reference they
    meet; this collects every problem at once for user-facing reports.
    """
    errors: list[str] = []

    # ── Instance IDs must be unique ──
    seen_ids: set[str] = set()
    for ci in circuit.components:
        if ci.instance_id in seen_ids:
            errors.append(f"Duplicate instance_id '{ci.instance_id}'")
        seen_ids.add(ci.instance_id)

    # ── Every kind must have geometry ──
    for ci in circuit.components:
        if ci.kind not in registry:
            errors.append(
                f"Component '{ci.instance_id}': no geometry for type '{ci.kind.value}'")

    # ── Explicit positions must be finite ──
    for ci in circuit.components:
        if ci.position is not None and not all(math.isfinite(v) for v in ci.position):
            errors.append(
                f"Component '{ci.instance_id}': position {ci.position} is not finite")

    # ── Value text should carry the right unit ──
    for ci in circuit.components:
        if ci.value is None:
            continue
        v = ci.value
        if ci.kind in _VOLTAGE_KINDS and "v" not in v.lower():
            errors.append(f"Component '{ci.instance_id}': voltage value '{v}' has no 'V' unit")
        elif ci.kind in _CURRENT_KINDS and "a" not in v.lower():
            errors.append(f"Component '{ci.instance_id}': current value '{v}' has no 'A' unit")
        elif ci.kind in _NUMERIC_KINDS and not any(ch.isdigit() for ch in v):
            errors.append(f"Component '{ci.instance_id}': value '{v}' has no number")

    comp_map = circuit.component_map()

    def _check_ref(ref, context: str) -> None:
        ci = comp_map.get(ref.instance_id)
        if ci is None:
            errors.append(f"{context}: unknown instance '{ref.instance_id}' in '{ref}'")
            return
        if ci.kind not in registry:
            return  # already reported
        if registry.lookup(ci.kind).pin(ref.pin) is None:
            errors.append(
                f"{context}: unknown pin '{ref.pin}' on "
                f"'{ref.instance_id}' (type: {ci.kind.value})")

    # ── Connection endpoints ──
    for edge in circuit.connections:
        ctx = f"Connection '{edge}'"
        _check_ref(edge.source, ctx)
        _check_ref(edge.target, ctx)
        if edge.source == edge.target:
            errors.append(f"{ctx}: connects a pin to itself")

    # ── Net declarations ──
    seen_nets: set[str] = set()
    for net in circuit.nets:
        if not net.name:
            errors.append("Net declaration with an empty name")
        elif net.name in seen_nets:
            errors.append(f"Net '{net.name}': declared more than once")
        seen_nets.add(net.name)
        if not net.members:
            errors.append(f"Net '{net.name}': must have at least 1 pin")
        for ref in net.members:
            _check_ref(ref, f"Net '{net.name}'")

    return errors
