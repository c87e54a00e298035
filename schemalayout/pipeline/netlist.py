"""SPICE netlist writer.

Consumes the resolved pin -> net map and emits one element line per
component.  Component values are written exactly as given; unit
normalisation is the caller's business.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from schemalayout.catalog.models import ComponentKind, GeometryRegistry
from schemalayout.pipeline.circuit.models import Circuit, ComponentInstance, PinRef
from schemalayout.pipeline.nets import resolve_circuit_nets


log = logging.getLogger(__name__)


SPICE_HEADER = ("* schemalayout SPICE netlist", "* Generated from circuit graph")


@dataclass(frozen=True)
class SpiceElement:
    """How one component kind becomes a SPICE element line."""

    prefix: str                 # element letter: R, C, V, Q, ...
    pins: tuple[str, ...]       # template pin names, in SPICE node order
    default_value: str = ""
    value_format: str = "{}"    # wraps the value, e.g. "DC {}"
    model: str = ""             # fixed model name appended after the nodes


_DIODE_PINS = ("A", "K")

SPICE_ELEMENTS: dict[ComponentKind, SpiceElement] = {
    ComponentKind.RESISTOR: SpiceElement("R", ("1", "2"), "1"),
    ComponentKind.CAPACITOR: SpiceElement("C", ("1", "2"), "1pF"),
    ComponentKind.INDUCTOR: SpiceElement("L", ("1", "2"), "1uH"),
    ComponentKind.DC_VOLTAGE: SpiceElement("V", ("+", "-"), "0V", "DC {}"),
    ComponentKind.DC_CURRENT: SpiceElement("I", ("+", "-"), "0A", "DC {}"),
    ComponentKind.AC_VOLTAGE: SpiceElement("V", ("+", "-"), "0V", "AC {}"),
    ComponentKind.AC_CURRENT: SpiceElement("I", ("+", "-"), "0A", "AC {}"),
    ComponentKind.DIODE: SpiceElement("D", _DIODE_PINS, model="DDIODE"),
    ComponentKind.ZENER_DIODE: SpiceElement("D", _DIODE_PINS, model="DZENER"),
    ComponentKind.SCHOTTKY_DIODE: SpiceElement("D", _DIODE_PINS, model="DSCHOTTKY"),
    ComponentKind.LED: SpiceElement("D", _DIODE_PINS, model="DLED"),
    ComponentKind.NPN_TRANSISTOR: SpiceElement("Q", ("C", "B", "E"), model="QNPN"),
    ComponentKind.PNP_TRANSISTOR: SpiceElement("Q", ("C", "B", "E"), model="QPNP"),
    # Bulk tied to source
    ComponentKind.NMOS_TRANSISTOR: SpiceElement("M", ("D", "G", "S", "S"), model="NMOS"),
    ComponentKind.PMOS_TRANSISTOR: SpiceElement("M", ("D", "G", "S", "S"), model="PMOS"),
    ComponentKind.OP_AMP: SpiceElement("X", ("-", "+", "OUT"), model="OPAMP"),
}


def element_name(prefix: str, instance_id: str) -> str:
    """SPICE element name: the id itself if it already starts with *prefix*."""
    if instance_id[:1].upper() == prefix:
        return instance_id
    return f"{prefix}{instance_id}"


def floating_node(ref: PinRef) -> str:
    """Unique node name for a pin that belongs to no net."""
    return f"NC_{ref.instance_id}_{ref.pin}"


def _element_line(ci: ComponentInstance, element: SpiceElement, net_map: dict[PinRef, str]) -> str:
    nodes = []
    for pin in element.pins:
        ref = PinRef(ci.instance_id, pin)
        node = net_map.get(ref)
        if node is None:
            node = floating_node(ref)
            log.warning("Pin %s is not connected; writing floating node %s", ref, node)
        nodes.append(node)

    parts = [element_name(element.prefix, ci.instance_id), *nodes]
    value = ci.value if ci.value is not None else element.default_value
    if value:
        parts.append(element.value_format.format(value))
    if element.model:
        parts.append(element.model)
    return " ".join(parts)


def export_spice(circuit: Circuit, registry: GeometryRegistry | None = None) -> str:
    """Render *circuit* as a SPICE netlist string.

    Ground components write no element; their pins are node ``0``.
    Kinds with no SPICE equivalent are written as comment lines.
    Every connection is listed as a comment after the elements.

    Raises
    ------
    DanglingConnection
        A connection or net names an instance that does not exist.
    PinNotFound / UnknownComponentType
        With a *registry*, a referenced pin is not on its component.
    """
    net_map = resolve_circuit_nets(circuit, registry)

    lines = [*SPICE_HEADER, ""]
    for ci in circuit.components:
        if ci.kind.is_ground:
            continue
        element = SPICE_ELEMENTS.get(ci.kind)
        if element is None:
            lines.append(
                f"* Component {ci.instance_id} of type {ci.kind.value} "
                "not supported in SPICE export")
            continue
        lines.append(_element_line(ci, element, net_map))

    lines.append("")
    lines.append("* Connections:")
    for edge in circuit.connections:
        lines.append(f"* {edge}")

    lines.append("")
    lines.append(".end")
    return "\n".join(lines) + "\n"
