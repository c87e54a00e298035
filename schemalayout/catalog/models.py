"""Catalog dataclasses — typed representations of catalog/data/*.json entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from schemalayout.errors import PinNotFound, UnknownComponentType


class ComponentKind(str, Enum):
    """Closed set of component types the engine knows how to lay out."""

    # Passive
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    POTENTIOMETER = "potentiometer"
    TRANSFORMER = "transformer"
    # Sources
    DC_VOLTAGE = "dc_voltage"
    DC_CURRENT = "dc_current"
    AC_VOLTAGE = "ac_voltage"
    AC_CURRENT = "ac_current"
    SIGNAL_GENERATOR = "signal_generator"
    # Semiconductors
    DIODE = "diode"
    ZENER_DIODE = "zener_diode"
    SCHOTTKY_DIODE = "schottky_diode"
    LED = "led"
    NPN_TRANSISTOR = "npn_transistor"
    PNP_TRANSISTOR = "pnp_transistor"
    NMOS_TRANSISTOR = "nmos_transistor"
    PMOS_TRANSISTOR = "pmos_transistor"
    JFET = "jfet"
    # ICs
    OP_AMP = "op_amp"
    COMPARATOR = "comparator"
    TIMER_555 = "timer_555"
    AND_GATE = "and_gate"
    OR_GATE = "or_gate"
    NOT_GATE = "not_gate"
    NAND_GATE = "nand_gate"
    NOR_GATE = "nor_gate"
    XOR_GATE = "xor_gate"
    FLIP_FLOP = "flip_flop"
    COUNTER = "counter"
    MULTIPLEXER = "multiplexer"
    # Analog / power
    VOLTAGE_REGULATOR = "voltage_regulator"
    CRYSTAL = "crystal"
    RELAY = "relay"
    SPST_SWITCH = "spst_switch"
    SPDT_SWITCH = "spdt_switch"
    DPDT_SWITCH = "dpdt_switch"
    FUSE = "fuse"
    BATTERY = "battery"
    # Digital
    MICROCONTROLLER = "microcontroller"
    CONNECTOR = "connector"
    TEST_POINT = "test_point"
    # Measurement
    AMMETER = "ammeter"
    VOLTMETER = "voltmeter"
    OSCILLOSCOPE_PROBE = "oscilloscope_probe"
    # Misc
    ANTENNA = "antenna"
    SPEAKER = "speaker"
    MICROPHONE = "microphone"
    MOTOR = "motor"
    SIGNAL_GROUND = "signal_ground"
    CHASSIS_GROUND = "chassis_ground"
    EARTH_GROUND = "earth_ground"

    @property
    def is_ground(self) -> bool:
        return self in GROUND_KINDS

    @classmethod
    def parse(cls, tag: str) -> ComponentKind:
        """Convert a type tag to a kind, raising UnknownComponentType."""
        try:
            return cls(tag)
        except ValueError:
            raise UnknownComponentType(str(tag)) from None


GROUND_KINDS = frozenset({
    ComponentKind.SIGNAL_GROUND,
    ComponentKind.CHASSIS_GROUND,
    ComponentKind.EARTH_GROUND,
})


class PinDirection(str, Enum):
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    PASSIVE = "passive"
    POWER = "power"


class PinClass(str, Enum):
    DIGITAL = "digital"
    ANALOG = "analog"
    POWER = "power"
    GROUND = "ground"


@dataclass(frozen=True)
class PinTemplate:
    name: str
    offset: tuple[float, float]         # relative to the component origin
    direction: PinDirection
    electrical_class: PinClass


@dataclass(frozen=True)
class ComponentTemplate:
    """Footprint and pin geometry for one component kind."""

    kind: ComponentKind
    width: float
    height: float
    pins: tuple[PinTemplate, ...]
    symbol: str = ""                    # artwork reference for the renderer
    source_file: str = field(default="", compare=False)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def pin_names(self) -> list[str]:
        return [p.name for p in self.pins]

    def pin(self, name: str) -> PinTemplate | None:
        for p in self.pins:
            if p.name == name:
                return p
        return None


class GeometryRegistry:
    """Immutable kind -> template lookup table.

    Built once and passed explicitly to every stage that needs geometry,
    so tests can hand in a fabricated subset of templates.
    """

    def __init__(self, templates: Iterable[ComponentTemplate]) -> None:
        by_kind: dict[ComponentKind, ComponentTemplate] = {}
        for t in templates:
            by_kind[t.kind] = t
        self._templates: Mapping[ComponentKind, ComponentTemplate] = (
            MappingProxyType(by_kind))

    def __contains__(self, kind: object) -> bool:
        return kind in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(self._templates.values())

    @property
    def kinds(self) -> list[ComponentKind]:
        return list(self._templates)

    def missing_kinds(self) -> list[ComponentKind]:
        """Kinds of the closed enumeration with no template here."""
        return [k for k in ComponentKind if k not in self._templates]

    def lookup(self, kind: ComponentKind) -> ComponentTemplate:
        """Return the template for *kind*, raising UnknownComponentType."""
        try:
            return self._templates[kind]
        except KeyError:
            raise UnknownComponentType(getattr(kind, "value", str(kind))) from None

    def pin(
        self, kind: ComponentKind, pin_name: str,
        instance_id: str | None = None,
    ) -> PinTemplate:
        """Return one pin template, raising PinNotFound if absent."""
        template = self.lookup(kind)
        pin = template.pin(pin_name)
        if pin is None:
            raise PinNotFound(kind.value, pin_name, instance_id)
        return pin


@dataclass
class ValidationError:
    component_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.component_id}] {self.field}: {self.message}"


@dataclass
class CatalogResult:
    """Result of loading the catalog — registry + any validation errors."""
    registry: GeometryRegistry
    errors: list[ValidationError]

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0
