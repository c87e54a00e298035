"""Circuit graph dataclasses — the parser's output structure."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from schemalayout.catalog.models import ComponentKind
from schemalayout.errors import CircuitParseError, InvalidRotation


class Rotation(IntEnum):
    """The four legal quarter-turn rotations, counter-clockwise in degrees."""

    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @classmethod
    def parse(cls, value: object) -> Rotation:
        """Coerce an int/float/numeric string, raising InvalidRotation.

        ``90``, ``90.0`` and ``"90"`` are accepted; ``45``, ``360`` and
        ``True`` are not.
        """
        if isinstance(value, Rotation):
            return value
        if isinstance(value, bool):
            raise InvalidRotation(value)
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise InvalidRotation(value) from None
        if number.is_integer() and int(number) in _LEGAL_DEGREES:
            return cls(int(number))
        raise InvalidRotation(value)


_LEGAL_DEGREES = frozenset(r.value for r in Rotation)


@dataclass(frozen=True)
class PinRef:
    """One (component, pin) endpoint, written ``"R1.2"`` in text form."""

    instance_id: str
    pin: str

    def __str__(self) -> str:
        return f"{self.instance_id}.{self.pin}"

    @classmethod
    def parse(cls, ref: str) -> PinRef:
        iid, sep, pin = str(ref).rpartition(".")
        if not sep or not iid or not pin:
            raise CircuitParseError(
                f"Invalid pin reference '{ref}' (expected 'instance_id.pin')")
        return cls(iid, pin)


@dataclass(frozen=True)
class ComponentInstance:
    instance_id: str
    kind: ComponentKind
    position: tuple[float, float] | None = None     # explicit, kept verbatim
    rotation: Rotation = Rotation.DEG_0
    value: str | None = None
    label: str | None = None
    properties: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class ConnectionEdge:
    """A wire between two pins.  Direction only matters for routing."""

    source: PinRef
    target: PinRef
    properties: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class NetDeclaration:
    name: str
    members: tuple[PinRef, ...]


@dataclass
class Circuit:
    components: list[ComponentInstance]
    connections: list[ConnectionEdge]
    nets: list[NetDeclaration] = field(default_factory=list)

    def component_map(self) -> dict[str, ComponentInstance]:
        """instance_id -> ComponentInstance (first declaration wins)."""
        result: dict[str, ComponentInstance] = {}
        for ci in self.components:
            result.setdefault(ci.instance_id, ci)
        return result
