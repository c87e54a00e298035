"""Typed failures raised by the layout and net-resolution stages.

Every failure is an exception carrying the offending identifiers as
attributes, so callers can report *what* went wrong without parsing the
message.  Nothing in the engine catches these to substitute a default
point or net; the first one raised aborts the conversion.
"""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for every engine failure."""


class PinNotFound(LayoutError):
    """A pin name could not be resolved on a component."""

    def __init__(
        self, kind: str, pin: str, instance_id: str | None = None,
    ) -> None:
        self.kind = kind
        self.pin = pin
        self.instance_id = instance_id
        where = f"'{instance_id}' ({kind})" if instance_id else f"'{kind}'"
        super().__init__(f"Pin '{pin}' does not exist on {where}")


class UnknownComponentType(PinNotFound):
    """The component kind is not a known type tag or has no template.

    Subclasses ``PinNotFound``: when the type is unknown, none of its
    pins can be resolved either.
    """

    def __init__(self, kind: str, instance_id: str | None = None) -> None:
        LayoutError.__init__(
            self,
            f"Unknown component type '{kind}'"
            + (f" on '{instance_id}'" if instance_id else ""),
        )
        self.kind = kind
        self.pin = None
        self.instance_id = instance_id


class DanglingConnection(LayoutError):
    """A connection or net member references a component that does not exist."""

    def __init__(self, instance_id: str, context: str = "") -> None:
        self.instance_id = instance_id
        self.context = context
        msg = f"Reference to unknown component '{instance_id}'"
        if context:
            msg += f" in {context}"
        super().__init__(msg)


class InvalidRotation(LayoutError):
    """A rotation outside the four legal quarter turns."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Invalid rotation {value!r}: expected one of 0, 90, 180, 270")


class CircuitParseError(LayoutError):
    """A circuit dict is missing a field or has a malformed one."""


class CatalogError(LayoutError):
    """The bundled geometry catalog failed to load cleanly."""
