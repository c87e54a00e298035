"""Net dataclasses and the reserved ground net id."""

from __future__ import annotations

from dataclasses import dataclass

from schemalayout.pipeline.circuit.models import PinRef


GROUND_NET = "0"
AUTO_NET_PREFIX = "N"


@dataclass(frozen=True)
class Net:
    """One electrical equivalence class of pins."""

    id: str
    members: frozenset[PinRef]

    @property
    def is_ground(self) -> bool:
        return self.id == GROUND_NET

    def __len__(self) -> int:
        return len(self.members)
