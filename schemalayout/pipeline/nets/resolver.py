"""Net resolution — group pins into electrical equivalence classes.

Declarations and connections are folded into a disjoint-set forest over
PinRefs.  Each class carries a name and a ground flag; when two classes
merge, the older name survives and the flags OR together, so the result
does not depend on the order in which pins happen to meet.

Naming rules:
  - A declaration names its class.  Declarations sharing a pin (or a
    name) end up as one class under the earliest declaration's name.
  - A connection between two pins that belong to no class yet creates
    an auto-named class N1, N2, ... in edge order.  Auto names skip any
    name a declaration already uses.
  - Declared names outrank auto names regardless of creation order.
  - A class containing any pin of a ground-kind component, or declared
    as "0", is renamed to GROUND_NET as a whole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from schemalayout.catalog.models import GeometryRegistry
from schemalayout.errors import DanglingConnection
from schemalayout.pipeline.circuit.models import (
    Circuit, ComponentInstance, ConnectionEdge, NetDeclaration, PinRef,
)

from .models import AUTO_NET_PREFIX, GROUND_NET, Net
from .union_find import DisjointSet


log = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class _ClassLabel:
    """Sort key for competing class names; the smallest survives a merge."""

    tier: int       # 0 = declared, 1 = auto-named
    seq: int        # creation order within the tier
    name: str


_DECLARED = 0
_AUTO = 1


class _NetForest:
    """DisjointSet plus per-root label and ground flag."""

    def __init__(self) -> None:
        self.sets: DisjointSet[PinRef] = DisjointSet()
        self.labels: dict[PinRef, _ClassLabel] = {}
        self.grounded: dict[PinRef, bool] = {}

    def has_class(self, pin: PinRef) -> bool:
        return pin in self.sets

    def add(self, pin: PinRef, label: _ClassLabel | None = None) -> None:
        if self.sets.add(pin):
            self.grounded[pin] = False
            if label is not None:
                self.labels[pin] = label
        elif label is not None:
            self._relabel(self.sets.find(pin), label)

    def union(self, a: PinRef, b: PinRef) -> PinRef:
        root, absorbed = self.sets.union(a, b)
        if absorbed is not None:
            absorbed_ground = self.grounded.pop(absorbed)
            self.grounded[root] = self.grounded[root] or absorbed_ground
            moved = self.labels.pop(absorbed, None)
            if moved is not None:
                self._relabel(root, moved)
        return root

    def mark_ground(self, pin: PinRef) -> None:
        self.grounded[self.sets.find(pin)] = True

    def _relabel(self, root: PinRef, label: _ClassLabel) -> None:
        current = self.labels.get(root)
        if current is None or label < current:
            self.labels[root] = label

    def name_of(self, root: PinRef) -> str:
        if self.grounded[root]:
            return GROUND_NET
        return self.labels[root].name


def _auto_names(reserved: set[str]):
    n = 0
    while True:
        n += 1
        name = f"{AUTO_NET_PREFIX}{n}"
        if name not in reserved:
            yield n, name


def _check_ref(
    ref: PinRef,
    components: dict[str, ComponentInstance],
    registry: GeometryRegistry | None,
    context: str,
) -> ComponentInstance:
    ci = components.get(ref.instance_id)
    if ci is None:
        raise DanglingConnection(ref.instance_id, context)
    if registry is not None:
        registry.pin(ci.kind, ref.pin, ci.instance_id)
    return ci


def _build_forest(
    declarations: list[NetDeclaration],
    connections: list[ConnectionEdge],
    components: list[ComponentInstance],
    registry: GeometryRegistry | None,
) -> _NetForest:
    by_id: dict[str, ComponentInstance] = {}
    for ci in components:
        by_id.setdefault(ci.instance_id, ci)

    forest = _NetForest()
    grounds = {iid: ci for iid, ci in by_id.items() if ci.kind.is_ground}

    # ── 1. Declarations ────────────────────────────────────────────
    first_pin_by_name: dict[str, PinRef] = {}
    for seq, decl in enumerate(declarations):
        label = _ClassLabel(_DECLARED, seq, decl.name)
        for ref in decl.members:
            _check_ref(ref, by_id, registry, f"net '{decl.name}'")
            forest.add(ref, label)
        if not decl.members:
            log.warning("Net '%s' declares no pins", decl.name)
            continue
        anchor = first_pin_by_name.setdefault(decl.name, decl.members[0])
        for ref in decl.members:
            forest.union(anchor, ref)
        if decl.name == GROUND_NET:
            forest.mark_ground(anchor)

    # ── 2. Connections ─────────────────────────────────────────────
    auto = _auto_names({d.name for d in declarations})
    for edge in connections:
        ctx = f"connection '{edge}'"
        _check_ref(edge.source, by_id, registry, ctx)
        _check_ref(edge.target, by_id, registry, ctx)
        if not forest.has_class(edge.source) and not forest.has_class(edge.target):
            seq, name = next(auto)
            forest.add(edge.source, _ClassLabel(_AUTO, seq, name))
            log.debug("Created net %s for %s", name, edge)
        else:
            forest.add(edge.source)
        forest.add(edge.target)
        forest.union(edge.source, edge.target)

    # ── 3. Ground ──────────────────────────────────────────────────
    if registry is not None:
        # Unconnected ground pins still belong to the ground net
        for iid, ci in grounds.items():
            for pin_name in registry.lookup(ci.kind).pin_names:
                ref = PinRef(iid, pin_name)
                if not forest.has_class(ref):
                    forest.add(ref, _ClassLabel(_DECLARED, -1, GROUND_NET))
    for ref in list(forest.sets):
        if ref.instance_id in grounds:
            forest.mark_ground(ref)

    return forest


def resolve_nets(
    declarations: list[NetDeclaration],
    connections: list[ConnectionEdge],
    components: list[ComponentInstance],
    registry: GeometryRegistry | None = None,
) -> dict[PinRef, str]:
    """Map every referenced pin to its canonical net id.

    Keys appear in the order pins were first seen: declaration members,
    then connection endpoints, then unconnected ground pins.

    Raises
    ------
    DanglingConnection
        A declaration member or connection endpoint names an instance
        that is not in *components*.
    PinNotFound / UnknownComponentType
        With a *registry*, a referenced pin does not exist on its
        component's template.
    """
    forest = _build_forest(declarations, connections, components, registry)
    result = {ref: forest.name_of(forest.sets.find(ref)) for ref in forest.sets}
    log.info("Resolved %d pins into %d nets",
             len(result), len(set(result.values())))
    return result


def resolve_circuit_nets(
    circuit: Circuit,
    registry: GeometryRegistry | None = None,
) -> dict[PinRef, str]:
    """resolve_nets over a whole Circuit."""
    return resolve_nets(
        circuit.nets, circuit.connections, circuit.components, registry)


def build_nets(
    declarations: list[NetDeclaration],
    connections: list[ConnectionEdge],
    components: list[ComponentInstance],
    registry: GeometryRegistry | None = None,
) -> list[Net]:
    """Group the pin map into Net objects, ground first, then first seen."""
    return group_nets(
        resolve_nets(declarations, connections, components, registry))


def group_nets(net_map: dict[PinRef, str]) -> list[Net]:
    members: dict[str, list[PinRef]] = {}
    for ref, net_id in net_map.items():
        members.setdefault(net_id, []).append(ref)
    order = sorted(members, key=lambda nid: nid != GROUND_NET)
    return [Net(id=nid, members=frozenset(members[nid])) for nid in order]
