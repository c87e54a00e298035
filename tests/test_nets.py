"""Tests for net resolution.

Validates:
  - Closure over chains of connections
  - Declared, auto-generated and ground naming rules
  - Ground propagation regardless of processing order
  - Reference errors
  - Grouping and serialization
"""

from __future__ import annotations

import itertools
import json
import unittest

from schemalayout.catalog import ComponentKind, default_registry
from schemalayout.errors import DanglingConnection, PinNotFound
from schemalayout.pipeline.circuit import (
    ComponentInstance, ConnectionEdge, NetDeclaration, PinRef,
)
from schemalayout.pipeline.nets import (
    GROUND_NET, Net, build_nets, nets_to_dict, parse_nets, resolve_circuit_nets,
    resolve_nets,
)
from schemalayout.pipeline.nets.union_find import DisjointSet
from tests.divider_fixture import make_divider_circuit


def _p(ref: str) -> PinRef:
    return PinRef.parse(ref)


def _e(a: str, b: str) -> ConnectionEdge:
    return ConnectionEdge(_p(a), _p(b))


def _resistors(*ids: str) -> list[ComponentInstance]:
    return [ComponentInstance(iid, ComponentKind.RESISTOR) for iid in ids]


class TestDisjointSet(unittest.TestCase):

    def test_union_and_find(self):
        ds = DisjointSet()
        for x in "abcd":
            ds.add(x)
        self.assertFalse(ds.add("a"))
        ds.union("a", "b")
        root, absorbed = ds.union("c", "d")
        self.assertIsNotNone(absorbed)
        self.assertEqual(ds.find("a"), ds.find("b"))
        self.assertNotEqual(ds.find("a"), ds.find("c"))
        ds.union("b", "d")
        self.assertEqual(len({ds.find(x) for x in "abcd"}), 1)
        self.assertEqual(ds.union("a", "c")[1], None)

    def test_groups_keep_insertion_order(self):
        ds = DisjointSet()
        for x in "abc":
            ds.add(x)
        ds.union("c", "a")
        groups = list(ds.groups().values())
        self.assertEqual(groups, [["a", "c"], ["b"]])


class TestResolveNets(unittest.TestCase):

    def test_chain_closure(self):
        components = _resistors("A", "B", "C", "D")
        edges = [_e("A.2", "B.1"), _e("B.1", "C.1"), _e("C.1", "D.1")]
        net_map = resolve_nets([], edges, components)
        self.assertEqual(len(set(net_map.values())), 1)
        self.assertEqual(net_map[_p("A.2")], "N1")
        self.assertEqual(set(net_map), {_p("A.2"), _p("B.1"), _p("C.1"), _p("D.1")})

    def test_auto_names_in_edge_order(self):
        components = _resistors("A", "B", "C", "D")
        net_map = resolve_nets([], [_e("A.1", "B.1"), _e("C.1", "D.1")], components)
        self.assertEqual(net_map[_p("A.1")], "N1")
        self.assertEqual(net_map[_p("C.1")], "N2")

    def test_merge_keeps_older_auto_name(self):
        components = _resistors("A", "B", "C", "D")
        edges = [_e("A.1", "B.1"), _e("C.1", "D.1"), _e("D.1", "B.1")]
        net_map = resolve_nets([], edges, components)
        self.assertEqual(set(net_map.values()), {"N1"})

    def test_declared_name_beats_auto_name(self):
        components = _resistors("A", "B", "C")
        decls = [NetDeclaration("VCC", (_p("A.1"),))]
        edges = [_e("B.1", "C.1"), _e("C.1", "A.1")]
        net_map = resolve_nets(decls, edges, components)
        self.assertEqual(set(net_map.values()), {"VCC"})

    def test_earlier_declaration_wins(self):
        components = _resistors("A", "B", "C")
        decls = [
            NetDeclaration("FIRST", (_p("A.1"), _p("B.1"))),
            NetDeclaration("SECOND", (_p("B.1"), _p("C.1"))),
        ]
        net_map = resolve_nets(decls, [], components)
        self.assertEqual(set(net_map.values()), {"FIRST"})

    def test_same_declared_name_is_one_net(self):
        components = _resistors("A", "B")
        decls = [
            NetDeclaration("VCC", (_p("A.1"),)),
            NetDeclaration("VCC", (_p("B.1"),)),
        ]
        groups = build_nets(decls, [], components)
        self.assertEqual(groups, [Net("VCC", frozenset({_p("A.1"), _p("B.1")}))])

    def test_auto_names_skip_declared(self):
        components = _resistors("A", "B", "C")
        decls = [NetDeclaration("N1", (_p("A.1"),))]
        net_map = resolve_nets(decls, [_e("B.1", "C.1")], components)
        self.assertEqual(net_map[_p("A.1")], "N1")
        self.assertEqual(net_map[_p("B.1")], "N2")

    def test_declared_zero_is_ground(self):
        components = _resistors("A", "B")
        decls = [NetDeclaration("0", (_p("A.2"),))]
        net_map = resolve_nets(decls, [_e("B.2", "A.2")], components)
        self.assertEqual(net_map[_p("B.2")], GROUND_NET)

    def test_ground_regardless_of_order(self):
        components = [
            *_resistors("R1", "R2"),
            ComponentInstance("GND1", ComponentKind.SIGNAL_GROUND),
        ]
        edges = [_e("R1.2", "R2.1"), _e("R2.1", "GND1.GND"), _e("R1.1", "R2.2")]
        for order in itertools.permutations(edges):
            with self.subTest(order=[str(e) for e in order]):
                net_map = resolve_nets([], list(order), components)
                self.assertEqual(net_map[_p("R1.2")], GROUND_NET)
                self.assertEqual(net_map[_p("R2.1")], GROUND_NET)
                self.assertEqual(net_map[_p("GND1.GND")], GROUND_NET)
                self.assertNotEqual(net_map[_p("R1.1")], GROUND_NET)

    def test_ground_wire_scenario(self):
        components = [
            ComponentInstance("GND1", ComponentKind.SIGNAL_GROUND),
            *_resistors("R2"),
            ComponentInstance("V1", ComponentKind.DC_VOLTAGE),
        ]
        edges = [_e("GND1.GND", "R2.2"), _e("R2.1", "V1.+")]
        net_map = resolve_nets([], edges, components, default_registry())
        self.assertEqual(net_map[_p("R2.2")], GROUND_NET)
        self.assertEqual(net_map[_p("GND1.GND")], GROUND_NET)
        self.assertEqual(net_map[_p("R2.1")], "N2")

    def test_ground_overrides_declared_name(self):
        components = [
            *_resistors("R1"),
            ComponentInstance("GND1", ComponentKind.EARTH_GROUND),
        ]
        decls = [NetDeclaration("RETURN", (_p("R1.2"), _p("GND1.GND")))]
        net_map = resolve_nets(decls, [], components)
        self.assertEqual(set(net_map.values()), {GROUND_NET})

    def test_unconnected_ground_pins_with_registry(self):
        components = [
            *_resistors("R1", "R2"),
            ComponentInstance("GND1", ComponentKind.SIGNAL_GROUND),
            ComponentInstance("GND2", ComponentKind.CHASSIS_GROUND),
        ]
        edges = [_e("R1.2", "GND1.GND")]
        with_registry = resolve_nets([], edges, components, default_registry())
        self.assertEqual(with_registry[_p("GND2.GND")], GROUND_NET)
        without = resolve_nets([], edges, components)
        self.assertNotIn(_p("GND2.GND"), without)

    def test_dangling_reference(self):
        with self.assertRaises(DanglingConnection) as cm:
            resolve_nets([], [_e("A.1", "Z.1")], _resistors("A"))
        self.assertEqual(cm.exception.instance_id, "Z")

    def test_dangling_declaration_member(self):
        with self.assertRaises(DanglingConnection) as cm:
            resolve_nets([NetDeclaration("VCC", (_p("Z.1"),))], [], _resistors("A"))
        self.assertIn("VCC", cm.exception.context)

    def test_unknown_pin_only_checked_with_registry(self):
        components = _resistors("A", "B")
        edges = [_e("A.9", "B.1")]
        self.assertEqual(resolve_nets([], edges, components)[_p("A.9")], "N1")
        with self.assertRaises(PinNotFound):
            resolve_nets([], edges, components, default_registry())


class TestDividerNets(unittest.TestCase):
    """Net resolution on the divider fixture."""

    @classmethod
    def setUpClass(cls):
        cls.net_map = resolve_circuit_nets(make_divider_circuit(), default_registry())

    def test_net_map(self):
        self.assertEqual(self.net_map, {
            _p("R1.2"): "VOUT",
            _p("R2.1"): "VOUT",
            _p("V1.+"): "N1",
            _p("R1.1"): "N1",
            _p("R2.2"): GROUND_NET,
            _p("GND1.GND"): GROUND_NET,
            _p("V1.-"): GROUND_NET,
        })

    def test_build_nets_ground_first(self):
        circuit = make_divider_circuit()
        nets = build_nets(circuit.nets, circuit.connections, circuit.components)
        self.assertEqual([n.id for n in nets], [GROUND_NET, "VOUT", "N1"])
        self.assertTrue(nets[0].is_ground)
        self.assertEqual(len(nets[0]), 3)

    def test_serialization_round_trip(self):
        data = json.loads(json.dumps(nets_to_dict(self.net_map)))
        self.assertEqual(data["nets"][0], {
            "id": "0", "pins": ["GND1.GND", "R2.2", "V1.-"],
        })
        self.assertEqual(parse_nets(data), self.net_map)


if __name__ == "__main__":
    unittest.main()
