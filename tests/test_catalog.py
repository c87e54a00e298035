"""Tests for the geometry catalog.

Validates:
  - The bundled catalog loads cleanly and covers every component kind
  - Lookups fail loudly for unknown kinds and pins
  - Broken catalog directories are reported, not raised
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from schemalayout.catalog import (
    ComponentKind, ComponentTemplate, GeometryRegistry, PinClass,
    PinDirection, PinTemplate, catalog_to_dict, default_registry,
    list_components, load_catalog,
)
from schemalayout.errors import PinNotFound, UnknownComponentType


def _resistor_only() -> GeometryRegistry:
    return GeometryRegistry([
        ComponentTemplate(
            kind=ComponentKind.RESISTOR, width=40.0, height=10.0,
            pins=(
                PinTemplate("1", (-20.0, 0.0), PinDirection.PASSIVE, PinClass.ANALOG),
                PinTemplate("2", (20.0, 0.0), PinDirection.PASSIVE, PinClass.ANALOG),
            ),
        ),
    ])


class TestBundledCatalog(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.result = load_catalog()

    def test_loads_without_errors(self):
        self.assertTrue(self.result.ok, [str(e) for e in self.result.errors])

    def test_every_kind_covered(self):
        self.assertEqual(self.result.registry.missing_kinds(), [])
        self.assertEqual(len(self.result.registry), len(ComponentKind))

    def test_resistor_geometry(self):
        t = self.result.registry.lookup(ComponentKind.RESISTOR)
        self.assertEqual(t.size, (40.0, 10.0))
        self.assertEqual(t.pin_names, ["1", "2"])
        self.assertEqual(t.pin("1").offset, (-20.0, 0.0))
        self.assertEqual(t.pin("2").offset, (20.0, 0.0))

    def test_ground_kinds_have_gnd_pin(self):
        for kind in (ComponentKind.SIGNAL_GROUND, ComponentKind.CHASSIS_GROUND,
                     ComponentKind.EARTH_GROUND):
            t = self.result.registry.lookup(kind)
            self.assertTrue(kind.is_ground)
            self.assertEqual(t.pin_names, ["GND"])
            self.assertEqual(t.pin("GND").electrical_class, PinClass.GROUND)

    def test_pin_names_unique_per_template(self):
        for t in self.result.registry:
            self.assertEqual(len(t.pin_names), len(set(t.pin_names)), t.kind)

    def test_default_registry_is_cached(self):
        self.assertIs(default_registry(), default_registry())

    def test_list_components_sorted(self):
        names = list_components(default_registry())
        self.assertEqual(names, sorted(names))
        self.assertIn("resistor", names)
        self.assertIn("signal_ground", names)

    def test_catalog_to_dict_is_json_safe(self):
        data = catalog_to_dict(default_registry())
        text = json.dumps(data)
        self.assertIn('"resistor"', text)


class TestRegistryLookup(unittest.TestCase):

    def setUp(self):
        self.registry = _resistor_only()

    def test_unknown_kind_raises(self):
        with self.assertRaises(UnknownComponentType) as cm:
            self.registry.lookup(ComponentKind.CAPACITOR)
        self.assertEqual(cm.exception.kind, "capacitor")

    def test_unknown_pin_raises(self):
        with self.assertRaises(PinNotFound) as cm:
            self.registry.pin(ComponentKind.RESISTOR, "3", "R9")
        self.assertEqual(cm.exception.pin, "3")
        self.assertEqual(cm.exception.instance_id, "R9")

    def test_unknown_type_is_a_pin_not_found(self):
        with self.assertRaises(PinNotFound):
            self.registry.pin(ComponentKind.CAPACITOR, "1")

    def test_missing_kinds_lists_the_rest(self):
        missing = self.registry.missing_kinds()
        self.assertNotIn(ComponentKind.RESISTOR, missing)
        self.assertEqual(len(missing), len(ComponentKind) - 1)

    def test_parse_unknown_tag(self):
        with self.assertRaises(UnknownComponentType):
            ComponentKind.parse("flux_capacitor")


class TestBrokenCatalog(unittest.TestCase):

    def _write(self, d: Path, name: str, payload) -> None:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        (d / name).write_text(text, encoding="utf-8")

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            result = load_catalog(Path(tmp))
        self.assertFalse(result.ok)
        self.assertEqual(len(result.registry), 0)

    def test_bad_json_and_bad_template(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            self._write(d, "broken.json", "{not json")
            self._write(d, "passive.json", {"components": [
                {"kind": "resistor", "width": 0, "height": 10, "pins": [
                    {"name": "1", "offset": [-20, 0]},
                    {"name": "1", "offset": [20, 0]},
                ]},
            ]})
            result = load_catalog(d)

        fields = {(e.component_id, e.field) for e in result.errors}
        self.assertIn(("broken", "json"), fields)
        self.assertIn(("resistor", "width"), fields)
        self.assertIn(("resistor", "pins.1"), fields)
        # Template with validation issues is still registered
        self.assertIn(ComponentKind.RESISTOR, result.registry)
        # Everything else is reported missing
        self.assertIn(("capacitor", "kind"), fields)

    def test_duplicate_kind_reported(self):
        template = {"kind": "fuse", "width": 30, "height": 10, "pins": [
            {"name": "1", "offset": [-15, 0]}, {"name": "2", "offset": [15, 0]},
        ]}
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            self._write(d, "a.json", {"components": [template]})
            self._write(d, "b.json", {"components": [template]})
            result = load_catalog(d)
        dupes = [e for e in result.errors if e.component_id == "fuse"]
        self.assertEqual(len(dupes), 1)
        self.assertIn("Duplicate", dupes[0].message)


if __name__ == "__main__":
    unittest.main()
