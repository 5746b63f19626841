import os
import sys
import unittest
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from menu.items import CategoryGroup, MultiVariantItem, SimpleItem  # noqa: E402
from ordering.packaging import (  # noqa: E402
    PACKAGING_TEMPLATES,
    PackagedItem,
    PackagingResolver,
    packaging_message,
)
from utils.errors import InvalidState  # noqa: E402


class PackagingTestCase(unittest.TestCase):
    def test_pizza_template(self):
        item = SimpleItem("Margherita (Large)", Decimal("13"), category_name="Pizzas")
        packaged = PackagingResolver().with_item(item).build()
        self.assertIsInstance(packaged, PackagedItem)
        self.assertIs(packaged.item, item)
        self.assertEqual(
            packaged.annotation,
            "Your freshly baked Margherita (Large) is snug in its signature delivery box!",
        )

    def test_unknown_category_uses_generic_template(self):
        item = SimpleItem("Mystery Box", Decimal("1"), category_name="Specials")
        self.assertEqual(
            PackagingResolver().with_item(item).annotation(),
            "Mystery Box has been thoughtfully packaged for your order!",
        )

    def test_every_category_has_distinct_template(self):
        self.assertEqual(len(PACKAGING_TEMPLATES), 10)
        messages = {packaging_message(cat, "Thing") for cat in PACKAGING_TEMPLATES}
        self.assertEqual(len(messages), 10)
        for msg in messages:
            self.assertIn("Thing", msg)

    def test_resolving_before_binding_is_invalid_state(self):
        resolver = PackagingResolver()
        with self.assertRaises(InvalidState):
            resolver.build()
        with self.assertRaises(InvalidState):
            resolver.annotation()

    def test_only_resolved_items_can_be_bound(self):
        resolver = PackagingResolver()
        with self.assertRaises(TypeError):
            resolver.with_item(CategoryGroup("Pizzas", 7))
        with self.assertRaises(TypeError):
            resolver.with_item(MultiVariantItem("Cola", {"Small": "1.5"}))

    def test_annotation_computed_fresh_for_rebound_item(self):
        resolver = PackagingResolver()
        fries = SimpleItem("Fries", Decimal("2"), category_name="Fries")
        wrap = SimpleItem("Wrap", Decimal("6"), category_name="Wraps & Rolls")
        self.assertIn("crisply bagged", resolver.with_item(fries).annotation())
        self.assertIn("tightly rolled", resolver.with_item(wrap).annotation())


if __name__ == "__main__":
    unittest.main()
