import os
import random
import sys
import threading
import unittest
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from menu.items import CategoryGroup, MultiVariantItem, SimpleItem  # noqa: E402
from ordering.cart import Cart  # noqa: E402
from ordering.notifier import ChangeNotifier  # noqa: E402
from ordering.packaging import PackagedItem  # noqa: E402


def recomputed_total(snapshot) -> Decimal:
    total = Decimal("0")
    for item, qty in snapshot.items():
        total += item.price * qty
    return total


class CartTestCase(unittest.TestCase):
    def setUp(self):
        self.cart = Cart()
        self.calls = []
        self.cart.subscribe(lambda: self.calls.append(len(self.cart)))
        self.burger = SimpleItem("Burger", Decimal("7.50"), category_name="Burgers", item_id=1)
        self.fries = SimpleItem("Fries", Decimal("2.25"), category_name="Fries", item_id=2)
        self.cola = SimpleItem("Cola", Decimal("1.99"), category_name="Cold Drinks", item_id=3)

    def test_add_creates_and_increments(self):
        added = self.cart.add(self.burger)
        self.assertEqual(added.quantity, 1)
        self.assertFalse(added.packaged)
        self.assertEqual(added.message, "Burger added to cart!")

        added = self.cart.add(self.burger)
        self.assertEqual(added.quantity, 2)
        self.assertEqual(self.cart.snapshot(), {self.burger: 2})
        self.assertEqual(self.calls, [1, 1])

    def test_add_packaged_item_reports_annotation(self):
        added = self.cart.add(PackagedItem(self.burger, "boxed!"))
        self.assertTrue(added.packaged)
        self.assertEqual(added.message, "boxed!")
        self.assertIs(added.item, self.burger)
        self.assertEqual(self.cart.quantity(self.burger), 1)

    def test_remove_decrements_then_deletes(self):
        self.cart.add(self.fries)
        self.cart.add(self.fries)
        self.cart.remove(self.fries)
        self.assertEqual(self.cart.quantity(self.fries), 1)
        self.cart.remove(self.fries)
        self.assertNotIn(self.fries, self.cart.snapshot())
        self.assertEqual(len(self.calls), 4)

    def test_remove_absent_is_silent_noop(self):
        self.cart.add(self.burger)
        before, total_before = self.cart.snapshot(), self.cart.total()
        self.calls.clear()

        self.cart.remove(self.cola)
        self.assertEqual(self.cart.snapshot(), before)
        self.assertEqual(self.cart.total(), total_before)
        self.assertEqual(self.calls, [])

    def test_add_then_remove_restores_snapshot(self):
        self.cart.add(self.burger)
        self.cart.add(self.cola)
        before = self.cart.snapshot()
        for item in (self.burger, self.fries):
            self.cart.add(item)
            self.cart.remove(item)
            self.assertEqual(self.cart.snapshot(), before)

    def test_clear_notifies_even_when_empty(self):
        self.cart.clear()
        self.assertEqual(self.calls, [0])
        self.cart.add(self.burger)
        self.cart.clear()
        self.assertEqual(self.cart.snapshot(), {})
        self.assertEqual(self.cart.total(), Decimal("0"))
        self.assertFalse(self.cart)

    def test_snapshot_is_independent_copy(self):
        self.cart.add(self.burger)
        snap = self.cart.snapshot()
        snap[self.burger] = 99
        snap[self.cola] = 1
        self.assertEqual(self.cart.snapshot(), {self.burger: 1})

    def test_total_matches_snapshot_for_random_sequences(self):
        rng = random.Random(1234)
        items = [self.burger, self.fries, self.cola]
        for _ in range(200):
            item = rng.choice(items)
            if rng.random() < 0.6:
                self.cart.add(item)
            else:
                self.cart.remove(item)
            snap = self.cart.snapshot()
            self.assertEqual(self.cart.total(), recomputed_total(snap))
            self.assertTrue(all(qty >= 1 for qty in snap.values()))

    def test_same_id_keeps_first_stored_entry(self):
        original = SimpleItem("Burger", Decimal("7.50"), item_id=1)
        repriced = SimpleItem("Burger v2", Decimal("9.00"), item_id=1)
        self.cart.add(original)
        self.cart.add(repriced)

        snap = self.cart.snapshot()
        self.assertEqual(len(snap), 1)
        (stored, qty), = snap.items()
        self.assertIs(stored, original)
        self.assertEqual(qty, 2)
        self.assertEqual(self.cart.total(), Decimal("15.00"))

    def test_variants_of_same_size_share_a_line(self):
        pizza = MultiVariantItem("Margherita", {"Small": "8", "Large": "13"}, category_name="Pizzas")
        self.cart.add(pizza.variant("Small"))
        self.cart.add(pizza.variant("Small"))
        self.cart.add(pizza.variant("Large"))
        self.assertEqual(self.cart.quantity(pizza.variant("Small")), 2)
        self.assertEqual(len(self.cart), 2)
        self.assertEqual(self.cart.total(), Decimal("29"))

    def test_unresolved_nodes_are_rejected(self):
        self.cart.add(self.burger)
        self.calls.clear()
        pizza = MultiVariantItem("Combo", {"Small": "6"})
        with self.assertRaises(TypeError):
            self.cart.add(pizza)
        with self.assertRaises(TypeError):
            self.cart.add(CategoryGroup("Burgers", 1, (self.burger,)))
        self.assertEqual(self.cart.snapshot(), {self.burger: 1})
        self.assertEqual(self.cart.total(), Decimal("7.50"))
        self.assertEqual(self.calls, [])

    def test_concurrent_adds_and_removes(self):
        items = [self.burger, self.fries, self.cola]
        start = threading.Barrier(6)

        def adder():
            start.wait()
            for _ in range(200):
                for item in items:
                    self.cart.add(item)

        def remover():
            start.wait()
            for _ in range(50):
                for item in items:
                    self.cart.remove(item)

        # enough stock that no remove finds an absent item
        for _ in range(150):
            for item in items:
                self.cart.add(item)

        threads = [threading.Thread(target=adder) for _ in range(3)]
        threads += [threading.Thread(target=remover) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # 150 + 3 * 200 - 3 * 50
        for item in items:
            self.assertEqual(self.cart.quantity(item), 600)
        snapshot = self.cart.snapshot()
        self.assertEqual(self.cart.total(), recomputed_total(snapshot))
        self.assertEqual(self.cart.total(), Decimal("600") * Decimal("11.74"))

    def test_listener_may_read_cart(self):
        seen = []
        self.cart.subscribe(lambda: seen.append(self.cart.total()))
        self.cart.add(self.cola)
        self.assertEqual(seen, [Decimal("1.99")])

    def test_shared_notifier(self):
        notifier = ChangeNotifier()
        cart = Cart(notifier)
        hits = []
        notifier.subscribe(lambda: hits.append("x"))
        cart.add(self.burger)
        self.assertIs(cart.notifier, notifier)
        self.assertEqual(hits, ["x"])

    def test_unsubscribe_stops_notifications(self):
        def listener():
            self.calls.append("extra")

        self.cart.subscribe(listener)
        self.cart.unsubscribe(listener)
        self.cart.add(self.burger)
        self.assertNotIn("extra", self.calls)


class ChangeNotifierTestCase(unittest.TestCase):
    def test_notifies_in_subscription_order(self):
        notifier = ChangeNotifier()
        order = []
        notifier.subscribe(lambda: order.append("a"))
        notifier.subscribe(lambda: order.append("b"))
        notifier.notify()
        self.assertEqual(order, ["a", "b"])

    def test_duplicate_subscription_called_twice(self):
        notifier = ChangeNotifier()
        hits = []

        def listener():
            hits.append(1)

        notifier.subscribe(listener)
        notifier.subscribe(listener)
        notifier.notify()
        self.assertEqual(len(hits), 2)
        self.assertEqual(len(notifier), 2)

        notifier.unsubscribe(listener)
        notifier.notify()
        self.assertEqual(len(hits), 3)

    def test_unknown_unsubscribe_is_ignored(self):
        notifier = ChangeNotifier()
        notifier.unsubscribe(lambda: None)
        self.assertEqual(len(notifier), 0)

    def test_failing_listener_aborts_the_rest(self):
        notifier = ChangeNotifier()
        hits = []

        def boom():
            raise RuntimeError("listener failed")

        notifier.subscribe(lambda: hits.append("first"))
        notifier.subscribe(boom)
        notifier.subscribe(lambda: hits.append("last"))
        with self.assertRaises(RuntimeError):
            notifier.notify()
        self.assertEqual(hits, ["first"])

    def test_failing_listener_propagates_from_cart_after_mutation(self):
        cart = Cart()
        item = SimpleItem("Tea", "2.00", item_id=5)

        def boom():
            raise RuntimeError("listener failed")

        cart.subscribe(boom)
        with self.assertRaises(RuntimeError):
            cart.add(item)
        self.assertEqual(cart.quantity(item), 1)


if __name__ == "__main__":
    unittest.main()
