import os
import sys
import unittest
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from menu.items import SimpleItem  # noqa: E402
from utils.pure import cart_lines, format_money, generate_markdown_table  # noqa: E402
from utils.validators import validate_checkout_form  # noqa: E402


class PureHelpersTestCase(unittest.TestCase):
    def test_format_money(self):
        self.assertEqual(format_money(Decimal("6.5")), "$6.50")
        self.assertEqual(format_money(Decimal("0")), "$0.00")
        self.assertEqual(format_money(Decimal("2.005")), "$2.01")

    def test_cart_lines_sorted_by_name(self):
        snapshot = {
            SimpleItem("Wings", Decimal("6.49"), item_id=2): 2,
            SimpleItem("Cola (Small)", Decimal("1.5")): 1,
        }
        self.assertEqual(
            cart_lines(snapshot),
            [
                ["Cola (Small)", "$1.50", "1", "$1.50"],
                ["Wings", "$6.49", "2", "$12.98"],
            ],
        )

    def test_markdown_table(self):
        md = generate_markdown_table(["A", "B"], [[1, 2]], ["l", "r"])
        self.assertEqual(md, "| A | B |\n| :--- | ---: |\n| 1 | 2 |")
        self.assertEqual(generate_markdown_table(["A"], []), "")
        # first row doubles as header
        self.assertEqual(
            generate_markdown_table(None, [["h"], ["v"]]), "| h |\n| :---: |\n| v |"
        )
        with self.assertRaises(ValueError):
            generate_markdown_table(["A", "B"], [[1, 2]], ["l"])


class CheckoutFormTestCase(unittest.TestCase):
    def test_all_present(self):
        self.assertEqual(validate_checkout_form("Ada", "1 Loop Rd", "4111", "123"), [])

    def test_reports_blank_fields_in_order(self):
        self.assertEqual(
            validate_checkout_form("  ", "1 Loop Rd", "", "123"), ["Name", "Card Number"]
        )
        self.assertEqual(
            validate_checkout_form("", "", "", ""),
            ["Name", "Address", "Card Number", "CVV"],
        )


if __name__ == "__main__":
    unittest.main()
