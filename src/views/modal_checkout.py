from typing import Optional

from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer

from ordering.commands import PlaceOrder
from utils.errors import EmptyCart
from utils.pure import cart_lines, format_money, generate_markdown_table
from utils.validators import validate_checkout_form
from views.modal_dialog import ConfirmModal


class CheckoutModal(ModalScreen[Optional[int]]):
    """
    Order summary plus customer and payment details.
    Dismisses with the new order id on success, None otherwise.
    Card details are only checked for presence; nothing is charged or stored.
    """

    DEFAULT_CSS = """
    CheckoutModal { align: center middle; }
    #vert-checkout { width: 80; height: 90%; padding: 1 2; border: thick $primary; background: $surface; }
    #hort-checkout-buttons { height: auto; align-horizontal: right; }
    #hort-checkout-buttons Button { margin-left: 1; }
    """

    FIELD_IDS = {
        "Name": "#input-name",
        "Address": "#input-address",
        "Card Number": "#input-card",
        "CVV": "#input-cvv",
    }

    def compose(self) -> ComposeResult:
        with Vertical(id="vert-checkout"):
            yield MarkdownViewer("", show_table_of_contents=False)
            yield Label("Name")
            yield Input(placeholder="Jane Doe", id="input-name")
            yield Label("Delivery Address")
            yield Input(placeholder="123 Main St, Anytown", id="input-address")
            yield Label("Card Number")
            yield Input(placeholder="4111 1111 1111 1111", id="input-card")
            yield Label("CVV")
            yield Input(placeholder="123", id="input-cvv", password=True, max_length=4)
            with Horizontal(id="hort-checkout-buttons"):
                yield Button("Go Back", id="btn-quit")
                yield Button("Place Order", id="btn-submit", variant="primary")

    async def on_mount(self):
        cart = self.app.context.cart
        headers = ["Item", "Unit Price", "Quantity", "Total Price"]
        md = "### Order Summary\n\n"
        md += generate_markdown_table(headers, cart_lines(cart.snapshot()), ["l", "c", "c", "c"])
        md += f"\n\n**Total:** {format_money(cart.total())}"
        await self.query_one(MarkdownViewer).document.update(md)
        self.query_one("#input-name").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(None)

    def _value(self, label: str) -> str:
        return self.query_one(self.FIELD_IDS[label], Input).value.strip()

    @on(Button.Pressed, "#btn-submit")
    @work(exclusive=True)
    async def handle_submit(self):
        missing = validate_checkout_form(*(self._value(label) for label in self.FIELD_IDS))
        for label, input_id in self.FIELD_IDS.items():
            self.query_one(input_id, Input).set_class(label in missing, "-invalid")
        if missing:
            self.query_one(self.FIELD_IDS[missing[0]], Input).focus()
            self.notify(f"Please fill in: {', '.join(missing)}.", severity="error")
            return

        if not await self.app.push_screen_wait(
            ConfirmModal(
                "Place order? This cannot be undone.",
                confirm_label="Place order",
                cancel_label="Back",
            )
        ):
            return

        context = self.app.context
        result = await PlaceOrder(
            context.cart, context.committer, self._value("Name"), self._value("Address")
        ).execute()
        if result.ok:
            self.notify(
                f"Order placed! Your order number is {result.order_id}.",
                title="Order Confirmation",
            )
            self.dismiss(result.order_id)
        elif isinstance(result.error, EmptyCart):
            self.notify(str(result.error), severity="warning")
            self.dismiss(None)
        else:
            self.notify(
                f"Order placement failed: {result.error}",
                title="Order Failed",
                severity="error",
            )

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(None)
