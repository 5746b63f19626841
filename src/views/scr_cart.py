from typing import List

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Label, Rule

from menu.items import SimpleItem
from utils.messages import CartChangedMessage, OrderPlacedMessage
from utils.pure import cart_lines, format_money
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import ConfirmModal


class CartScreen(BaseScreen):
    """
    Cart contents with remove / clear / checkout.
    Always rendered from a fresh cart snapshot.
    """

    DEFAULT_CSS = """
    #table-cart { height: 1fr; }
    #hort-buttons { height: auto; }
    #hort-buttons Button { margin-right: 1; }
    """

    SUB_TITLE_TEXT = "Cart"

    def __init__(self) -> None:
        super().__init__()
        self._rows: List[SimpleItem] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield DataTable(id="table-cart")
        yield Label("Total: $0.00", id="label-cart-total")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Remove One", id="btn-remove")
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Item", "Unit Price", "Qty", "Subtotal")
        self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ScreenResume)
    def handle_cart_change(self) -> None:
        cart = self.app.context.cart
        snapshot = cart.snapshot()
        self._rows = sorted(snapshot, key=lambda item: item.name)

        table = self.query_one(DataTable)
        table.clear()
        for row in cart_lines(snapshot):
            table.add_row(*row)

        self.query_one("#label-cart-total", Label).update(
            f"Total: {format_money(cart.total())}"
        )
        self.query_one("#btn-checkout", Button).disabled = not snapshot

    @on(Button.Pressed, "#btn-remove")
    def handle_remove(self) -> None:
        table = self.query_one(DataTable)
        if not self._rows:
            self.app.notify("Cart is empty.", severity="warning")
            return
        item = self._rows[min(table.cursor_row, len(self._rows) - 1)]
        self.app.context.cart.remove(item)
        self.notify(f"Removed one {item.name}.")

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        cart = self.app.context.cart
        if not cart:
            self.app.notify("Cart is empty.", severity="warning")
            return

        if await self.app.push_screen_wait(
            ConfirmModal(
                "Do you really want to remove all items from cart?",
                destructive=True,
            )
        ):
            cart.clear()

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        if not self.app.context.cart:
            self.app.notify(
                "Your cart is empty. Please add items before checking out.",
                severity="warning",
            )
            return

        order_id = await self.app.push_screen_wait(CheckoutModal())
        if order_id is not None:
            self.app.post_message(OrderPlacedMessage(order_id))
