from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header

from utils.messages import CartChangedMessage
from utils.pure import format_money
from views.modal_dialog import QuitDialogModal


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers and keybindings.
    """

    BINDINGS = [
        Binding("f1", "app.switch_mode('menu')", "Menu", show=True),
        Binding("f2", "app.switch_mode('cart')", "Cart", show=True),
        Binding("f3", "app.switch_mode('past_orders')", "Past Orders", show=True),
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    SUB_TITLE_TEXT = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer(show_command_palette=False)

    def on_mount(self) -> None:
        self.app.title = "Food Ordering"
        self.update_sub_title()

    @on(CartChangedMessage)
    def update_sub_title(self) -> None:
        cart = self.app.context.cart
        summary = f"{len(cart)} item(s) in cart, {format_money(cart.total())}"
        if self.SUB_TITLE_TEXT:
            summary = f"{self.SUB_TITLE_TEXT} | {summary}"
        self.sub_title = summary

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal(len(self.app.context.cart)))
