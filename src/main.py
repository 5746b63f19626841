from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from utils.errors import ResourceUnavailable
from utils.logger import get_logger
from utils.messages import CartChangedMessage, OrderPlacedMessage, QuitRequestedMessage
from utils.state import AppContext
from views.scr_cart import CartScreen
from views.scr_menu import MenuScreen
from views.scr_past_orders import PastOrdersScreen

_logger = get_logger(__name__)


class FoodOrderApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "menu": MenuScreen,
        "cart": CartScreen,
        "past_orders": PastOrdersScreen,
    }

    context: AppContext

    def __init__(self, context: Optional[AppContext] = None):
        super().__init__()
        self.context = context if context is not None else AppContext()
        self.context.cart.subscribe(self.handle_cart_updated)

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    def handle_cart_updated(self) -> None:
        # cart listener, runs synchronously right after each cart mutation
        if not self.is_running:
            return
        self.screen.post_message(CartChangedMessage())

    @on(OrderPlacedMessage)
    def handle_order_placed(self, message: OrderPlacedMessage) -> None:
        _logger.info(f"Order {message.order_id} confirmed to the user.")

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.context.cart.unsubscribe(self.handle_cart_updated)
        self.exit()

    @work
    async def main_flow(self):
        try:
            await self.context.load_menu()
        except ResourceUnavailable as e:
            _logger.error(f"Failed to load menu data from database: {e}")
            self.exit(message=f"Error loading menu: {e}")
            return
        await self.switch_mode("menu")


def main() -> None:
    FoodOrderApp().run()


if __name__ == "__main__":
    main()
