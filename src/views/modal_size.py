from typing import Optional

from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, RadioButton, RadioSet

from menu.items import MultiVariantItem, SimpleItem
from utils.pure import format_money


class SizePickerModal(ModalScreen[Optional[SimpleItem]]):
    """
    Size selection for a sized item.
    Dismisses with the chosen size variant, or None if cancelled.
    """

    DEFAULT_CSS = """
    SizePickerModal { align: center middle; }
    #vert-size { width: 50; height: auto; padding: 1 2; border: thick $primary; background: $surface; }
    #hort-size-buttons { height: auto; align-horizontal: right; margin-top: 1; }
    #hort-size-buttons Button { margin-left: 1; }
    """

    def __init__(self, item: MultiVariantItem) -> None:
        super().__init__()
        self._item = item

    def compose(self) -> ComposeResult:
        with Vertical(id="vert-size"):
            yield Label(f"Select Size for {self._item.name}")
            with RadioSet(id="radio-sizes"):
                for i, label in enumerate(self._item.labels):
                    price = self._item.variant(label).price
                    # first size is selected by default
                    yield RadioButton(f"{label} - {format_money(price)}", value=i == 0)
            with Horizontal(id="hort-size-buttons"):
                yield Button("Cancel", id="btn-cancel")
                yield Button("Add to Cart", id="btn-add", variant="primary")

    def on_mount(self) -> None:
        self.query_one(RadioSet).focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(None)

    @on(Button.Pressed, "#btn-add")
    def handle_add(self) -> None:
        index = self.query_one(RadioSet).pressed_index
        if index < 0:
            self.notify("Please select a size.", severity="warning")
            return
        self.dismiss(self._item.variant(self._item.labels[index]))

    @on(Button.Pressed, "#btn-cancel")
    def handle_cancel(self) -> None:
        self.dismiss(None)
