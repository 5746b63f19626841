from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from utils.messages import QuitRequestedMessage


class ConfirmModal(ModalScreen[bool]):
    """
    Asks a yes/no question before something irreversible happens
    (placing an order, emptying the cart, leaving the app).

    Dismisses with True on confirm, False on cancel or escape. When
    `destructive` is set the confirm button is painted red and the cancel
    button starts focused, so a stray Enter does nothing harmful.
    """

    DEFAULT_CSS = """
    ConfirmModal { align: center middle; }
    #confirm-box { width: 60; height: auto; padding: 1 2; border: thick $primary; background: $surface; }
    #confirm-box.destructive { border: thick $error; }
    #confirm-detail { color: $text-muted; margin-top: 1; }
    #confirm-buttons { height: auto; align-horizontal: right; margin-top: 1; }
    #confirm-buttons Button { margin-left: 1; }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
    ]

    def __init__(
        self,
        question: str,
        detail: str = "",
        confirm_label: str = "Yes",
        cancel_label: str = "No",
        destructive: bool = False,
    ):
        super().__init__()
        self.question = question
        self.detail = detail
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label
        self.destructive = destructive

    def compose(self) -> ComposeResult:
        classes = "destructive" if self.destructive else ""
        with Vertical(id="confirm-box", classes=classes):
            yield Static(self.question, id="confirm-question")
            if self.detail:
                yield Static(self.detail, id="confirm-detail")
            with Horizontal(id="confirm-buttons"):
                yield Button(self.cancel_label, id="btn-cancel")
                yield Button(
                    self.confirm_label,
                    variant="error" if self.destructive else "success",
                    id="btn-confirm",
                )

    def on_mount(self) -> None:
        start = "#btn-cancel" if self.destructive else "#btn-confirm"
        self.query_one(start, Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-confirm":
            self.action_confirm()
        else:
            self.action_cancel()

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class QuitDialogModal(ConfirmModal):
    """Quit confirmation; warns when the cart still holds items."""

    def __init__(self, items_in_cart: int = 0):
        detail = ""
        if items_in_cart:
            detail = f"{items_in_cart} item(s) in your cart will be lost."
        super().__init__(
            "Are you sure you want to quit?", detail=detail, destructive=True
        )

    def action_confirm(self) -> None:
        self.app.post_message(QuitRequestedMessage())
        self.dismiss(True)
