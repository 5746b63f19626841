from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Posted at App level by the cart listener after every cart mutation.
    Screens showing cart contents re-render on it.
    """

    bubble = True


class OrderPlacedMessage(Message):
    """
    Fired when an order has been stored and the cart cleared.
    """

    bubble = True

    def __init__(self, order_id: int) -> None:
        super().__init__()
        self.order_id = order_id
