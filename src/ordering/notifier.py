# synchronous observer registry used by the cart
from typing import Callable, List

from utils.logger import get_logger

_logger = get_logger(__name__)

CartListener = Callable[[], None]


class ChangeNotifier:
    """
    Ordered list of callbacks run after every cart mutation.

    Callbacks run on the caller's thread in subscription order. Subscribing
    the same callback twice means it is called twice. A callback that raises
    stops the remaining ones and the exception reaches whoever mutated the
    cart; wrap the callback yourself if it must not interfere with others.
    """

    def __init__(self) -> None:
        self._listeners: List[CartListener] = []

    def subscribe(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: CartListener) -> None:
        """Drop the first registration of listener; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            _logger.debug(f"unsubscribe: {listener!r} was not subscribed")

    def notify(self) -> None:
        # iterate over a copy so a listener may unsubscribe itself
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._listeners)
