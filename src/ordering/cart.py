# the session's shopping cart
from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Union

from menu.items import SimpleItem
from ordering.notifier import CartListener, ChangeNotifier
from ordering.packaging import PackagedItem
from utils.logger import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class AddedToCart:
    """Outcome of Cart.add, used by the UI to tell the user what happened."""

    item: SimpleItem
    quantity: int
    annotation: Optional[str] = None

    @property
    def packaged(self) -> bool:
        return self.annotation is not None

    @property
    def message(self) -> str:
        if self.annotation is not None:
            return self.annotation
        return f"{self.item.name} added to cart!"


class Cart:
    """
    Maps resolved items to quantities.

    One instance per session, built at startup and handed to whoever needs
    it. Quantities are always >= 1; an entry whose quantity would drop to 0
    is removed. Items with the same id share an entry, and the first stored
    item object is kept, so its price is what totals and orders use.

    All access goes through a re-entrant lock. Listeners are notified after
    the lock is released, so a listener may read the cart freely.
    """

    def __init__(self, notifier: Optional[ChangeNotifier] = None) -> None:
        self._items: Dict[SimpleItem, int] = {}
        self._lock = threading.RLock()
        self.notifier = notifier if notifier is not None else ChangeNotifier()

    def subscribe(self, listener: CartListener) -> None:
        self.notifier.subscribe(listener)

    def unsubscribe(self, listener: CartListener) -> None:
        self.notifier.unsubscribe(listener)

    def add(self, item: Union[SimpleItem, PackagedItem]) -> AddedToCart:
        annotation = None
        if isinstance(item, PackagedItem):
            item, annotation = item.item, item.annotation
        if not isinstance(item, SimpleItem):
            raise TypeError(
                f"only resolved items can be added to the cart, got {type(item).__name__}"
            )

        with self._lock:
            qty = self._items.get(item, 0) + 1
            self._items[item] = qty
        _logger.debug(f"cart: {item.name} x{qty}")

        self.notifier.notify()
        return AddedToCart(item=item, quantity=qty, annotation=annotation)

    def remove(self, item: SimpleItem) -> None:
        with self._lock:
            qty = self._items.get(item)
            if qty is None:
                return
            if qty > 1:
                self._items[item] = qty - 1
            else:
                del self._items[item]
        _logger.debug(f"cart: {item.name} x{qty - 1}")

        self.notifier.notify()

    def clear(self) -> None:
        # notifies even when already empty
        with self._lock:
            self._items.clear()
        _logger.debug("cart cleared")

        self.notifier.notify()

    def snapshot(self) -> Dict[SimpleItem, int]:
        with self._lock:
            return dict(self._items)

    def total(self) -> Decimal:
        with self._lock:
            return sum(
                (item.price * qty for item, qty in self._items.items()), Decimal("0")
            )

    def quantity(self, item: SimpleItem) -> int:
        with self._lock:
            return self._items.get(item, 0)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0
