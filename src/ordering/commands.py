# uniform "bind, then execute" wrappers the UI uses to drive the core
from __future__ import annotations

from menu.items import SimpleItem
from ordering.cart import AddedToCart, Cart
from ordering.committer import CommitResult, OrderCommitter
from ordering.packaging import PackagingResolver
from utils.logger import get_logger

_logger = get_logger(__name__)


class AddToCart:
    """Package a resolved item and put one of it in the cart."""

    def __init__(self, item: SimpleItem, cart: Cart) -> None:
        self.item = item
        self.cart = cart

    def execute(self) -> AddedToCart:
        packaged = PackagingResolver().with_item(self.item).build()
        added = self.cart.add(packaged)
        _logger.info(f"Added {self.item.name} to cart.")
        return added


class PlaceOrder:
    """
    Commit the cart as an order. The cart is cleared only when the order was
    stored; on failure it is left as is so the user can try again.
    """

    def __init__(
        self,
        cart: Cart,
        committer: OrderCommitter,
        customer_name: str,
        customer_address: str,
    ) -> None:
        self.cart = cart
        self.committer = committer
        self.customer_name = customer_name
        self.customer_address = customer_address

    async def execute(self) -> CommitResult:
        result = await self.committer.commit(
            self.cart.snapshot(), self.customer_name, self.customer_address
        )
        if result.ok:
            self.cart.clear()
            _logger.info(f"Order {result.order_id} placed for {self.customer_name}.")
        else:
            _logger.warning(f"Order placement failed: {result.error}")
        return result
