# builds the "how your food is packed" message shown when an item hits the cart
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from menu.items import SimpleItem
from utils.errors import InvalidState

PACKAGING_TEMPLATES = {
    "Burgers": "Your delicious {name} is securely nestled in a sturdy box!",
    "Cold Drinks": "Refreshing {name} is perfectly bottled and chilled!",
    "Desserts": "A sweet {name} has been delicately placed in a charming dessert container!",
    "Fried Chicken": "Your crispy {name} feast is hot and ready in a specialized bucket!",
    "Fries": "Golden {name} are crisply bagged for your enjoyment!",
    "Noodles": "Steaming {name} are carefully sealed in a convenient takeout bowl!",
    "Pizzas": "Your freshly baked {name} is snug in its signature delivery box!",
    "Salads": "The vibrant {name} is packed in a clear, eco-friendly container!",
    "Sandwiches": "Your gourmet {name} is neatly wrapped and ready for a bite!",
    "Wraps & Rolls": "The flavorful {name} is tightly rolled and secured for delivery!",
}
GENERIC_TEMPLATE = "{name} has been thoughtfully packaged for your order!"


def packaging_message(category_name: str, item_name: str) -> str:
    template = PACKAGING_TEMPLATES.get(category_name, GENERIC_TEMPLATE)
    return template.format(name=item_name)


@dataclass(frozen=True)
class PackagedItem:
    """A resolved item together with the packaging note shown on add."""

    item: SimpleItem
    annotation: str


class PackagingResolver:
    """
    Two-step builder: bind an item with with_item(), then build().

    Example:
        packaged = PackagingResolver().with_item(item).build()
    """

    def __init__(self) -> None:
        self._item: Optional[SimpleItem] = None

    def with_item(self, item: SimpleItem) -> "PackagingResolver":
        if not isinstance(item, SimpleItem):
            raise TypeError(
                f"only resolved items can be packaged, got {type(item).__name__}"
            )
        self._item = item
        return self

    def annotation(self) -> str:
        if self._item is None:
            raise InvalidState("with_item() must be called before resolving packaging")
        return packaging_message(self._item.category_name, self._item.name)

    def build(self) -> PackagedItem:
        return PackagedItem(item=self._item, annotation=self.annotation())
