# menu tree: simple items, sized (multi-variant) items and category groups
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple, Union

SIZE_ORDER = ("Small", "Medium", "Large")


def ordered_sizes(labels: Iterable[str]) -> List[str]:
    """Small, Medium, Large first, then any other label alphabetically."""

    def sort_key(label: str):
        if label in SIZE_ORDER:
            return (0, SIZE_ORDER.index(label), "")
        return (1, 0, label)

    return sorted(labels, key=sort_key)


def variant_name(base_name: str, label: str) -> str:
    return f"{base_name} ({label})"


@dataclass(frozen=True, eq=False)
class SimpleItem:
    """
    A concrete, priced, purchasable unit.

    item_id 0 means "not persisted" (e.g. a resolved size variant). Two items
    with the same non-zero id are the same item even if the other fields
    differ; id-0 items are only equal to themselves.
    """

    name: str
    price: Decimal
    description: str = ""
    category_name: str = ""
    category_id: int = 0
    item_id: int = 0

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", Decimal(str(self.price)))

    @property
    def persisted(self) -> bool:
        return self.item_id != 0

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, SimpleItem):
            return NotImplemented
        return self.persisted and self.item_id == other.item_id

    def __hash__(self):
        if not self.persisted:
            return object.__hash__(self)
        return hash(("SimpleItem", self.item_id))


@dataclass(frozen=True, eq=False)
class MultiVariantItem:
    """
    An item sold in several sizes. Not purchasable itself; each size resolves
    to a SimpleItem named "Base (Label)". Variants are built once so the same
    label always resolves to the same cart key.
    """

    name: str
    sizes: Mapping[str, Decimal]
    description: str = ""
    category_name: str = ""
    category_id: int = 0
    _variants: Tuple[Tuple[str, SimpleItem], ...] = field(
        init=False, repr=False, default=()
    )

    def __post_init__(self):
        sizes = {label: Decimal(str(price)) for label, price in self.sizes.items()}
        object.__setattr__(self, "sizes", MappingProxyType(sizes))
        variants = tuple(
            (
                label,
                SimpleItem(
                    name=variant_name(self.name, label),
                    price=sizes[label],
                    description=f"{self.description} ({label} size)",
                    category_name=self.category_name,
                    category_id=self.category_id,
                ),
            )
            for label in ordered_sizes(sizes)
        )
        object.__setattr__(self, "_variants", variants)

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self._variants]

    @property
    def variants(self) -> List[SimpleItem]:
        return [item for _, item in self._variants]

    def variant(self, label: str) -> SimpleItem:
        for known, item in self._variants:
            if known == label:
                return item
        raise KeyError(f"{self.name} has no size {label!r}")


@dataclass(frozen=True, eq=False)
class CategoryGroup:
    name: str
    category_id: int = 0
    children: Tuple["MenuNode", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))


MenuNode = Union[SimpleItem, MultiVariantItem, CategoryGroup]


def search(node: MenuNode, text: str) -> bool:
    """Case-insensitive substring match against every text reachable from node."""
    needle = text.lower()
    if isinstance(node, SimpleItem):
        return any(
            needle in value.lower()
            for value in (node.name, node.description, node.category_name)
        )
    if isinstance(node, MultiVariantItem):
        if needle in node.name.lower() or needle in node.description.lower():
            return True
        return any(
            needle in variant_name(node.name, label).lower() for label in node.sizes
        )
    if isinstance(node, CategoryGroup):
        if needle in node.name.lower():
            return True
        return any(search(child, text) for child in node.children)
    raise TypeError(f"not a menu node: {node!r}")


def flatten(node: MenuNode) -> List[SimpleItem]:
    """Every purchasable unit under node, in menu order."""
    if isinstance(node, SimpleItem):
        return [node]
    if isinstance(node, MultiVariantItem):
        return node.variants
    if isinstance(node, CategoryGroup):
        items: List[SimpleItem] = []
        for child in node.children:
            items.extend(flatten(child))
        return items
    raise TypeError(f"not a menu node: {node!r}")


def price(node: MenuNode) -> Decimal:
    """
    Display price. Sized items show their cheapest size; categories have no
    price of their own.
    """
    if isinstance(node, SimpleItem):
        return node.price
    if isinstance(node, MultiVariantItem):
        return min(node.sizes.values(), default=Decimal("0"))
    if isinstance(node, CategoryGroup):
        return Decimal("0")
    raise TypeError(f"not a menu node: {node!r}")
