from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import db.crud as crud
from menu.items import CategoryGroup, MultiVariantItem, SimpleItem, search
from ordering.cart import Cart
from ordering.committer import OrderCommitter


@dataclass
class AppContext:
    """
    Everything one ordering session shares, built once at startup and handed
    to every screen.

    Fields:
      - cart: the session's only cart
      - committer: stores orders placed from the cart
      - menu: root of the menu tree, None until load_menu() ran
    """

    cart: Cart = field(default_factory=Cart)
    committer: OrderCommitter = field(default_factory=OrderCommitter)
    menu: Optional[CategoryGroup] = None

    async def load_menu(self) -> CategoryGroup:
        self.menu = await crud.load_menu()
        return self.menu

    def categories(self) -> List[CategoryGroup]:
        if self.menu is None:
            return []
        return [c for c in self.menu.children if isinstance(c, CategoryGroup)]

    def category(self, category_id: int) -> Optional[CategoryGroup]:
        for group in self.categories():
            if group.category_id == category_id:
                return group
        return None

    def search(self, text: str) -> List[SimpleItem | MultiVariantItem]:
        """
        Menu entries matching text, across all categories. A sized item is
        returned once even if several of its sizes match.
        """
        if self.menu is None or not text.strip():
            return []
        return [
            child
            for group in self.categories()
            for child in group.children
            if not isinstance(child, CategoryGroup) and search(child, text)
        ]
