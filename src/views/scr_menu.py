from typing import List, Union

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Input, Label, ListItem, ListView

from menu.items import MultiVariantItem, SimpleItem, price
from ordering.commands import AddToCart
from utils.pure import format_money
from views.base_screen import BaseScreen
from views.modal_size import SizePickerModal

MenuEntry = Union[SimpleItem, MultiVariantItem]


class MenuScreen(BaseScreen):
    """
    Category list on the left, items of the selected category (or search
    results) on the right. Enter on an item adds it to the cart; sized items
    ask for a size first.
    """

    DEFAULT_CSS = """
    #list-categories { width: 28; }
    #vert-items { width: 1fr; }
    """

    SUB_TITLE_TEXT = "Menu"

    def __init__(self) -> None:
        super().__init__()
        self._entries: List[MenuEntry] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal():
            yield ListView(id="list-categories")
            with Vertical(id="vert-items"):
                yield Input(id="input-search", placeholder="Search menu...")
                yield DataTable(id="table-items")
                yield Label("", id="label-status")

    async def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Name", "Price", "Description")

        context = self.app.context
        if context.menu is None:
            await context.load_menu()

        categories = context.categories()
        list_view = self.query_one("#list-categories", ListView)
        await list_view.extend(
            [ListItem(Label(c.name), id=f"category-{c.category_id}") for c in categories]
        )
        if categories:
            self.show_entries(list(categories[0].children))

    def show_entries(self, entries: List[MenuEntry]) -> None:
        self._entries = [e for e in entries if isinstance(e, (SimpleItem, MultiVariantItem))]
        table = self.query_one(DataTable)
        table.clear()
        for i, entry in enumerate(self._entries):
            shown_price = format_money(price(entry))
            if isinstance(entry, MultiVariantItem):
                shown_price = f"from {shown_price}"
            table.add_row(entry.name, shown_price, entry.description, key=str(i))

    @on(ListView.Selected, "#list-categories")
    def handle_category_selected(self, event: ListView.Selected) -> None:
        category_id = int(event.item.id.removeprefix("category-"))
        group = self.app.context.category(category_id)
        if group is not None:
            self.query_one("#input-search", Input).value = ""
            self.show_entries(list(group.children))

    @on(Input.Changed, "#input-search")
    def handle_search(self, message: Input.Changed) -> None:
        status = self.query_one("#label-status", Label)
        query = message.value.strip()
        if not query:
            status.update("")
            categories = self.app.context.categories()
            if categories:
                self.show_entries(list(categories[0].children))
            return
        results = self.app.context.search(query)
        self.show_entries(results)
        status.update("" if results else "No items found matching your search.")

    @on(DataTable.RowSelected, "#table-items")
    @work(exclusive=True)
    async def handle_item_selected(self, event: DataTable.RowSelected) -> None:
        entry = self._entries[int(event.row_key.value)]
        if isinstance(entry, MultiVariantItem):
            entry = await self.app.push_screen_wait(SizePickerModal(entry))
            if entry is None:
                return
        added = AddToCart(entry, self.app.context.cart).execute()
        self.notify(added.message, title="Item Packaged!" if added.packaged else "Item Added")
