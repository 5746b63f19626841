from math import ceil

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.reactive import reactive
from textual.widgets import Button, DataTable, Label, MarkdownViewer

import db.crud
from utils.pure import format_money, generate_markdown_table
from views.base_screen import BaseScreen

PAGE_SIZE = 10


class PastOrdersScreen(BaseScreen):
    """
    Stored orders, newest first, with the selected order's lines on top.
    """

    DEFAULT_CSS = """
    #md-order-detail { height: 1fr; }
    #table-orders { height: 1fr; }
    #hort-table-control { height: auto; }
    """

    SUB_TITLE_TEXT = "Past Orders"

    page_idx = reactive(1)
    page_cnt = reactive(1)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield MarkdownViewer(id="md-order-detail", show_table_of_contents=False)
            yield DataTable(id="table-orders")
        with Horizontal(id="hort-table-control"):
            yield Button("<", id="btn-prev")
            yield Label(" 1 / 1 ", id="label-page")
            yield Button(">", id="btn-next")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Order #", "Customer", "Address", "Placed At", "Total")

    @on(ScreenResume)
    def handle_resume(self) -> None:
        self.load_page(self.page_idx)

    @on(Button.Pressed, "#btn-prev")
    def handle_prev(self) -> None:
        if self.page_idx > 1:
            self.page_idx -= 1
            self.load_page(self.page_idx)

    @on(Button.Pressed, "#btn-next")
    def handle_next(self) -> None:
        if self.page_idx < self.page_cnt:
            self.page_idx += 1
            self.load_page(self.page_idx)

    @work(exclusive=True)
    async def load_page(self, page: int) -> None:
        orders, total = await db.crud.list_orders(page, PAGE_SIZE)
        self.page_cnt = max(ceil(total / PAGE_SIZE), 1)
        self.query_one("#label-page", Label).update(f" {page} / {self.page_cnt} ")

        table = self.query_one(DataTable)
        table.clear()
        for order in orders:
            table.add_row(
                order.order_id,
                order.customer_name,
                order.customer_address,
                order.placed_at.strftime("%Y-%m-%d %H:%M"),
                format_money(order.total_amount),
                key=str(order.order_id),
            )

    @on(DataTable.RowHighlighted, "#table-orders")
    @work(exclusive=True, group="detail")
    async def show_detail(self, event: DataTable.RowHighlighted) -> None:
        if event.row_key is None or event.row_key.value is None:
            return
        order, lines = await db.crud.get_order_detail(int(event.row_key.value))
        if order is None:
            return
        rows = [
            [line.item_name, format_money(line.unit_price), line.quantity,
             format_money(line.unit_price * line.quantity)]
            for line in lines
        ]
        md = f"### Order {order.order_id}\n\n"
        md += f"{order.customer_name}, {order.customer_address}\n\n"
        md += generate_markdown_table(
            ["Item", "Unit Price", "Quantity", "Total Price"], rows, ["l", "c", "c", "c"]
        )
        md += f"\n\n**Total:** {format_money(order.total_amount)}"
        await self.query_one(MarkdownViewer).document.update(md)
