# src/db/crud.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import aiosqlite

from db import models
from db.database import connect
from menu.items import CategoryGroup, MultiVariantItem, SimpleItem

ROOT_MENU_NAME = "Menu"


def _to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    # go through str so 6.5 stays 6.5 instead of its binary expansion
    return Decimal(str(val))


def _to_datetime(val) -> datetime:
    if isinstance(val, datetime):
        return val
    return datetime.fromisoformat(str(val))


# ---------------------------
# Menu (catalog source)
# ---------------------------


async def list_categories() -> List[models.Category]:
    """All categories, ordered by name."""
    async with connect() as conn:
        cur = await conn.execute(
            "SELECT category_id, name FROM categories ORDER BY name;"
        )
        rows = await cur.fetchall()
        await cur.close()
    return [models.Category(category_id=row[0], name=row[1]) for row in rows]


async def list_items_in_category(category_id: int) -> List[SimpleItem]:
    """Fixed-price items of a category, ordered by item id. Sized items are excluded."""
    async with connect() as conn:
        cur = await conn.execute(
            """
            SELECT i.item_id, i.name, i.price, i.description, c.name, c.category_id
            FROM menu_items i
            JOIN categories c ON i.category_id = c.category_id
            WHERE i.category_id = ?
              AND NOT EXISTS (SELECT 1 FROM menu_item_sizes s WHERE s.item_id = i.item_id)
            ORDER BY i.item_id;
            """,
            (category_id,),
        )
        rows = await cur.fetchall()
        await cur.close()
    return [
        SimpleItem(
            item_id=row[0],
            name=row[1],
            price=_to_decimal(row[2]),
            description=row[3],
            category_name=row[4],
            category_id=row[5],
        )
        for row in rows
    ]


async def list_sized_items_in_category(category_id: int) -> List[MultiVariantItem]:
    """Items of a category sold by size, ordered by item id."""
    async with connect() as conn:
        cur = await conn.execute(
            """
            SELECT i.item_id, i.name, i.description, c.name, c.category_id,
                   s.label, s.price
            FROM menu_items i
            JOIN categories c ON i.category_id = c.category_id
            JOIN menu_item_sizes s ON s.item_id = i.item_id
            WHERE i.category_id = ?
            ORDER BY i.item_id;
            """,
            (category_id,),
        )
        rows = await cur.fetchall()
        await cur.close()

    # group size rows per item, keeping item order
    grouped: dict[int, tuple] = {}
    sizes: dict[int, dict[str, Decimal]] = {}
    for row in rows:
        item_id = row[0]
        if item_id not in grouped:
            grouped[item_id] = (row[1], row[2], row[3], row[4])
            sizes[item_id] = {}
        sizes[item_id][row[5]] = _to_decimal(row[6])

    return [
        MultiVariantItem(
            name=name,
            sizes=sizes[item_id],
            description=descr,
            category_name=cat_name,
            category_id=cat_id,
        )
        for item_id, (name, descr, cat_name, cat_id) in grouped.items()
    ]


async def get_item(item_id: int) -> Optional[SimpleItem]:
    """Return the fixed-price item with this id, or None."""
    async with connect() as conn:
        cur = await conn.execute(
            """
            SELECT i.item_id, i.name, i.price, i.description, c.name, c.category_id
            FROM menu_items i
            JOIN categories c ON i.category_id = c.category_id
            WHERE i.item_id = ?;
            """,
            (item_id,),
        )
        row = await cur.fetchone()
        await cur.close()
    if not row:
        return None
    return SimpleItem(
        item_id=row[0],
        name=row[1],
        price=_to_decimal(row[2]),
        description=row[3],
        category_name=row[4],
        category_id=row[5],
    )


async def load_menu() -> CategoryGroup:
    """
    Build the whole menu tree: a root group with one child group per
    category. Within a category, fixed-price items come before sized ones.
    """
    groups = []
    for category in await list_categories():
        children = [
            *await list_items_in_category(category.category_id),
            *await list_sized_items_in_category(category.category_id),
        ]
        groups.append(CategoryGroup(category.name, category.category_id, children))
    return CategoryGroup(ROOT_MENU_NAME, 0, groups)


# ---------------------------
# Orders
# ---------------------------


async def insert_order(
    conn: aiosqlite.Connection,
    customer_name: str,
    customer_address: str,
    placed_at: datetime,
    total_amount: Decimal,
) -> Tuple[int, Optional[int]]:
    """
    Insert an order header on an open connection without committing.
    Returns (affected rows, generated order id).
    """
    cur = await conn.execute(
        """
        INSERT INTO orders(customer_name, customer_address, placed_at, total_amount)
        VALUES (?, ?, ?, ?);
        """,
        (
            customer_name,
            customer_address,
            placed_at.isoformat(sep=" "),
            str(total_amount),
        ),
    )
    affected, order_id = cur.rowcount, cur.lastrowid
    await cur.close()
    return affected, order_id


async def insert_order_line(
    conn: aiosqlite.Connection,
    order_id: int,
    line_no: int,
    item: SimpleItem,
    quantity: int,
) -> None:
    """Insert one order line on an open connection without committing."""
    await conn.execute(
        """
        INSERT INTO order_lines(order_id, line_no, item_id, item_name, quantity, unit_price)
        VALUES (?, ?, ?, ?, ?, ?);
        """,
        (order_id, line_no, item.item_id, item.name, quantity, str(item.price)),
    )


async def list_orders(
    page: int = 1, page_size: int = 10
) -> Tuple[List[models.Order], int]:
    """
    Past orders, newest first, paginated.
    Return (orders_for_page, total_count).
    """
    async with connect() as conn:
        cur = await conn.execute("SELECT COUNT(*) FROM orders;")
        total = (await cur.fetchone())[0]
        await cur.close()
        offset = max(page - 1, 0) * page_size
        cur = await conn.execute(
            """
            SELECT order_id, customer_name, customer_address, placed_at, total_amount
            FROM orders
            ORDER BY placed_at DESC, order_id DESC
            LIMIT ? OFFSET ?;
            """,
            (page_size, offset),
        )
        rows = await cur.fetchall()
        await cur.close()
    return [_row_to_order(row) for row in rows], total


async def get_order_detail(
    order_id: int,
) -> Tuple[Optional[models.Order], List[models.OrderLine]]:
    """Return (order, lines) or (None, []) if the order does not exist."""
    async with connect() as conn:
        cur = await conn.execute(
            """
            SELECT order_id, customer_name, customer_address, placed_at, total_amount
            FROM orders WHERE order_id = ?;
            """,
            (order_id,),
        )
        row = await cur.fetchone()
        await cur.close()
        if not row:
            return None, []
        cur = await conn.execute(
            """
            SELECT order_id, line_no, item_id, item_name, quantity, unit_price
            FROM order_lines WHERE order_id = ? ORDER BY line_no;
            """,
            (order_id,),
        )
        line_rows = await cur.fetchall()
        await cur.close()
    lines = [
        models.OrderLine(
            order_id=r[0],
            line_no=r[1],
            item_id=r[2],
            item_name=r[3],
            quantity=r[4],
            unit_price=_to_decimal(r[5]),
        )
        for r in line_rows
    ]
    return _row_to_order(row), lines


def _row_to_order(row: Sequence) -> models.Order:
    return models.Order(
        order_id=row[0],
        customer_name=row[1],
        customer_address=row[2],
        placed_at=_to_datetime(row[3]),
        total_amount=_to_decimal(row[4]),
    )
