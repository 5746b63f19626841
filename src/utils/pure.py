from decimal import ROUND_HALF_UP, Decimal
from typing import List, Literal, Mapping, Optional

from menu.items import SimpleItem

CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """$-prefixed amount rounded half-up to cents, e.g. Decimal("6.5") -> "$6.50"."""
    return f"${Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)}"


def cart_lines(snapshot: Mapping[SimpleItem, int]) -> List[List[str]]:
    """
    Rows of [name, unit price, qty, line total] for a cart snapshot,
    ordered by item name.
    """
    rows = []
    for item, qty in sorted(snapshot.items(), key=lambda kv: kv[0].name):
        rows.append(
            [item.name, format_money(item.price), str(qty), format_money(item.price * qty)]
        )
    return rows


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: column headers, or None to use the first row as headers.
        rows: table rows, each a list of cell values.
        aligns: 'l', 'c' or 'r' per column, all 'c' by default.

    Returns:
        str: the table, or "" when there are no rows.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    if aligns is None:
        aligns = ["c"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}

    def line(cells) -> str:
        return "| " + " | ".join(str(c) for c in cells) + " |"

    return "\n".join(
        [line(headers), line(align_map[a] for a in aligns), *(line(r) for r in rows)]
    )
