# provide dataclass models for persisted orders

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Category:
    category_id: int
    name: str


@dataclass(frozen=True)
class Order:
    order_id: int
    customer_name: str
    customer_address: str
    placed_at: datetime
    total_amount: Decimal


@dataclass(frozen=True)
class OrderLine:
    order_id: int
    line_no: int
    item_id: int  # 0 for size variants
    item_name: str
    quantity: int
    unit_price: Decimal  # unit price at time of order
