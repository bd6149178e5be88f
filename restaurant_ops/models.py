"""Domain models for restaurant-ops."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class Category(str, Enum):
    """Menu section an item is listed under."""

    APPETIZER = "appetizer"
    MAIN = "main"
    DRINK = "drink"
    DESSERT = "dessert"


class TableStatus(str, Enum):
    """Whether a table is free or hosting an active order."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"


class OrderStatus(str, Enum):
    """Kitchen-to-payment lifecycle of an order, in sequence order."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    READY = "Ready"
    SERVED = "Served"

    @property
    def rank(self) -> int:
        return _STATUS_SEQUENCE.index(self)

    def next(self) -> OrderStatus | None:
        """Return the following status, or None when already terminal."""
        idx = self.rank + 1
        if idx >= len(_STATUS_SEQUENCE):
            return None
        return _STATUS_SEQUENCE[idx]


_STATUS_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.READY,
    OrderStatus.SERVED,
)


@dataclass(frozen=True)
class MenuItem:
    """A sellable menu item."""

    id: str
    name: str
    price: Decimal
    category: Category
    is_active: bool = True
    description: str | None = None


@dataclass(frozen=True)
class InventoryRecord:
    """A stock record tracked by the admin."""

    id: str
    name: str
    quantity: int
    unit: str
    min_level: int

    @property
    def is_low_stock(self) -> bool:
        return self.quantity < self.min_level


@dataclass(frozen=True)
class Table:
    """A dining table; `current_order_id` is set iff the table is occupied."""

    id: int
    seats: int
    status: TableStatus = TableStatus.AVAILABLE
    current_order_id: str | None = None

    @property
    def is_occupied(self) -> bool:
        return self.status is TableStatus.OCCUPIED


@dataclass(frozen=True)
class OrderLine:
    """One line of a cart or order, with name and price captured when added."""

    menu_item_id: str
    name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Order:
    """A submitted order; lines and total never change after creation."""

    id: str
    table_no: int
    waiter_name: str
    status: OrderStatus
    items: tuple[OrderLine, ...]
    created_at: datetime
    total: Decimal

    @property
    def is_active(self) -> bool:
        return self.status is not OrderStatus.SERVED

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of the waiter's cart."""

    lines: tuple[OrderLine, ...]
    selected_table: int | None
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.lines
