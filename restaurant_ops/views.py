"""Read-only projections over store snapshots, recomputed on every call."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from restaurant_ops.models import Category, InventoryRecord, MenuItem, Order, OrderStatus, Table

KANBAN_COLUMNS: tuple[OrderStatus, ...] = (OrderStatus.PENDING, OrderStatus.IN_PROGRESS, OrderStatus.READY)
BILLABLE_STATUSES = frozenset({OrderStatus.IN_PROGRESS, OrderStatus.READY})


@dataclass(frozen=True)
class SalesSummary:
    total: Decimal
    order_count: int
    average: Decimal


@dataclass(frozen=True)
class TableOccupancy:
    available: int
    occupied: int


def low_stock(records: Iterable[InventoryRecord]) -> list[InventoryRecord]:
    return [record for record in records if record.quantity < record.min_level]


def active_orders(orders: Iterable[Order]) -> list[Order]:
    return [order for order in orders if order.status is not OrderStatus.SERVED]


def kanban(orders: Iterable[Order]) -> dict[OrderStatus, list[Order]]:
    """Group active orders into the Pending, In Progress and Ready columns."""
    columns: dict[OrderStatus, list[Order]] = {status: [] for status in KANBAN_COLUMNS}
    for order in active_orders(orders):
        columns[order.status].append(order)
    return columns


def billable_orders(orders: Iterable[Order]) -> list[Order]:
    """Orders a waiter can bring a bill for."""
    return [order for order in orders if order.status in BILLABLE_STATUSES]


def sales_summary(orders: Iterable[Order]) -> SalesSummary:
    """Sum and mean of totals over all orders, served or not."""
    totals = [order.total for order in orders]
    gross = sum(totals, Decimal("0"))
    average = gross / len(totals) if totals else Decimal("0")
    return SalesSummary(total=gross, order_count=len(totals), average=average)


def table_occupancy(tables: Iterable[Table]) -> TableOccupancy:
    available = occupied = 0
    for table in tables:
        if table.is_occupied:
            occupied += 1
        else:
            available += 1
    return TableOccupancy(available=available, occupied=occupied)


def filter_menu(
    items: Iterable[MenuItem],
    category: Category | None = None,
    query: str = "",
    active_only: bool = False,
) -> list[MenuItem]:
    q = query.strip().lower()
    return [
        item
        for item in items
        if (not active_only or item.is_active)
        and (category is None or item.category is category)
        and (not q or q in item.name.lower())
    ]


def search_inventory(records: Iterable[InventoryRecord], query: str) -> list[InventoryRecord]:
    q = query.strip().lower()
    if not q:
        return list(records)
    return [record for record in records if q in record.name.lower()]
