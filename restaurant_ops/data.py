"""Static seed data wrapped into domain records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from restaurant_ops.constant import INVENTORY_BY_ID, MENU_ITEMS_BY_ID, SEED_ORDERS, TABLE_SEATS
from restaurant_ops.models import (
    Category,
    InventoryRecord,
    MenuItem,
    Order,
    OrderLine,
    OrderStatus,
    Table,
    TableStatus,
)
from restaurant_ops.pricing import total
from restaurant_ops.store import RestaurantStore


def seed_menu_items() -> list[MenuItem]:
    return [
        MenuItem(
            id=item_id,
            name=str(raw["name"]),
            price=Decimal(str(raw["price"])),
            category=Category(raw["category"]),
            is_active=bool(raw["is_active"]),
            description=str(raw["description"]) if raw["description"] is not None else None,
        )
        for item_id, raw in MENU_ITEMS_BY_ID.items()
    ]


def seed_inventory() -> list[InventoryRecord]:
    return [
        InventoryRecord(id=record_id, name=name, quantity=quantity, unit=unit, min_level=min_level)
        for record_id, (name, quantity, unit, min_level) in INVENTORY_BY_ID.items()
    ]


def seed_orders(menu_items: list[MenuItem], now: datetime | None = None) -> list[Order]:
    """Build the orders already on the floor, priced from the seed menu."""
    now = now or datetime.now(timezone.utc)
    menu_by_id = {item.id: item for item in menu_items}
    orders: list[Order] = []
    for raw in SEED_ORDERS:
        lines = tuple(
            OrderLine(
                menu_item_id=item_id,
                name=menu_by_id[item_id].name,
                quantity=quantity,
                unit_price=menu_by_id[item_id].price,
            )
            for item_id, quantity in raw["lines"]  # type: ignore[union-attr]
        )
        orders.append(
            Order(
                id=str(raw["id"]),
                table_no=int(raw["table_no"]),  # type: ignore[arg-type]
                waiter_name=str(raw["waiter_name"]),
                status=OrderStatus(raw["status"]),
                items=lines,
                created_at=now - timedelta(minutes=int(raw["minutes_ago"])),  # type: ignore[arg-type]
                total=total(lines),
            )
        )
    return orders


def seed_tables(orders: list[Order]) -> list[Table]:
    """Tables from the floor plan, occupied by whichever seed order is still active there."""
    bound = {order.table_no: order.id for order in orders if order.is_active}
    return [
        Table(
            id=table_id,
            seats=seats,
            status=TableStatus.OCCUPIED if table_id in bound else TableStatus.AVAILABLE,
            current_order_id=bound.get(table_id),
        )
        for table_id, seats in TABLE_SEATS.items()
    ]


def seeded_store(now: datetime | None = None) -> RestaurantStore:
    """A store preloaded with the demo menu, stock, floor plan and open orders."""
    menu_items = seed_menu_items()
    orders = seed_orders(menu_items, now=now)
    return RestaurantStore(
        menu_items=menu_items,
        inventory_records=seed_inventory(),
        tables=seed_tables(orders),
        orders=orders,
    )
