from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from restaurant_ops.data import seeded_store
from restaurant_ops.models import Category, InventoryRecord, MenuItem, Table
from restaurant_ops.store import RestaurantStore

NOW = datetime(2024, 5, 1, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> RestaurantStore:
    """Small store: four empty tables, three menu items (one inactive), two stock records."""
    return RestaurantStore(
        menu_items=[
            MenuItem("a1", "Bruschetta", Decimal("8.99"), Category.APPETIZER),
            MenuItem("m1", "Grilled Salmon", Decimal("24.99"), Category.MAIN),
            MenuItem("a5", "Caprese Salad", Decimal("11.99"), Category.APPETIZER, is_active=False),
        ],
        inventory_records=[
            InventoryRecord("inv4", "Arborio Rice", 3, "kg", 5),
            InventoryRecord("inv5", "Olive Oil", 8, "liters", 3),
        ],
        tables=[Table(id=table_id, seats=4) for table_id in range(1, 5)],
    )


@pytest.fixture
def demo_store() -> RestaurantStore:
    return seeded_store(now=NOW)


def assert_bindings_consistent(store: RestaurantStore) -> None:
    """Occupied <=> order reference set <=> referenced order not Served."""
    orders = {order.id: order for order in store.orders()}
    for table in store.tables():
        assert table.is_occupied == (table.current_order_id is not None), table
        if table.current_order_id is not None:
            assert orders[table.current_order_id].is_active, table


def place_order(store: RestaurantStore, table_id: int, *item_ids: str):
    store.select_table(table_id)
    for item_id in item_ids:
        store.add_to_cart(item_id)
    return store.submit_cart("Sarah")
