"""Single restaurant dataset shared by the waiter, chef and admin views."""

from __future__ import annotations

import threading
from typing import Iterable

from restaurant_ops import views
from restaurant_ops.cart import CartBuilder
from restaurant_ops.catalog import CatalogStore
from restaurant_ops.config import DEFAULT_WAITER_NAME
from restaurant_ops.errors import ValidationError
from restaurant_ops.inventory import InventoryStore
from restaurant_ops.models import (
    CartSnapshot,
    Category,
    InventoryRecord,
    MenuItem,
    Order,
    OrderStatus,
    Table,
)
from restaurant_ops.orders import OrderLedger
from restaurant_ops.tables import TableRegistry


class RestaurantStore:
    """
    Owns the catalog, inventory, tables, orders and the waiter cart.

    All mutations go through this object and run under one writer lock, so
    compound order/table updates are never observed half-applied. Readers get
    tuples of frozen records.
    """

    def __init__(
        self,
        menu_items: Iterable[MenuItem] = (),
        inventory_records: Iterable[InventoryRecord] = (),
        tables: Iterable[Table] = (),
        orders: Iterable[Order] = (),
    ) -> None:
        self._lock = threading.RLock()
        self.catalog = CatalogStore(menu_items)
        self.inventory = InventoryStore(inventory_records)
        self.table_registry = TableRegistry(tables)
        self.ledger = OrderLedger(self.table_registry, orders)
        self.cart_builder = CartBuilder(self.table_registry, self.ledger)

    # Read accessors

    def menu_items(self) -> tuple[MenuItem, ...]:
        with self._lock:
            return self.catalog.all()

    def menu_item(self, item_id: str) -> MenuItem:
        with self._lock:
            return self.catalog.get(item_id)

    def inventory_records(self) -> tuple[InventoryRecord, ...]:
        with self._lock:
            return self.inventory.all()

    def tables(self) -> tuple[Table, ...]:
        with self._lock:
            return self.table_registry.all()

    def table(self, table_id: int) -> Table:
        with self._lock:
            return self.table_registry.get(table_id)

    def orders(self) -> tuple[Order, ...]:
        with self._lock:
            return self.ledger.all()

    def order(self, order_id: str) -> Order:
        with self._lock:
            return self.ledger.get(order_id)

    def order_for_table(self, table_id: int) -> Order | None:
        """Active order bound to the table, if it is occupied."""
        with self._lock:
            table = self.table_registry.get(table_id)
            if table.current_order_id is None:
                return None
            return self.ledger.get(table.current_order_id)

    def cart(self) -> CartSnapshot:
        with self._lock:
            return self.cart_builder.snapshot()

    # Catalog and inventory

    def add_menu_item(
        self,
        name: str,
        price: object,
        category: Category | str,
        is_active: bool = True,
        description: str | None = None,
    ) -> MenuItem:
        with self._lock:
            return self.catalog.add(name, price, category, is_active=is_active, description=description)

    def update_menu_item(self, item_id: str, **changes: object) -> MenuItem:
        with self._lock:
            return self.catalog.update(item_id, **changes)

    def delete_menu_item(self, item_id: str) -> None:
        with self._lock:
            self.catalog.delete(item_id)

    def update_inventory_quantity(self, record_id: str, quantity: object) -> InventoryRecord:
        with self._lock:
            return self.inventory.update_quantity(record_id, quantity)

    # Cart

    def select_table(self, table_id: int | None) -> None:
        with self._lock:
            self.cart_builder.select_table(table_id)

    def add_to_cart(self, menu_item: MenuItem | str) -> None:
        """Add one unit; accepts the item or its id (looked up in the current catalog)."""
        with self._lock:
            if isinstance(menu_item, str):
                menu_item = self.catalog.get(menu_item)
            self.cart_builder.add_item(menu_item)

    def remove_from_cart(self, menu_item_id: str) -> None:
        with self._lock:
            self.cart_builder.remove_item(menu_item_id)

    def set_cart_quantity(self, menu_item_id: str, quantity: object) -> None:
        with self._lock:
            self.cart_builder.set_quantity(menu_item_id, quantity)

    def clear_cart(self) -> None:
        with self._lock:
            self.cart_builder.clear()

    def submit_cart(self, waiter_name: str = DEFAULT_WAITER_NAME) -> Order:
        with self._lock:
            return self.cart_builder.submit(waiter_name)

    # Orders and tables

    def advance_order(self, order_id: str) -> Order:
        with self._lock:
            return self.ledger.advance(order_id)

    def set_order_status(self, order_id: str, status: OrderStatus | str) -> Order:
        with self._lock:
            return self.ledger.set_status(order_id, status)

    def bind_table(self, table_id: int, order_id: str) -> Table:
        with self._lock:
            order = self.ledger.get(order_id)
            if not order.is_active:
                raise ValidationError(f"Order {order_id} is already served")
            return self.table_registry.bind(table_id, order_id)

    def unbind_table(self, table_id: int) -> Table:
        with self._lock:
            return self.table_registry.unbind(table_id)

    # Derived views

    def low_stock(self) -> list[InventoryRecord]:
        return views.low_stock(self.inventory_records())

    def active_orders(self) -> list[Order]:
        return views.active_orders(self.orders())

    def kanban(self) -> dict[OrderStatus, list[Order]]:
        return views.kanban(self.orders())

    def billable_orders(self) -> list[Order]:
        return views.billable_orders(self.orders())

    def sales_summary(self) -> views.SalesSummary:
        return views.sales_summary(self.orders())

    def table_occupancy(self) -> views.TableOccupancy:
        return views.table_occupancy(self.tables())
