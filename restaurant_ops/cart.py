"""Waiter cart: lines being assembled for one table before submission."""

from __future__ import annotations

import logging
from dataclasses import replace

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.inventory import parse_count
from restaurant_ops.models import CartSnapshot, MenuItem, Order, OrderLine
from restaurant_ops.orders import OrderLedger
from restaurant_ops.pricing import subtotal, tax
from restaurant_ops.tables import TableRegistry

logger = logging.getLogger(__name__)


class CartBuilder:
    """Holds at most one line per menu item plus the selected table."""

    def __init__(self, tables: TableRegistry, ledger: OrderLedger) -> None:
        self._tables = tables
        self._ledger = ledger
        self._lines: dict[str, OrderLine] = {}
        self.selected_table: int | None = None

    def snapshot(self) -> CartSnapshot:
        lines = tuple(self._lines.values())
        base = subtotal(lines)
        line_tax = tax(base)
        return CartSnapshot(
            lines=lines,
            selected_table=self.selected_table,
            subtotal=base,
            tax=line_tax,
            total=base + line_tax,
        )

    def select_table(self, table_id: int | None) -> None:
        """Choose the table to order for; occupied tables may be selected for viewing."""
        if table_id is not None:
            self._tables.get(table_id)
        self.selected_table = table_id
        logger.debug("cart_table_selected table=%s", table_id)

    def add_item(self, menu_item: MenuItem) -> None:
        if not menu_item.is_active:
            logger.debug("cart_add_skipped_inactive item=%s", menu_item.id)
            return

        line = self._lines.get(menu_item.id)
        if line is not None:
            self._lines[menu_item.id] = replace(line, quantity=line.quantity + 1)
        else:
            self._lines[menu_item.id] = OrderLine(
                menu_item_id=menu_item.id,
                name=menu_item.name,
                quantity=1,
                unit_price=menu_item.price,
            )
        logger.debug("cart_add item=%s quantity=%d", menu_item.id, self._lines[menu_item.id].quantity)

    def remove_item(self, menu_item_id: str) -> None:
        self._lines.pop(menu_item_id, None)

    def set_quantity(self, menu_item_id: str, quantity: object) -> None:
        count = parse_count(quantity)
        if count <= 0:
            self.remove_item(menu_item_id)
            return

        line = self._lines.get(menu_item_id)
        if line is None:
            raise NotFoundError("cart line", menu_item_id)
        self._lines[menu_item_id] = replace(line, quantity=count)

    def clear(self) -> None:
        self._lines.clear()
        self.selected_table = None

    def submit(self, waiter_name: str) -> Order:
        """Turn the cart into a Pending order for the selected table, then clear it."""
        if self.selected_table is None:
            raise ValidationError("Please select a table first")
        if not self._lines:
            raise ValidationError("Please add items to the order")

        table = self._tables.get(self.selected_table)
        if table.is_occupied:
            bound = self._ledger.get(table.current_order_id) if table.current_order_id else None
            if bound is not None and bound.is_active:
                raise ValidationError(
                    f"Table {table.id} already has active order {bound.id}; settle it before placing a new one"
                )

        # OrderLine is frozen, so the order gets copies the cart can no longer touch.
        order = self._ledger.create(table.id, waiter_name, tuple(self._lines.values()))
        self.clear()
        return order
