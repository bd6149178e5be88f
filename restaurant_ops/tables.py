"""Table registry: occupancy and the binding to the active order."""

from __future__ import annotations

import logging
from typing import Iterable

from restaurant_ops.errors import NotFoundError
from restaurant_ops.models import Table, TableStatus

logger = logging.getLogger(__name__)


class TableRegistry:
    """
    Owns table records.

    Status and `current_order_id` are always written together by swapping in a
    whole new frozen record, so a table is never seen occupied without an
    order reference or available with one.
    """

    def __init__(self, tables: Iterable[Table] = ()) -> None:
        self._tables: dict[int, Table] = {table.id: table for table in tables}

    def all(self) -> tuple[Table, ...]:
        return tuple(self._tables.values())

    def get(self, table_id: int) -> Table:
        table = self._tables.get(table_id)
        if table is None:
            raise NotFoundError("table", table_id)
        return table

    def exists(self, table_id: int) -> bool:
        return table_id in self._tables

    def bind(self, table_id: int, order_id: str) -> Table:
        """Occupy the table with `order_id`, replacing any previous binding."""
        current = self.get(table_id)
        if current.current_order_id not in (None, order_id):
            logger.warning("table_rebind table=%s old_order=%s new_order=%s", table_id, current.current_order_id, order_id)
        bound = Table(id=current.id, seats=current.seats, status=TableStatus.OCCUPIED, current_order_id=order_id)
        self._tables[table_id] = bound
        logger.info("table_bound table=%s order=%s", table_id, order_id)
        return bound

    def unbind(self, table_id: int) -> Table:
        current = self.get(table_id)
        freed = Table(id=current.id, seats=current.seats)
        self._tables[table_id] = freed
        logger.info("table_unbound table=%s previous_order=%s", table_id, current.current_order_id)
        return freed

    def table_for_order(self, order_id: str) -> Table | None:
        """Find the table currently bound to `order_id`, if any."""
        for table in self._tables.values():
            if table.current_order_id == order_id:
                return table
        return None
