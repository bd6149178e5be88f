"""Order ledger and the order status machine."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable
from uuid import uuid4

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.models import Order, OrderLine, OrderStatus
from restaurant_ops.pricing import total as order_total
from restaurant_ops.tables import TableRegistry

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(status: OrderStatus | str) -> OrderStatus:
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown order status: {status!r}") from None


class OrderLedger:
    """
    Owns every order ever placed, oldest first.

    Status only moves forward through Pending, In Progress, Ready, Served.
    Reaching Served frees the table bound to the order.
    """

    def __init__(self, tables: TableRegistry, orders: Iterable[Order] = ()) -> None:
        self._tables = tables
        self._orders: dict[str, Order] = {order.id: order for order in orders}

    def all(self) -> tuple[Order, ...]:
        return tuple(self._orders.values())

    def get(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError("order", order_id)
        return order

    def create(self, table_no: int, waiter_name: str, lines: Iterable[OrderLine]) -> Order:
        """Record a new Pending order and bind its table to it."""
        items = tuple(lines)
        if not items:
            raise ValidationError("An order needs at least one item")
        if any(line.quantity <= 0 for line in items):
            raise ValidationError("Order line quantities must be positive")
        self._tables.get(table_no)

        order = Order(
            id=f"ord-{uuid4().hex[:12]}",
            table_no=table_no,
            waiter_name=waiter_name,
            status=OrderStatus.PENDING,
            items=items,
            created_at=_utc_now(),
            total=order_total(items),
        )
        self._orders[order.id] = order
        self._tables.bind(table_no, order.id)
        logger.info(
            "order_created id=%s table=%s lines=%d total=%s waiter=%r",
            order.id,
            table_no,
            len(items),
            order.total,
            waiter_name,
        )
        return order

    def advance(self, order_id: str) -> Order:
        """Move to the next status; a Served order is returned unchanged."""
        order = self.get(order_id)
        following = order.status.next()
        if following is None:
            logger.debug("advance_noop id=%s status=%s", order_id, order.status.value)
            return order
        return self._transition(order, following)

    def set_status(self, order_id: str, status: OrderStatus | str) -> Order:
        """Jump forward to `status` (billing uses this to go straight to Served)."""
        order = self.get(order_id)
        target = parse_status(status)
        if target is order.status:
            logger.debug("set_status_noop id=%s status=%s", order_id, target.value)
            return order
        if target.rank < order.status.rank:
            raise ValidationError(
                f"Order {order_id} cannot move back from {order.status.value} to {target.value}"
            )
        return self._transition(order, target)

    def _transition(self, order: Order, target: OrderStatus) -> Order:
        updated = replace(order, status=target)
        self._orders[order.id] = updated
        logger.info("order_status id=%s %s->%s", order.id, order.status.value, target.value)
        if target is OrderStatus.SERVED:
            # Look the table up by its binding; the order's table_no may have been rebound since.
            table = self._tables.table_for_order(order.id)
            if table is not None:
                self._tables.unbind(table.id)
        return updated
