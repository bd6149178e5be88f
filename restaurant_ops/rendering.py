"""Rendering helpers shared by the Textual views and the bill."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from rich.text import Text

from restaurant_ops.constant import CATEGORY_LABELS
from restaurant_ops.models import Category, InventoryRecord, Order, OrderLine, OrderStatus, Table
from restaurant_ops.pricing import round_cents

_STATUS_STYLES: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "bold #1f1600 on #e0b040",
    OrderStatus.IN_PROGRESS: "bold #ffffff on #2f6db5",
    OrderStatus.READY: "bold #0b1f0f on #5fbf72",
    OrderStatus.SERVED: "bold #ffffff on #6b6b6b",
}

_CATEGORY_STYLES: dict[Category, str] = {
    Category.APPETIZER: "bold #0b1f0f on #5fbf72",
    Category.MAIN: "bold #ffffff on #b23a48",
    Category.DRINK: "bold #ffffff on #2f6db5",
    Category.DESSERT: "bold #1f1600 on #e0b040",
}


def badge_style(status: OrderStatus) -> str:
    """Return a consistent badge style for an order status."""
    return _STATUS_STYLES[status]


def format_money(amount: Decimal) -> str:
    return f"${round_cents(amount):,.2f}"


def category_label(category: Category) -> str:
    return CATEGORY_LABELS[category.value]


def format_status_badge(status: OrderStatus) -> Text:
    return Text(f" {status.value} ", style=badge_style(status))


def format_category_tag(category: Category) -> Text:
    return Text(category.value[0].upper(), style=_CATEGORY_STYLES[category])


def time_since(created_at: datetime, now: datetime | None = None) -> str:
    """Kitchen-friendly elapsed time: 'Just now', '12m ago', '1h 5m ago'."""
    now = now or datetime.now(timezone.utc)
    minutes = int((now - created_at).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    return f"{minutes // 60}h {minutes % 60}m ago"


def format_line(line: OrderLine) -> str:
    return f"{line.quantity}x {line.name}  {format_money(line.subtotal)}"


def format_order_label(order: Order, now: datetime | None = None) -> Text:
    """Render 'Table N' with the status badge and the order age."""
    text = Text()
    text.append(f"Table {order.table_no} ", style="bold")
    text.append_text(format_status_badge(order.status))
    text.append(f"  {time_since(order.created_at, now)}", style="dim")
    return text


def format_table_label(table: Table) -> Text:
    text = Text()
    text.append(f"Table {table.id:>2}", style="bold")
    text.append(f"  {table.seats} seats  ")
    if table.is_occupied:
        text.append("occupied", style="bold #ffffff on #b23a48")
        text.append(f" {table.current_order_id}", style="dim")
    else:
        text.append("available", style="bold #0b1f0f on #5fbf72")
    return text


def format_stock_label(record: InventoryRecord) -> Text:
    text = Text()
    text.append(f"{record.name}: {record.quantity} {record.unit}")
    text.append(f" (min {record.min_level})", style="dim")
    if record.is_low_stock:
        text.append(" LOW", style="bold #ffffff on #b23a48")
    return text
