"""Bill modal screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from restaurant_ops.errors import RestaurantError
from restaurant_ops.models import Order, OrderStatus
from restaurant_ops.pricing import receipt_breakdown
from restaurant_ops.printer import print_receipt
from restaurant_ops.rendering import format_money, format_status_badge
from restaurant_ops.store import RestaurantStore

logger = logging.getLogger(__name__)


class BillingModal(ModalScreen[bool]):
    """Centered modal showing one order's bill, with print and mark-paid actions."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("p", "print_receipt", "Print"),
        ("m", "mark_paid", "Mark paid"),
    ]

    CSS = """
    BillingModal {
        align: center middle;
        background: $background 60%;
    }

    #bill-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #bill-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #bill-body {
        margin-bottom: 1;
        color: white;
    }

    #bill-status {
        color: #ffb3b3;
    }

    #bill-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(
        self,
        store: RestaurantStore,
        order_id: str,
        printer: object | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.order_id = order_id
        self.printer = printer
        self.status_message = ""

    def compose(self) -> ComposeResult:
        with Container(id="bill-dialog"):
            yield Static("Bill", id="bill-title")
            yield Static(id="bill-body")
            yield Static(id="bill-status")
            yield Static("P print, M mark as paid, Esc/q/Ctrl+C close", id="bill-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss(False)

    def action_print_receipt(self) -> None:
        order = self.store.order(self.order_id)
        try:
            print_receipt(order, printer=self.printer)
        except Exception as exc:
            # The bill stays open so the waiter can retry or read it out.
            logger.warning("receipt_print_failed order=%s error=%r", order.id, exc)
            self.status_message = f"Print failed: {exc}"
        else:
            logger.info("receipt_printed order=%s", order.id)
            self.status_message = "Receipt sent to printer"
        self._refresh_content()

    def action_mark_paid(self) -> None:
        try:
            self.store.set_order_status(self.order_id, OrderStatus.SERVED)
        except RestaurantError as exc:
            self.status_message = str(exc)
            self._refresh_content()
            return
        self.dismiss(True)

    def _refresh_content(self) -> None:
        order = self.store.order(self.order_id)
        self.query_one("#bill-title", Static).update(f"Bill · Table {order.table_no}")
        self.query_one("#bill-body", Static).update(render_bill(order))
        self.query_one("#bill-status", Static).update(Text(self.status_message))


def render_bill(order: Order) -> Text:
    """Itemized bill with subtotal and tax derived from the stored total."""
    figures = receipt_breakdown(order)
    text = Text(style="white")
    text.append(f"{order.id} · {order.waiter_name} ")
    text.append_text(format_status_badge(order.status))
    text.append("\n\n")
    for line in order.items:
        text.append(f"{line.quantity}x {line.name}".ljust(36))
        text.append(f"{format_money(line.subtotal):>12}\n")
    text.append("\n")
    text.append("Subtotal".ljust(36) + f"{format_money(figures.subtotal):>12}\n")
    text.append("Tax (8%)".ljust(36) + f"{format_money(figures.tax):>12}\n")
    text.append("Total".ljust(36) + f"{format_money(figures.total):>12}", style="bold")
    return text
