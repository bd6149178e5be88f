"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from restaurant_ops.billing_modal import BillingModal
from restaurant_ops.config import DEFAULT_WAITER_NAME, RESTAURANT_NAME
from restaurant_ops.errors import RestaurantError
from restaurant_ops.models import Category, MenuItem, Order, OrderStatus
from restaurant_ops.printer import check_printer_dependencies
from restaurant_ops.quantity_modal import QuantityModal
from restaurant_ops.rendering import (
    category_label,
    format_category_tag,
    format_money,
    format_order_label,
    format_stock_label,
    format_table_label,
)
from restaurant_ops.store import RestaurantStore
from restaurant_ops.views import KANBAN_COLUMNS, filter_menu

logger = logging.getLogger(__name__)

ROLES = ("waiter", "chef", "admin")
# None means "all categories".
CATEGORY_CYCLE: tuple[Category | None, ...] = (None, *Category)


class RestaurantApp(App):
    """A Textual app for taking orders, running the kitchen board and watching stock."""

    TITLE = RESTAURANT_NAME
    SUB_TITLE = "Waiter"

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    #main-layout {
        height: 1fr;
    }

    .pane {
        width: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .pane-body {
        height: 1fr;
    }
    """

    role = reactive("waiter")
    input_state = reactive("normal")
    search_text = reactive("")
    selected_index = reactive(0)
    table_cursor = reactive(0)
    category_index = reactive(0)
    kanban_column = reactive(0)
    kanban_index = reactive(0)
    inventory_cursor = reactive(0)
    menu_cursor = reactive(0)

    BINDINGS = [
        ("f1", "switch_role('waiter')", "Waiter"),
        ("f2", "switch_role('chef')", "Chef"),
        ("f3", "switch_role('admin')", "Admin"),
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "confirm", "Select"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "submit_order", "Send order", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: RestaurantStore,
        waiter_name: str = DEFAULT_WAITER_NAME,
        printer: object | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.waiter_name = waiter_name
        self.printer = printer
        self.system_status = ""
        self.cart_focus_id: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="status-bar")
        with Horizontal(id="main-layout"):
            for pane in ("left", "middle", "right"):
                with Vertical(id=f"{pane}-pane", classes="pane"):
                    yield Static(id=f"{pane}-title", classes="pane-title")
                    yield Static(id=f"{pane}-body", classes="pane-body")

    def on_mount(self) -> None:
        if self.printer is None:
            _, msg = check_printer_dependencies()
            self.system_status = msg
            logger.info("app_mount printer_status=%r", msg)
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if self.input_state == "active":
            char = event.character
            if event.is_printable and char and len(char) == 1 and (char.isalnum() or char == " "):
                self.search_text += char
                self.selected_index = 0
                self._refresh_all()
                event.stop()
            return

        if not event.is_printable or not event.character:
            return

        handler = {
            "waiter": self._handle_waiter_key,
            "chef": self._handle_chef_key,
            "admin": self._handle_admin_key,
        }[self.role]
        if handler(event.character.lower()):
            event.stop()

    # Role and search handling

    def action_switch_role(self, role: str) -> None:
        if isinstance(self.screen, ModalScreen) or role not in ROLES:
            return
        self.role = role
        self.sub_title = role.title()
        self.input_state = "normal"
        self.search_text = ""
        self.system_status = ""
        self._refresh_all()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_all()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active":
            return

        results = self._filtered_menu()
        if not results:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_all()

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active" or not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_all()

    def action_confirm(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.role == "waiter":
            if self.input_state == "active":
                self.action_add_selected_item()
            else:
                self.action_select_table()
        elif self.role == "chef":
            self.action_advance_selected_order()

    # Waiter actions

    def action_select_table(self) -> None:
        tables = self.store.tables()
        if not tables:
            return
        table = tables[self.table_cursor % len(tables)]
        self._run(lambda: self.store.select_table(table.id), f"Table {table.id} selected")

    def action_add_selected_item(self) -> None:
        results = self._filtered_menu()
        if not results:
            return
        item = results[self.selected_index % len(results)]
        if self._run(lambda: self.store.add_to_cart(item.id), f"Added {item.name}"):
            self.cart_focus_id = item.id
            self._refresh_all()

    def action_change_quantity(self, delta: int) -> None:
        line = self._focused_cart_line()
        if line is None:
            return
        self._run(lambda: self.store.set_cart_quantity(line.menu_item_id, line.quantity + delta))
        if self._focused_cart_line() is None:
            self.cart_focus_id = None
            self._refresh_all()

    def action_remove_focused_line(self) -> None:
        line = self._focused_cart_line()
        if line is None:
            return
        self.cart_focus_id = None
        self._run(lambda: self.store.remove_from_cart(line.menu_item_id), f"Removed {line.name}")

    def action_clear_cart(self) -> None:
        self.cart_focus_id = None
        self._run(self.store.clear_cart, "Cart cleared")

    def action_submit_order(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.role != "waiter":
            return
        if self.input_state != "normal":
            self.system_status = "Send only in NORMAL mode (Ctrl+C to leave search)"
            self._refresh_status()
            return

        try:
            order = self.store.submit_cart(self.waiter_name)
        except RestaurantError as exc:
            logger.info("submit_blocked reason=%r", str(exc))
            self.system_status = str(exc)
            self._refresh_status()
            return

        self.cart_focus_id = None
        self.system_status = (
            f"Order sent to kitchen: Table {order.table_no} · {len(order.items)} items · {format_money(order.total)}"
        )
        self._refresh_all()

    def action_open_bill(self) -> None:
        tables = self.store.tables()
        if not tables:
            return
        table = tables[self.table_cursor % len(tables)]
        order = self.store.order_for_table(table.id)
        if order is None:
            self.system_status = f"Table {table.id} has no open order"
            self._refresh_status()
            return
        self.push_screen(BillingModal(self.store, order.id, printer=self.printer), self._on_bill_closed)

    def _on_bill_closed(self, paid: bool | None) -> None:
        if paid:
            self.system_status = "Order completed, table released"
        self._refresh_all()

    def _handle_waiter_key(self, key: str) -> bool:
        if key == "/":
            self.input_state = "active"
            self.search_text = ""
            self.selected_index = 0
            self._refresh_all()
        elif key == "j":
            self._move_table_cursor(1)
        elif key == "k":
            self._move_table_cursor(-1)
        elif key == "c":
            self.category_index = (self.category_index + 1) % len(CATEGORY_CYCLE)
            self.selected_index = 0
            self._refresh_all()
        elif key in {"+", "="}:
            self.action_change_quantity(1)
        elif key == "-":
            self.action_change_quantity(-1)
        elif key == "d":
            self.action_remove_focused_line()
        elif key == "x":
            self.action_clear_cart()
        elif key == "b":
            self.action_open_bill()
        else:
            return False
        return True

    # Chef actions

    def action_advance_selected_order(self) -> None:
        order = self._selected_kanban_order()
        if order is None:
            return
        if order.status is OrderStatus.READY:
            # Ready -> Served happens at the table, through the bill.
            self.system_status = f"Table {order.table_no} is ready for pickup"
            self._refresh_status()
            return
        updated = self.store.advance_order(order.id)
        self.system_status = f"Table {updated.table_no} → {updated.status.value}"
        self._refresh_all()

    def _handle_chef_key(self, key: str) -> bool:
        if key == "h":
            self._move_kanban_column(-1)
        elif key == "l":
            self._move_kanban_column(1)
        elif key == "j":
            self._move_kanban_row(1)
        elif key == "k":
            self._move_kanban_row(-1)
        else:
            return False
        return True

    # Admin actions

    def action_edit_stock(self) -> None:
        records = self.store.inventory_records()
        if not records:
            return
        record = records[self.inventory_cursor % len(records)]

        def apply_quantity(quantity: int | None) -> None:
            if quantity is None:
                return
            self._run(
                lambda: self.store.update_inventory_quantity(record.id, quantity),
                f"{record.name} quantity updated to {quantity} {record.unit}",
            )

        self.push_screen(QuantityModal(record), apply_quantity)

    def action_toggle_menu_item(self) -> None:
        items = self.store.menu_items()
        if not items:
            return
        item = items[self.menu_cursor % len(items)]
        verb = "deactivated" if item.is_active else "activated"
        self._run(lambda: self.store.update_menu_item(item.id, is_active=not item.is_active), f"{item.name} {verb}")

    def _handle_admin_key(self, key: str) -> bool:
        if key == "j":
            self.inventory_cursor = self._wrap(self.inventory_cursor + 1, len(self.store.inventory_records()))
        elif key == "k":
            self.inventory_cursor = self._wrap(self.inventory_cursor - 1, len(self.store.inventory_records()))
        elif key == "]":
            self.menu_cursor = self._wrap(self.menu_cursor + 1, len(self.store.menu_items()))
        elif key == "[":
            self.menu_cursor = self._wrap(self.menu_cursor - 1, len(self.store.menu_items()))
        elif key == "e":
            self.action_edit_stock()
            return True
        elif key == "t":
            self.action_toggle_menu_item()
            return True
        else:
            return False
        self._refresh_all()
        return True

    # Helpers

    def _run(self, operation, success: str = "") -> bool:
        """Run a store operation, reporting store errors in the status bar."""
        try:
            operation()
        except RestaurantError as exc:
            logger.info("action_rejected reason=%r", str(exc))
            self.system_status = str(exc)
            self._refresh_status()
            return False
        if success:
            self.system_status = success
        self._refresh_all()
        return True

    @staticmethod
    def _wrap(index: int, total: int) -> int:
        if total <= 0:
            return 0
        return index % total

    def _current_category(self) -> Category | None:
        return CATEGORY_CYCLE[self.category_index % len(CATEGORY_CYCLE)]

    def _filtered_menu(self) -> list[MenuItem]:
        return filter_menu(
            self.store.menu_items(),
            category=self._current_category(),
            query=self.search_text,
            active_only=True,
        )

    def _focused_cart_line(self):
        for line in self.store.cart().lines:
            if line.menu_item_id == self.cart_focus_id:
                return line
        return None

    def _move_table_cursor(self, delta: int) -> None:
        self.table_cursor = self._wrap(self.table_cursor + delta, len(self.store.tables()))
        self._refresh_all()

    def _move_kanban_column(self, delta: int) -> None:
        self.kanban_column = (self.kanban_column + delta) % len(KANBAN_COLUMNS)
        self.kanban_index = 0
        self._refresh_all()

    def _move_kanban_row(self, delta: int) -> None:
        column = self.store.kanban()[KANBAN_COLUMNS[self.kanban_column]]
        self.kanban_index = self._wrap(self.kanban_index + delta, len(column))
        self._refresh_all()

    def _selected_kanban_order(self) -> Order | None:
        column = self.store.kanban()[KANBAN_COLUMNS[self.kanban_column]]
        if not column:
            return None
        if self.kanban_index >= len(column):
            self.kanban_index = len(column) - 1
        return column[self.kanban_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 12
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _render_list(self, widget: Static, rows: list[Text], selected: int | None, empty: str) -> Text:
        if not rows:
            return Text(empty, style="dim")

        start, end = self._window_bounds(len(rows), self._visible_rows(widget), selected)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == selected else "  ")
            lines.append_text(rows[idx])
        if end < len(rows):
            lines.append("\n⋮", style="dim")
        return lines

    # Refresh

    def _refresh_all(self) -> None:
        try:
            panes = {
                pane: (self.query_one(f"#{pane}-title", Static), self.query_one(f"#{pane}-body", Static))
                for pane in ("left", "middle", "right")
            }
        except NoMatches:
            return

        if self.role == "waiter":
            self._refresh_waiter(panes)
        elif self.role == "chef":
            self._refresh_chef(panes)
        else:
            self._refresh_admin(panes)
        self._refresh_status()

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return

        status = self.system_status or "Ready"
        if self.role == "waiter" and self.input_state == "active":
            category = self._current_category()
            text = Text()
            text.append(" SEARCH ", style="bold #ffffff on #2f6db5")
            text.append(f" {category_label(category) if category else 'All'}: {self.search_text}|")
            text.append(f"\n{status}")
            bar.update(text)
            return

        hints = {
            "waiter": "J/K tables, Enter select, / search, C category, +/- qty, D remove, X clear, Ctrl+S send, B bill",
            "chef": "H/L column, J/K order, Enter advance",
            "admin": "J/K stock, E edit qty, [/] menu, T toggle active",
        }[self.role]
        bar.update(Text(f"F1 waiter · F2 chef · F3 admin · Ctrl+Q quit\n{hints}\n{status}"))

    def _refresh_waiter(self, panes: dict[str, tuple[Static, Static]]) -> None:
        cart = self.store.cart()
        tables = self.store.tables()

        left_title, left_body = panes["left"]
        occupancy = self.store.table_occupancy()
        left_title.update(f"Tables · {occupancy.available} available · {occupancy.occupied} occupied")
        rows = []
        for table in tables:
            row = Text("✓ " if table.id == cart.selected_table else "  ")
            row.append_text(format_table_label(table))
            rows.append(row)
        cursor = self._wrap(self.table_cursor, len(tables)) if tables else None
        left_body.update(self._render_list(left_body, rows, cursor, "(no tables)"))

        middle_title, middle_body = panes["middle"]
        category = self._current_category()
        middle_title.update(f"Menu · {category_label(category) if category else 'All'}")
        results = self._filtered_menu()
        menu_rows = []
        for item in results:
            row = format_category_tag(item.category)
            row.append(f" {item.name}  {format_money(item.price)}")
            menu_rows.append(row)
        selected = self.selected_index if self.input_state == "active" and results else None
        middle_body.update(self._render_list(middle_body, menu_rows, selected, "No results"))

        right_title, right_body = panes["right"]
        right_title.update(f"Cart · Table {cart.selected_table}" if cart.selected_table else "Cart · no table selected")
        body = Text()
        if cart.is_empty:
            body.append("(no items yet)", style="dim")
        for idx, line in enumerate(cart.lines):
            if idx > 0:
                body.append("\n")
            body.append("➤ " if line.menu_item_id == self.cart_focus_id else "  ")
            body.append(f"{line.quantity}x {line.name}  {format_money(line.subtotal)}")
        body.append(f"\n\nSubtotal {format_money(cart.subtotal)}")
        body.append(f"\nTax (8%) {format_money(cart.tax)}")
        body.append(f"\nTotal    {format_money(cart.total)}", style="bold")

        billable = self.store.billable_orders()
        if billable:
            body.append("\n\nBills", style="bold")
            for order in billable:
                body.append("\n")
                body.append_text(format_order_label(order))
                body.append(f"  {format_money(order.total)}")
        right_body.update(body)

    def _refresh_chef(self, panes: dict[str, tuple[Static, Static]]) -> None:
        board = self.store.kanban()
        for column_idx, (pane, status) in enumerate(zip(("left", "middle", "right"), KANBAN_COLUMNS)):
            title, body = panes[pane]
            orders = board[status]
            marker = "➤ " if column_idx == self.kanban_column else ""
            title.update(f"{marker}{status.value} ({len(orders)})")
            rows = []
            for order in orders:
                row = format_order_label(order)
                for line in order.items:
                    row.append(f"\n     {line.quantity} × {line.name}")
                rows.append(row)
            selected = None
            if column_idx == self.kanban_column and orders:
                selected = min(self.kanban_index, len(orders) - 1)
            body.update(self._render_list(body, rows, selected, "No orders"))

    def _refresh_admin(self, panes: dict[str, tuple[Static, Static]]) -> None:
        summary = self.store.sales_summary()
        low = self.store.low_stock()
        active = self.store.active_orders()

        left_title, left_body = panes["left"]
        left_title.update("Dashboard")
        text = Text()
        text.append(f"Sales            {format_money(summary.total)}\n")
        text.append(f"Active orders    {len(active)}\n")
        text.append(f"Low stock alerts {len(low)}\n", style="bold #ffb3b3" if low else "")
        text.append(f"Avg order value  {format_money(summary.average)}\n")
        if low:
            text.append("\nLow stock\n", style="bold")
            for record in low:
                text.append(f"  {record.name}: {record.quantity} {record.unit} (min {record.min_level})\n")
        text.append("\nRecent orders\n", style="bold")
        for order in self.store.orders()[-5:][::-1]:
            text.append("  ")
            text.append_text(format_order_label(order))
            text.append(f"  {format_money(order.total)}\n")
        left_body.update(text)

        middle_title, middle_body = panes["middle"]
        records = self.store.inventory_records()
        middle_title.update(f"Inventory · {len(low)} low")
        cursor = self._wrap(self.inventory_cursor, len(records)) if records else None
        middle_body.update(
            self._render_list(middle_body, [format_stock_label(record) for record in records], cursor, "(no stock)")
        )

        right_title, right_body = panes["right"]
        items = self.store.menu_items()
        right_title.update(f"Menu · {sum(1 for item in items if item.is_active)} active")
        rows = []
        for item in items:
            row = format_category_tag(item.category)
            row.append(f" {item.name}  {format_money(item.price)}", style="" if item.is_active else "dim strike")
            rows.append(row)
        cursor = self._wrap(self.menu_cursor, len(items)) if items else None
        right_body.update(self._render_list(right_body, rows, cursor, "(no menu items)"))
