"""Stock count entry modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restaurant_ops.models import InventoryRecord

MAX_DIGITS = 6


class QuantityModal(ModalScreen[int | None]):
    """
    Recount one inventory record.

    Dismisses with the new count, or None when cancelled or left unchanged.
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("q", "cancel", "Cancel"),
        ("ctrl+c", "cancel", "Cancel"),
        ("enter", "save", "Save"),
        ("backspace", "delete_digit", "Delete"),
    ]

    CSS = """
    QuantityModal {
        align: center middle;
        background: $background 60%;
    }

    #stock-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #stock-name {
        text-style: bold;
        color: white;
    }

    #stock-count {
        border: heavy $secondary;
        padding: 0 1;
        margin: 1 0;
        color: white;
    }

    #stock-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, record: InventoryRecord) -> None:
        super().__init__()
        self.record = record
        self.value = str(record.quantity)

    def compose(self) -> ComposeResult:
        with Vertical(id="stock-dialog"):
            yield Static(f"{self.record.name} · min {self.record.min_level} {self.record.unit}", id="stock-name")
            yield Static(id="stock-count")
            yield Static(id="stock-preview")
            yield Static("Digits to recount, Enter save, Esc cancel", id="stock-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        char = event.character
        if not (event.is_printable and char and char.isdecimal()):
            return
        # A fresh count replaces a lone zero instead of padding it.
        self.value = (char if self.value == "0" else self.value + char)[:MAX_DIGITS]
        self._refresh_content()
        event.stop()

    def action_delete_digit(self) -> None:
        self.value = self.value[:-1]
        self._refresh_content()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_save(self) -> None:
        count = self.entered_count()
        if count is None:
            self.app.bell()
            return
        self.dismiss(None if count == self.record.quantity else count)

    def entered_count(self) -> int | None:
        return int(self.value) if self.value else None

    def preview(self) -> Text:
        """How the typed count compares with the current level and the minimum."""
        count = self.entered_count()
        if count is None:
            return Text("Enter a count", style="dim")

        delta = count - self.record.quantity
        text = Text(f"{self.record.quantity} → {count} {self.record.unit} ({delta:+d})  ")
        if count < self.record.min_level:
            text.append(" below minimum ", style="bold #ffffff on #b53b2f")
        else:
            text.append(" stocked ", style="bold #1e1e1e on #7cc47c")
        return text

    def _refresh_content(self) -> None:
        self.query_one("#stock-count", Static).update(Text(self.value or " "))
        self.query_one("#stock-preview", Static).update(self.preview())
