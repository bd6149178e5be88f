from __future__ import annotations

import asyncio

from PIL import ImageFont

from restaurant_ops import printer as printer_module
from restaurant_ops.billing_modal import BillingModal
from restaurant_ops.data import seeded_store
from restaurant_ops.models import OrderStatus, TableStatus
from restaurant_ops.quantity_modal import QuantityModal
from restaurant_ops.restaurant_app import RestaurantApp

from conftest import NOW, assert_bindings_consistent


class FakePrinter:
    def __init__(self) -> None:
        self.images: list[object] = []
        self.cuts = 0

    def image(self, img: object) -> None:
        self.images.append(img)

    def cut(self) -> None:
        self.cuts += 1


def make_app() -> RestaurantApp:
    return RestaurantApp(seeded_store(now=NOW), waiter_name="Sarah", printer=FakePrinter())


def test_waiter_takes_an_order():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            # Second table in the list is table 2, which starts free.
            await pilot.press("j")
            app.action_select_table()
            await pilot.press("/")
            for key in "salmon":
                await pilot.press(key)
            assert app.search_text == "salmon"
            app.action_add_selected_item()
            app.action_cancel_active_mode()
            app.action_submit_order()
            await pilot.pause()

    asyncio.run(scenario())

    store = app.store
    order = store.order_for_table(2)
    assert order is not None
    assert order.waiter_name == "Sarah"
    assert [(line.name, line.quantity) for line in order.items] == [("Grilled Salmon", 1)]
    assert store.cart().is_empty
    assert app.system_status.startswith("Order sent to kitchen: Table 2")
    assert_bindings_consistent(store)


def test_submit_is_refused_while_searching():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_select_table()
            app.input_state = "active"
            app.action_add_selected_item()
            app.action_submit_order()
            await pilot.pause()

    asyncio.run(scenario())

    assert "NORMAL mode" in app.system_status
    assert len(app.store.orders()) == 3


def test_submit_to_occupied_table_reports_error():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            # Table 1 holds the seeded ready order.
            app.action_select_table()
            app.store.add_to_cart("d1")
            app.action_submit_order()
            await pilot.pause()

    asyncio.run(scenario())

    assert app.store.order_for_table(1).id == "ord3"
    assert len(app.store.orders()) == 3
    assert app.system_status


def test_chef_advances_pending_order():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_switch_role("chef")
            await pilot.pause()
            app.action_advance_selected_order()
            await pilot.pause()

    asyncio.run(scenario())

    assert app.store.order("ord1").status is OrderStatus.IN_PROGRESS
    assert app.system_status == "Table 3 → In Progress"


def test_chef_cannot_serve_ready_order():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_switch_role("chef")
            await pilot.press("l")
            await pilot.press("l")
            app.action_advance_selected_order()
            await pilot.pause()

    asyncio.run(scenario())

    assert app.store.order("ord3").status is OrderStatus.READY
    assert "ready for pickup" in app.system_status


def test_bill_mark_paid_frees_table():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_open_bill()
            await pilot.pause()
            assert isinstance(app.screen, BillingModal)
            await pilot.press("m")
            await pilot.pause()
            assert not isinstance(app.screen, BillingModal)

    asyncio.run(scenario())

    assert app.store.order("ord3").status is OrderStatus.SERVED
    assert app.store.table(1).status is TableStatus.AVAILABLE
    assert app.system_status == "Order completed, table released"
    assert_bindings_consistent(app.store)


def test_bill_prints_receipt(monkeypatch):
    monkeypatch.setattr(printer_module, "resolve_printer_font_path", lambda: "unused.ttf")
    # load_default() goes through truetype() on newer Pillow, so build it before patching.
    default_font = ImageFont.load_default()
    monkeypatch.setattr(ImageFont, "truetype", lambda *args, **kwargs: default_font)
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_open_bill()
            await pilot.pause()
            await pilot.press("p")
            await pilot.pause()
            assert app.screen.status_message == "Receipt sent to printer"
            await pilot.press("escape")
            await pilot.pause()

    asyncio.run(scenario())

    assert app.printer.cuts == 1
    assert app.store.order("ord3").status is OrderStatus.READY


def test_bill_for_free_table_is_not_opened():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("j")
            app.action_open_bill()
            await pilot.pause()
            assert not isinstance(app.screen, BillingModal)

    asyncio.run(scenario())

    assert app.system_status == "Table 2 has no open order"


def test_admin_toggles_menu_item():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_switch_role("admin")
            await pilot.press("t")
            await pilot.pause()

    asyncio.run(scenario())

    assert app.store.menu_item("a1").is_active is False
    assert app.system_status == "Bruschetta deactivated"


def test_admin_edits_stock_through_quantity_modal():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_switch_role("admin")
            await pilot.press("e")
            await pilot.pause()
            assert isinstance(app.screen, QuantityModal)
            # Prefilled with the current count of 12.
            await pilot.press("backspace", "backspace", "4")
            assert app.screen.preview().plain.startswith("12 → 4 kg (-8)")
            assert "below minimum" in app.screen.preview().plain
            await pilot.press("enter")
            await pilot.pause()
            assert not isinstance(app.screen, QuantityModal)

    asyncio.run(scenario())

    assert app.store.inventory.get("inv1").quantity == 4
    assert app.system_status == "Salmon Fillet quantity updated to 4 kg"
    assert "Salmon Fillet" in {record.name for record in app.store.low_stock()}


def test_unchanged_stock_count_is_not_saved():
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.action_switch_role("admin")
            await pilot.press("e")
            await pilot.pause()
            await pilot.press("backspace", "2")
            assert "stocked" in app.screen.preview().plain
            await pilot.press("enter")
            await pilot.pause()
            assert not isinstance(app.screen, QuantityModal)

    asyncio.run(scenario())

    assert app.store.inventory.get("inv1").quantity == 12
    assert app.system_status == ""
