from __future__ import annotations

from decimal import Decimal

import pytest

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.models import OrderStatus, TableStatus
from restaurant_ops.pricing import round_cents

from conftest import assert_bindings_consistent, place_order


def test_adding_same_item_twice_increments_one_line(store):
    store.add_to_cart("a1")
    store.add_to_cart("a1")

    cart = store.cart()
    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 2


def test_lines_keep_insertion_order(store):
    store.add_to_cart("m1")
    store.add_to_cart("a1")
    store.add_to_cart("m1")

    assert [line.menu_item_id for line in store.cart().lines] == ["m1", "a1"]


def test_inactive_item_is_silently_ignored(store):
    store.add_to_cart("a5")
    assert store.cart().is_empty


def test_add_unknown_item_raises(store):
    with pytest.raises(NotFoundError):
        store.add_to_cart("nope")


def test_line_captures_catalog_price(store):
    store.add_to_cart("a1")
    line = store.cart().lines[0]
    assert line.name == "Bruschetta"
    assert line.unit_price == Decimal("8.99")


def test_remove_item_drops_line_regardless_of_quantity(store):
    store.add_to_cart("a1")
    store.set_cart_quantity("a1", 5)
    store.remove_from_cart("a1")
    assert store.cart().is_empty


def test_remove_missing_line_is_noop(store):
    store.add_to_cart("a1")
    store.remove_from_cart("m1")
    assert len(store.cart().lines) == 1


@pytest.mark.parametrize("quantity", [0, -3, "0"])
def test_non_positive_quantity_removes_line(store, quantity):
    store.add_to_cart("a1")
    store.set_cart_quantity("a1", quantity)
    assert store.cart().is_empty


def test_set_quantity_overwrites(store):
    store.add_to_cart("a1")
    store.set_cart_quantity("a1", "4")
    assert store.cart().lines[0].quantity == 4


@pytest.mark.parametrize("quantity", ["two", 1.5, None, True, ""])
def test_set_quantity_rejects_non_integers(store, quantity):
    store.add_to_cart("a1")
    with pytest.raises(ValidationError):
        store.set_cart_quantity("a1", quantity)
    assert store.cart().lines[0].quantity == 1


def test_set_quantity_for_missing_line_raises(store):
    with pytest.raises(NotFoundError):
        store.set_cart_quantity("a1", 2)


def test_clear_empties_lines_and_table(store):
    store.select_table(2)
    store.add_to_cart("a1")
    store.clear_cart()

    cart = store.cart()
    assert cart.is_empty
    assert cart.selected_table is None


def test_select_unknown_table_raises(store):
    with pytest.raises(NotFoundError):
        store.select_table(99)
    assert store.cart().selected_table is None


def test_cart_totals_include_tax(store):
    store.add_to_cart("a1")
    store.add_to_cart("a1")
    cart = store.cart()
    assert cart.subtotal == Decimal("17.98")
    assert round_cents(cart.tax) == Decimal("1.44")
    assert round_cents(cart.total) == Decimal("19.42")


def test_submit_without_table_fails_without_effect(store):
    store.add_to_cart("a1")
    with pytest.raises(ValidationError):
        store.submit_cart()
    assert store.orders() == ()
    assert len(store.cart().lines) == 1


def test_submit_empty_cart_fails_without_effect(store):
    store.select_table(1)
    with pytest.raises(ValidationError):
        store.submit_cart()
    assert store.orders() == ()
    assert store.table(1).status is TableStatus.AVAILABLE
    assert store.cart().selected_table == 1


def test_submit_creates_pending_order_and_binds_table(store):
    store.select_table(3)
    store.add_to_cart("a1")
    store.add_to_cart("a1")

    order = store.submit_cart("Sarah")

    assert order.status is OrderStatus.PENDING
    assert order.table_no == 3
    assert order.waiter_name == "Sarah"
    assert round_cents(order.total) == Decimal("19.42")
    assert [(line.name, line.quantity) for line in order.items] == [("Bruschetta", 2)]
    assert store.orders() == (order,)

    table = store.table(3)
    assert table.status is TableStatus.OCCUPIED
    assert table.current_order_id == order.id

    cart = store.cart()
    assert cart.is_empty
    assert cart.selected_table is None
    assert_bindings_consistent(store)


def test_occupied_table_may_be_selected(store):
    place_order(store, 1, "a1")
    store.select_table(1)
    assert store.cart().selected_table == 1


def test_submit_to_table_with_active_order_is_rejected(store):
    first = place_order(store, 1, "a1")
    store.select_table(1)
    store.add_to_cart("m1")

    with pytest.raises(ValidationError):
        store.submit_cart()

    assert store.orders() == (first,)
    assert store.table(1).current_order_id == first.id
    assert len(store.cart().lines) == 1


def test_table_accepts_new_order_once_previous_is_served(store):
    first = place_order(store, 1, "a1")
    store.set_order_status(first.id, OrderStatus.SERVED)

    second = place_order(store, 1, "m1")

    assert store.table(1).current_order_id == second.id
    assert_bindings_consistent(store)


def test_submitted_order_is_independent_of_cart(store):
    order = place_order(store, 2, "a1")
    store.add_to_cart("a1")
    store.set_cart_quantity("a1", 9)

    assert store.order(order.id).items[0].quantity == 1
