from __future__ import annotations

import pytest

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.inventory import parse_count


def test_update_quantity(store):
    record = store.update_inventory_quantity("inv5", "12")
    assert record.quantity == 12
    assert not record.is_low_stock


@pytest.mark.parametrize("quantity", [-1, "-4", "lots", 2.5, None, False])
def test_update_quantity_rejects_bad_values(store, quantity):
    with pytest.raises(ValidationError):
        store.update_inventory_quantity("inv5", quantity)
    assert {record.id: record.quantity for record in store.inventory_records()}["inv5"] == 8


def test_update_unknown_record_raises(store):
    with pytest.raises(NotFoundError):
        store.update_inventory_quantity("inv99", 3)


@pytest.mark.parametrize("value,expected", [(3, 3), ("7", 7), (" 10 ", 10), ("-2", -2), ("+4", 4)])
def test_parse_count(value, expected):
    assert parse_count(value) == expected


@pytest.mark.parametrize("value", ["", "--2", "1e3", "3.0", [], True])
def test_parse_count_rejects(value):
    with pytest.raises(ValidationError):
        parse_count(value)
