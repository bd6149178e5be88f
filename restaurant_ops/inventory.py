"""Inventory stock store."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.models import InventoryRecord

logger = logging.getLogger(__name__)


def parse_count(value: object, what: str = "quantity") -> int:
    """Accept an int or a digit string (form input); reject bools, floats and junk."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        sign = -1 if text.startswith("-") else 1
        digits = text.lstrip("+-")
        if digits.isdecimal() and len(text) - len(digits) <= 1:
            return sign * int(digits)
    raise ValidationError(f"Invalid {what}: {value!r}")


class InventoryStore:
    """Holds stock records keyed by id; quantities change only through explicit updates."""

    def __init__(self, records: Iterable[InventoryRecord] = ()) -> None:
        self._records: dict[str, InventoryRecord] = {record.id: record for record in records}

    def all(self) -> tuple[InventoryRecord, ...]:
        return tuple(self._records.values())

    def get(self, record_id: str) -> InventoryRecord:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError("inventory record", record_id)
        return record

    def update_quantity(self, record_id: str, quantity: object) -> InventoryRecord:
        current = self.get(record_id)
        count = parse_count(quantity)
        if count < 0:
            raise ValidationError(f"Quantity must not be negative: {quantity!r}")

        updated = replace(current, quantity=count)
        self._records[record_id] = updated
        logger.info(
            "stock_updated id=%s quantity=%d min_level=%d low=%s",
            record_id,
            count,
            updated.min_level,
            updated.is_low_stock,
        )
        return updated
