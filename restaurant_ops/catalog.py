"""Menu catalog store."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable
from uuid import uuid4

from restaurant_ops.errors import NotFoundError, ValidationError
from restaurant_ops.models import Category, MenuItem
from restaurant_ops.pricing import to_money

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset({"name", "price", "category", "is_active", "description"})
_ACTIVE_WORDS = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}


def _clean_name(name: object) -> str:
    cleaned = str(name or "").strip()
    if not cleaned:
        raise ValidationError("Menu item name is required")
    return cleaned


def _clean_price(price: object) -> Decimal:
    amount = to_money(price)
    if amount < 0:
        raise ValidationError(f"Price must not be negative: {price!r}")
    return amount


def _clean_category(category: object) -> Category:
    try:
        return Category(category)
    except ValueError:
        raise ValidationError(f"Unknown category: {category!r}") from None


def _clean_active(is_active: object) -> bool:
    """Accept a bool or an explicit yes/no word from form input."""
    if isinstance(is_active, bool):
        return is_active
    if isinstance(is_active, str):
        flag = _ACTIVE_WORDS.get(is_active.strip().lower())
        if flag is not None:
            return flag
    raise ValidationError(f"Invalid active flag: {is_active!r}")


def _clean_description(description: object) -> str | None:
    if description is None:
        return None
    cleaned = str(description).strip()
    return cleaned or None


class CatalogStore:
    """Holds menu items in insertion order, keyed by id."""

    def __init__(self, items: Iterable[MenuItem] = ()) -> None:
        self._items: dict[str, MenuItem] = {item.id: item for item in items}

    def all(self) -> tuple[MenuItem, ...]:
        return tuple(self._items.values())

    def get(self, item_id: str) -> MenuItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError("menu item", item_id)
        return item

    def add(
        self,
        name: str,
        price: object,
        category: Category | str,
        is_active: bool = True,
        description: str | None = None,
    ) -> MenuItem:
        item = MenuItem(
            id=f"menu-{uuid4().hex[:8]}",
            name=_clean_name(name),
            price=_clean_price(price),
            category=_clean_category(category),
            is_active=_clean_active(is_active),
            description=_clean_description(description),
        )
        self._items[item.id] = item
        logger.info("menu_added id=%s name=%r price=%s", item.id, item.name, item.price)
        return item

    def update(self, item_id: str, **changes: object) -> MenuItem:
        """Apply validated field changes; existing orders keep their own price snapshot."""
        current = self.get(item_id)
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown menu item fields: {', '.join(sorted(unknown))}")

        cleaned: dict[str, object] = {}
        if "name" in changes:
            cleaned["name"] = _clean_name(changes["name"])
        if "price" in changes:
            cleaned["price"] = _clean_price(changes["price"])
        if "category" in changes:
            cleaned["category"] = _clean_category(changes["category"])
        if "is_active" in changes:
            cleaned["is_active"] = _clean_active(changes["is_active"])
        if "description" in changes:
            cleaned["description"] = _clean_description(changes["description"])

        updated = replace(current, **cleaned)
        self._items[item_id] = updated
        logger.info("menu_updated id=%s fields=%s", item_id, sorted(cleaned))
        return updated

    def delete(self, item_id: str) -> None:
        self.get(item_id)
        del self._items[item_id]
        logger.info("menu_deleted id=%s", item_id)
