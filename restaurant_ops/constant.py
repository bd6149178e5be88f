"""Editable static menu, stock, floor plan and pricing data."""

from __future__ import annotations

from decimal import Decimal

# Fixed sales tax applied to every order; not configurable per order.
TAX_RATE = Decimal("0.08")

CATEGORY_LABELS: dict[str, str] = {
    "appetizer": "Appetizer",
    "main": "Main Course",
    "drink": "Drink",
    "dessert": "Dessert",
}

# Canonical menu values consumed by restaurant_ops.data (which wraps these into MenuItem instances).
MENU_ITEMS_BY_ID: dict[str, dict[str, str | bool | None]] = {
    "a1": {"name": "Bruschetta", "price": "8.99", "category": "appetizer", "is_active": True, "description": "Toasted bread with tomato & basil"},
    "a2": {"name": "Caesar Salad", "price": "10.99", "category": "appetizer", "is_active": True, "description": "Fresh romaine with parmesan"},
    "a3": {"name": "Soup of the Day", "price": "6.99", "category": "appetizer", "is_active": True, "description": "Ask your server"},
    "a4": {"name": "Garlic Bread", "price": "5.99", "category": "appetizer", "is_active": True, "description": "With herb butter"},
    "a5": {"name": "Caprese Salad", "price": "11.99", "category": "appetizer", "is_active": False, "description": "Mozzarella, tomato, basil"},
    "m1": {"name": "Grilled Salmon", "price": "24.99", "category": "main", "is_active": True, "description": "With seasonal vegetables"},
    "m2": {"name": "Ribeye Steak", "price": "32.99", "category": "main", "is_active": True, "description": "12oz prime cut"},
    "m3": {"name": "Chicken Parmesan", "price": "18.99", "category": "main", "is_active": True, "description": "With pasta marinara"},
    "m4": {"name": "Mushroom Risotto", "price": "16.99", "category": "main", "is_active": True, "description": "Creamy arborio rice"},
    "m5": {"name": "Fish & Chips", "price": "15.99", "category": "main", "is_active": True, "description": "Beer-battered cod"},
    "m6": {"name": "Lamb Chops", "price": "28.99", "category": "main", "is_active": True, "description": "With mint sauce"},
    "d1": {"name": "Sparkling Water", "price": "3.99", "category": "drink", "is_active": True, "description": None},
    "d2": {"name": "Fresh Orange Juice", "price": "4.99", "category": "drink", "is_active": True, "description": None},
    "d3": {"name": "Espresso", "price": "3.49", "category": "drink", "is_active": True, "description": None},
    "d4": {"name": "Cappuccino", "price": "4.49", "category": "drink", "is_active": True, "description": None},
    "d5": {"name": "House Red Wine", "price": "8.99", "category": "drink", "is_active": True, "description": None},
    "d6": {"name": "House White Wine", "price": "8.99", "category": "drink", "is_active": True, "description": None},
    "de1": {"name": "Tiramisu", "price": "8.99", "category": "dessert", "is_active": True, "description": None},
    "de2": {"name": "Chocolate Cake", "price": "7.99", "category": "dessert", "is_active": True, "description": None},
    "de3": {"name": "Crème Brûlée", "price": "9.99", "category": "dessert", "is_active": True, "description": None},
}

# (name, quantity, unit, min_level)
INVENTORY_BY_ID: dict[str, tuple[str, int, str, int]] = {
    "inv1": ("Salmon Fillet", 12, "kg", 5),
    "inv2": ("Ribeye Steak", 8, "kg", 10),
    "inv3": ("Chicken Breast", 15, "kg", 8),
    "inv4": ("Arborio Rice", 3, "kg", 5),
    "inv5": ("Olive Oil", 8, "liters", 3),
    "inv6": ("Parmesan Cheese", 2, "kg", 3),
    "inv7": ("Fresh Tomatoes", 4, "kg", 6),
    "inv8": ("Espresso Beans", 5, "kg", 2),
    "inv9": ("House Red Wine", 18, "bottles", 10),
    "inv10": ("Lamb Chops", 6, "kg", 4),
}

# Table id -> seat count.
TABLE_SEATS: dict[int, int] = {
    1: 2,
    2: 4,
    3: 4,
    4: 2,
    5: 6,
    6: 4,
    7: 4,
    8: 8,
    9: 2,
    10: 6,
    11: 4,
    12: 2,
}

# Orders already on the floor when the app starts.
# Lines are (menu_item_id, quantity); names and prices come from the menu above.
SEED_ORDERS: list[dict[str, object]] = [
    {
        "id": "ord1",
        "table_no": 3,
        "waiter_name": "Sarah",
        "status": "Pending",
        "minutes_ago": 15,
        "lines": [("a1", 2), ("m1", 1), ("d4", 2)],
    },
    {
        "id": "ord2",
        "table_no": 7,
        "waiter_name": "Mike",
        "status": "In Progress",
        "minutes_ago": 25,
        "lines": [("m2", 2), ("a2", 1), ("d5", 2)],
    },
    {
        "id": "ord3",
        "table_no": 1,
        "waiter_name": "Sarah",
        "status": "Ready",
        "minutes_ago": 35,
        "lines": [("m4", 1), ("d1", 2)],
    },
]
