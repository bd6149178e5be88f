"""Entry point for the restaurant-ops Textual app."""

from __future__ import annotations

from restaurant_ops.data import seeded_store
from restaurant_ops.logs import configure_logging
from restaurant_ops.restaurant_app import RestaurantApp


def main() -> None:
    """Run the Textual application on a freshly seeded store."""
    logger = configure_logging()
    logger.info("app_start")
    RestaurantApp(seeded_store()).run()


if __name__ == "__main__":
    main()
