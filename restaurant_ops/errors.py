"""Errors raised by the restaurant stores.

Every failure is detected before any mutation, so callers can report the
message and re-prompt without cleanup.
"""

from __future__ import annotations


class RestaurantError(Exception):
    """Base class for recoverable store errors."""


class ValidationError(RestaurantError, ValueError):
    """Input failed a precondition (empty cart, no table, bad quantity...)."""


class NotFoundError(RestaurantError, LookupError):
    """A referenced menu item, table, order or inventory record does not exist."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} {key!r} not found")
        self.kind = kind
        self.key = key
