"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    amount: str  # formatted, e.g. "$15.00"


@dataclass(frozen=True)
class CartDTO:
    """Output: a user's cart, lines ordered by product ID."""

    user_id: str
    items: list[CartLineDTO]
    total: str
    item_count: int

    @property
    def is_empty(self) -> bool:
        return not self.items
