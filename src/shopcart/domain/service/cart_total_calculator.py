"""Domain service: cart totals derived from line items."""

from __future__ import annotations

from collections.abc import Iterable

from shopcart.domain.model.cart_item import CartItem
from shopcart.domain.model.value_objects import Money


class CartTotalCalculator:

    def total(self, items: Iterable[CartItem]) -> Money:
        """Sum of stored line amounts; zero for an empty cart."""
        result = Money.zero()
        for item in items:
            result = result + item.amount
        return result

    def item_count(self, items: Iterable[CartItem]) -> int:
        """Sum of quantities (not the number of lines)."""
        return sum(item.quantity for item in items)
