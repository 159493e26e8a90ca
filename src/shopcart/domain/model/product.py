"""Product aggregate.

Products live independently of carts. Their price and discount change
over time; cart line items only pick up the new discounted price when an
operation touches them again.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``discount`` is an absolute amount taken off the unit price; ``None``
    means no discount.
    """

    id: str
    name: str
    price: Money
    discount: Money | None = None

    @property
    def discounted_price(self) -> Money:
        """Unit price minus discount, never below zero."""
        if self.discount is None:
            return self.price
        return self.price.minus_clamped(self.discount)

    def update_price(self, new_price: Money, discount: Money | None = None) -> None:
        """Change the product price (and optionally its discount).

        Existing cart line items keep their stored amount until they are
        next written.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
        if discount is not None:
            self.discount = discount

    def clear_discount(self) -> None:
        """Sell at the full price from now on."""
        self.discount = None
