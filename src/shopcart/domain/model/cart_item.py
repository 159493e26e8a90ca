"""CartItem — one user's chosen quantity of one product.

Keyed by ``(user_id, product_id)``. The stored ``amount`` is a snapshot
of ``quantity * discounted unit price`` taken at the last write.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.value_objects import Money


def _require_positive(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")


@dataclass
class CartItem:
    """A cart line item.

    Invariants:
    - ``quantity`` is always >= 1; an item whose quantity would drop to
      zero is deleted by the store instead of being kept
    - ``amount`` equals ``quantity * unit price`` of the last write
    """

    user_id: str
    product_id: str
    quantity: int
    amount: Money

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("User ID is required")
        if not self.product_id:
            raise ValidationError("Product ID is required")
        _require_positive(self.quantity)

    @property
    def key(self) -> tuple[str, str]:
        return self.user_id, self.product_id

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        user_id: str,
        product_id: str,
        quantity: int,
        unit_price: Money,
    ) -> CartItem:
        """Create a new line item priced at *unit_price*."""
        _require_positive(quantity)
        return CartItem(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            amount=unit_price * quantity,
        )

    # --- Mutations ------------------------------------------------------------

    def add(self, quantity: int, unit_price: Money) -> None:
        """Add *quantity* units and reprice the whole line."""
        _require_positive(quantity)
        self.set_quantity(self.quantity + quantity, unit_price)

    def set_quantity(self, quantity: int, unit_price: Money) -> None:
        """Replace the quantity; the amount is recomputed, never adjusted."""
        _require_positive(quantity)
        self.quantity = quantity
        self.amount = unit_price * quantity


@dataclass(frozen=True)
class CartSummary:
    """A user's line items with the totals derived from exactly those items."""

    items: list[CartItem]
    total: Money
    item_count: int
