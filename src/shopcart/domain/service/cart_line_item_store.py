"""Domain service: the cart line-item store.

Owns the ``(user, product) -> (quantity, amount)`` mapping and is the only
writer of CartItem records. Every mutating operation is a single
``CartItemRepository.modify`` call, so the repository runs the whole
read-modify-write atomically for that key: concurrent calls apply in some
total order and never lose updates, even across store instances or
processes sharing the same storage.

Quantity is always >= 1 while an item exists: operations that would take
it to zero delete the item instead.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from shopcart.domain.exceptions import EntityNotFoundError, ValidationError
from shopcart.domain.model.cart_item import CartItem, CartSummary
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.cart_item_repository import CartItemRepository
from shopcart.domain.service.cart_total_calculator import CartTotalCalculator

logger = logging.getLogger(__name__)


class CartLineItemStore:

    def __init__(
        self,
        cart_repo: CartItemRepository,
        calculator: CartTotalCalculator | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._calculator = calculator or CartTotalCalculator()

    # --- Writes ---------------------------------------------------------------

    def upsert(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        discounted_price: Money | Decimal | str | int,
    ) -> None:
        """Create the line item, or add *quantity* to an existing one.

        The amount is always recomputed from the resulting quantity at
        *discounted_price*, so adding to an existing line reprices it.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {quantity!r}")
        price = _as_price(discounted_price)

        def change(item: CartItem | None) -> CartItem:
            if item is None:
                return CartItem.create(user_id, product_id, quantity, price)
            item.add(quantity, price)
            return item

        item = self._cart_repo.modify(user_id, product_id, change)
        logger.debug(
            "upsert %s/%s -> qty=%d amount=%s",
            user_id, product_id, item.quantity, item.amount,
        )

    def increment(
        self,
        user_id: str,
        product_id: str,
        discounted_price: Money | Decimal | str | int,
    ) -> None:
        """Add one unit to an existing line item."""
        price = _as_price(discounted_price)

        def change(item: CartItem | None) -> CartItem:
            item = _require(item, user_id, product_id)
            item.set_quantity(item.quantity + 1, price)
            return item

        item = self._cart_repo.modify(user_id, product_id, change)
        logger.debug("increment %s/%s -> qty=%d", user_id, product_id, item.quantity)

    def decrement(
        self,
        user_id: str,
        product_id: str,
        discounted_price: Money | Decimal | str | int,
    ) -> None:
        """Remove one unit; the last unit removes the line item."""
        price = _as_price(discounted_price)

        def change(item: CartItem | None) -> CartItem | None:
            item = _require(item, user_id, product_id)
            if item.quantity - 1 <= 0:
                return None
            item.set_quantity(item.quantity - 1, price)
            return item

        item = self._cart_repo.modify(user_id, product_id, change)
        if item is None:
            logger.debug("decrement %s/%s -> removed", user_id, product_id)
        else:
            logger.debug("decrement %s/%s -> qty=%d", user_id, product_id, item.quantity)

    def set_quantity(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        discounted_price: Money | Decimal | str | int,
    ) -> None:
        """Overwrite the quantity of an existing line item.

        A quantity <= 0 behaves like ``delete``. A positive quantity for an
        item that is not in the cart raises EntityNotFoundError; use
        ``upsert`` to create items.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(quantity).__name__}"
            )
        if quantity <= 0:
            self.delete(user_id, product_id)
            return

        price = _as_price(discounted_price)

        def change(item: CartItem | None) -> CartItem:
            item = _require(item, user_id, product_id)
            item.set_quantity(quantity, price)
            return item

        self._cart_repo.modify(user_id, product_id, change)
        logger.debug("set %s/%s -> qty=%d", user_id, product_id, quantity)

    def delete(self, user_id: str, product_id: str) -> None:
        self._cart_repo.delete(user_id, product_id)
        logger.debug("delete %s/%s", user_id, product_id)

    def clear(self, user_id: str) -> None:
        self._cart_repo.delete_all_for_user(user_id)
        logger.debug("clear %s", user_id)

    # --- Reads ----------------------------------------------------------------

    def get(self, user_id: str, product_id: str) -> CartItem | None:
        return self._cart_repo.get(user_id, product_id)

    def get_by_user(self, user_id: str) -> list[CartItem]:
        """All line items of a user, ordered by product ID ascending."""
        items = self._cart_repo.list_by_user(user_id)
        return sorted(items, key=lambda item: item.product_id)

    def summary(self, user_id: str) -> CartSummary:
        """Line items plus total and item count, all from one read."""
        items = self.get_by_user(user_id)
        return CartSummary(
            items=items,
            total=self._calculator.total(items),
            item_count=self._calculator.item_count(items),
        )

    def total(self, user_id: str) -> Money:
        return self._calculator.total(self.get_by_user(user_id))

    def item_count(self, user_id: str) -> int:
        return self._calculator.item_count(self.get_by_user(user_id))


def _require(item: CartItem | None, user_id: str, product_id: str) -> CartItem:
    if item is None:
        raise EntityNotFoundError(
            f"Product '{product_id}' is not in the cart of user '{user_id}'"
        )
    return item


def _as_price(value: Money | Decimal | str | int) -> Money:
    # Money.of rejects negative and malformed amounts with ValidationError.
    if isinstance(value, Money):
        return value
    return Money.of(value)
