"""Application service: Change Quantity use cases.

``increment`` and ``decrement`` on a product that is not in the cart are
treated as no-ops: a warning is logged and the unchanged cart is
returned. ``set_quantity`` on a missing product is reported to the
caller, since it usually means a stale cart view.
"""

from __future__ import annotations

import logging

from shopcart.application.dto import CartDTO
from shopcart.application.show_cart import ShowCartHandler
from shopcart.domain.exceptions import EntityNotFoundError
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.cart_line_item_store import CartLineItemStore
from shopcart.domain.service.price_lookup import PriceLookup

logger = logging.getLogger(__name__)


class ChangeQuantityHandler:

    def __init__(
        self,
        store: CartLineItemStore,
        price_lookup: PriceLookup,
        product_repo: ProductRepository,
    ) -> None:
        self._store = store
        self._price_lookup = price_lookup
        self._show_cart = ShowCartHandler(store, product_repo)

    def increment(self, user_id: str, product_id: str) -> CartDTO:
        # Unknown products fail here, before the cart is consulted
        price = self._price_lookup.get_discounted_price(product_id)
        try:
            self._store.increment(user_id, product_id, price)
        except EntityNotFoundError:
            logger.warning(
                "increment ignored: product %s not in cart of user %s",
                product_id, user_id,
            )
        return self._show_cart.handle(user_id)

    def decrement(self, user_id: str, product_id: str) -> CartDTO:
        price = self._price_lookup.get_discounted_price(product_id)
        try:
            self._store.decrement(user_id, product_id, price)
        except EntityNotFoundError:
            logger.warning(
                "decrement ignored: product %s not in cart of user %s",
                product_id, user_id,
            )
        return self._show_cart.handle(user_id)

    def set_quantity(self, user_id: str, product_id: str, quantity: int) -> CartDTO:
        """Set the quantity of a cart line; zero or less removes it."""
        if quantity > 0:
            price = self._price_lookup.get_discounted_price(product_id)
        else:
            price = Money.zero()
        self._store.set_quantity(user_id, product_id, quantity, price)
        return self._show_cart.handle(user_id)
