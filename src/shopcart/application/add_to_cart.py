"""Application service: Add To Cart use case.

Resolves the product's current discounted price and upserts the line
item. Adding to a line that already exists reprices the whole line at
the current price.
"""

from __future__ import annotations

from shopcart.application.dto import CartDTO
from shopcart.application.show_cart import ShowCartHandler
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.cart_line_item_store import CartLineItemStore
from shopcart.domain.service.price_lookup import PriceLookup


class AddToCartHandler:

    def __init__(
        self,
        store: CartLineItemStore,
        price_lookup: PriceLookup,
        product_repo: ProductRepository,
    ) -> None:
        self._store = store
        self._price_lookup = price_lookup
        self._show_cart = ShowCartHandler(store, product_repo)

    def handle(self, user_id: str, product_id: str, quantity: int) -> CartDTO:
        """Add *quantity* units of a product to the user's cart.

        Raises EntityNotFoundError for unknown products and
        ValidationError for a non-positive quantity.
        """
        price = self._price_lookup.get_discounted_price(product_id)
        self._store.upsert(user_id, product_id, quantity, price)
        return self._show_cart.handle(user_id)
