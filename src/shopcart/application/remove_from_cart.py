"""Application service: Remove From Cart / Clear Cart use cases."""

from __future__ import annotations

from shopcart.application.dto import CartDTO
from shopcart.application.show_cart import ShowCartHandler
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.cart_line_item_store import CartLineItemStore


class RemoveFromCartHandler:

    def __init__(
        self,
        store: CartLineItemStore,
        product_repo: ProductRepository,
    ) -> None:
        self._store = store
        self._show_cart = ShowCartHandler(store, product_repo)

    def handle(self, user_id: str, product_id: str) -> CartDTO:
        """Remove a product from the cart; removing an absent product is fine."""
        self._store.delete(user_id, product_id)
        return self._show_cart.handle(user_id)


class ClearCartHandler:

    def __init__(self, store: CartLineItemStore) -> None:
        self._store = store

    def handle(self, user_id: str) -> None:
        self._store.clear(user_id)
