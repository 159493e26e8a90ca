"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from shopcart.application.dto import CartDTO, CartLineDTO
from shopcart.domain.repository.product_repository import ProductRepository
from shopcart.domain.service.cart_line_item_store import CartLineItemStore


class ShowCartHandler:

    def __init__(
        self,
        store: CartLineItemStore,
        product_repo: ProductRepository,
    ) -> None:
        self._store = store
        self._product_repo = product_repo

    def handle(self, user_id: str) -> CartDTO:
        # One read: lines, total and item count always describe the same cart
        summary = self._store.summary(user_id)
        lines = []
        for item in summary.items:
            product = self._product_repo.get_by_id(item.product_id)
            lines.append(
                CartLineDTO(
                    product_id=item.product_id,
                    # Products removed from the catalog are shown by ID
                    product_name=product.name if product is not None else item.product_id,
                    quantity=item.quantity,
                    amount=str(item.amount),
                )
            )
        return CartDTO(
            user_id=user_id,
            items=lines,
            total=str(summary.total),
            item_count=summary.item_count,
        )
