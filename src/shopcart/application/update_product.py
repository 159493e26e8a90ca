"""Application service: Update Product use case."""

from __future__ import annotations

from shopcart.domain.exceptions import EntityNotFoundError, ValidationError
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        new_price: str,
        new_discount: str | None = None,
        clear_discount: bool = False,
    ) -> Product:
        """Update a product's price and, optionally, its discount.

        ``new_discount`` replaces the discount, ``clear_discount`` removes
        it; leaving both out keeps the current one.

        Cart lines already holding this product keep their amount until
        the next add / increment / decrement / set on that line.
        """
        if clear_discount and new_discount is not None:
            raise ValidationError("Give either a new discount or clear it, not both")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        discount = Money.of(new_discount) if new_discount is not None else None
        product.update_price(Money.of(new_price), discount)
        if clear_discount:
            product.clear_discount()
        self._product_repo.save(product)
        return product
