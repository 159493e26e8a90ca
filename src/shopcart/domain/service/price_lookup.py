"""Domain service: resolve the discounted unit price of a product."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcart.domain.exceptions import EntityNotFoundError
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository


class PriceLookup(ABC):

    @abstractmethod
    def get_discounted_price(self, product_id: str) -> Money:
        """Return the current discounted unit price.

        Raises EntityNotFoundError if the product does not exist.
        """


class CatalogPriceLookup(PriceLookup):
    """PriceLookup backed by the product catalog."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def get_discounted_price(self, product_id: str) -> Money:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product.discounted_price
