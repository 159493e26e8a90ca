"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shopcart.domain.exceptions import StorageError
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {item["id"]: self._to_domain(item) for item in raw}
        except (OSError, ValueError, KeyError, InvalidOperation) as exc:
            logger.error("Cannot load product catalog %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot load product catalog {self._file_path}") from exc

    @staticmethod
    def _to_domain(item: dict) -> Product:
        currency = item.get("currency", "USD")
        discount = item.get("discount")
        return Product(
            id=item["id"],
            name=item["name"],
            price=Money(Decimal(item["price"]), currency),
            discount=Money(Decimal(discount), currency) if discount is not None else None,
        )

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "discount": str(p.discount.amount) if p.discount is not None else None,
                "currency": p.price.currency,
            }
            for p in products.values()
        ]
        try:
            self._file_path.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            logger.error("Cannot write product catalog %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot write product catalog {self._file_path}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
