"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shopcart.domain.repository.cart_item_repository import CartItemRepository
from shopcart.domain.service.cart_line_item_store import CartLineItemStore
from shopcart.domain.service.price_lookup import CatalogPriceLookup
from shopcart.infrastructure.config import Settings, get_settings
from shopcart.infrastructure.persistence.database import (
    create_db_and_tables,
    create_db_engine,
)
from shopcart.infrastructure.persistence.json_cart_repository import (
    JsonCartItemRepository,
)
from shopcart.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shopcart.infrastructure.persistence.sql_cart_repository import (
    SqlCartItemRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or get_settings()
    return JsonProductRepository(settings.data_dir / "products.json")


def cart_repository(settings: Settings | None = None) -> CartItemRepository:
    settings = settings or get_settings()
    if settings.cart_backend == "sql":
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        engine = create_db_engine(settings.resolved_database_url)
        create_db_and_tables(engine)
        return SqlCartItemRepository(engine)
    return JsonCartItemRepository(settings.data_dir / "cart.json")


def cart_store(settings: Settings | None = None) -> CartLineItemStore:
    return CartLineItemStore(cart_repository(settings))


def price_lookup(settings: Settings | None = None) -> CatalogPriceLookup:
    return CatalogPriceLookup(product_repository(settings))
