"""Abstract repository for CartItem records.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL) live in the
infrastructure layer.

Implementations hand out copies: a CartItem returned by ``get`` or
``list_by_user`` is detached from storage until passed to ``save``.
Storage failures are raised as ``StorageError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from shopcart.domain.model.cart_item import CartItem

# Receives the current item (or None) and returns the item to store,
# or None to delete it.
CartItemChange = Callable[[CartItem | None], CartItem | None]


class CartItemRepository(ABC):

    @abstractmethod
    def get(self, user_id: str, product_id: str) -> CartItem | None:
        """Return the line item for (user, product), or None."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[CartItem]:
        """Return every line item of a user, ordered by product ID."""

    @abstractmethod
    def modify(
        self,
        user_id: str,
        product_id: str,
        change: CartItemChange,
    ) -> CartItem | None:
        """Apply *change* to the line item as one atomic read-modify-write.

        No other ``modify``, ``save`` or ``delete`` on the same key, from
        this or any other repository instance sharing the storage, may
        interleave with it. Exceptions raised by *change* leave storage
        untouched and propagate. Returns what was stored (None if deleted
        or left absent).
        """

    @abstractmethod
    def save(self, item: CartItem) -> None:
        """Insert or replace the line item for ``item.key``."""

    @abstractmethod
    def delete(self, user_id: str, product_id: str) -> None:
        """Remove the line item if present; no-op otherwise."""

    @abstractmethod
    def delete_all_for_user(self, user_id: str) -> None:
        """Remove every line item of a user."""
