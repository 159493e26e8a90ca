"""SQL implementation of CartItemRepository (SQLModel).

One session, and therefore one transaction, per repository call.
``modify`` reads the row with ``SELECT ... FOR UPDATE`` and writes it back
in that same transaction (on SQLite the engine's ``BEGIN IMMEDIATE`` plays
the role of the row lock), so concurrent writers in any number of
processes never lose updates.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, select

from shopcart.domain.exceptions import StorageError
from shopcart.domain.model.cart_item import CartItem
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.cart_item_repository import (
    CartItemChange,
    CartItemRepository,
)

logger = logging.getLogger(__name__)


class CartItemRow(SQLModel, table=True):
    """
    Persistent cart line item.
    The composite primary key allows one row per (user, product).
    The amount is kept as a decimal string so every digit survives.
    """

    __tablename__ = "cart_items"

    user_id: str = Field(primary_key=True, max_length=64)
    product_id: str = Field(primary_key=True, max_length=64)
    quantity: int = Field(gt=0, description="Must be >= 1")
    amount: str = Field(max_length=64)
    currency: str = Field(default="USD", max_length=3)


class SqlCartItemRepository(CartItemRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- CartItemRepository interface -----------------------------------------

    def get(self, user_id: str, product_id: str) -> CartItem | None:
        with self._session() as session:
            row = session.get(CartItemRow, (user_id, product_id))
            return self._to_domain(row) if row is not None else None

    def list_by_user(self, user_id: str) -> list[CartItem]:
        with self._session() as session:
            stmt = (
                select(CartItemRow)
                .where(CartItemRow.user_id == user_id)
                .order_by(CartItemRow.product_id)
            )
            return [self._to_domain(row) for row in session.exec(stmt).all()]

    def modify(
        self,
        user_id: str,
        product_id: str,
        change: CartItemChange,
    ) -> CartItem | None:
        try:
            return self._modify_once(user_id, product_id, change)
        except StorageError as exc:
            # Two writers inserted the same new key; the row exists now and
            # is locked properly on the second pass.
            if not isinstance(exc.__cause__, IntegrityError):
                raise
            logger.info("Concurrent insert on %s/%s, re-reading", user_id, product_id)
            return self._modify_once(user_id, product_id, change)

    def save(self, item: CartItem) -> None:
        self.modify(item.user_id, item.product_id, lambda _current: item)

    def delete(self, user_id: str, product_id: str) -> None:
        with self._session() as session:
            row = session.get(CartItemRow, (user_id, product_id))
            if row is None:
                return
            session.delete(row)
            session.commit()

    def delete_all_for_user(self, user_id: str) -> None:
        with self._session() as session:
            stmt = select(CartItemRow).where(CartItemRow.user_id == user_id)
            for row in session.exec(stmt).all():
                session.delete(row)
            session.commit()

    # --- Internal helpers -----------------------------------------------------

    def _modify_once(
        self,
        user_id: str,
        product_id: str,
        change: CartItemChange,
    ) -> CartItem | None:
        with self._session() as session:
            stmt = (
                select(CartItemRow)
                .where(
                    CartItemRow.user_id == user_id,
                    CartItemRow.product_id == product_id,
                )
                .with_for_update()
            )
            row = session.exec(stmt).first()
            updated = change(self._to_domain(row) if row is not None else None)
            if updated is None:
                if row is not None:
                    session.delete(row)
            else:
                if row is None:
                    row = CartItemRow(user_id=user_id, product_id=product_id)
                row.quantity = updated.quantity
                row.amount = str(updated.amount.amount)
                row.currency = updated.amount.currency
                session.add(row)
            session.commit()
            return updated

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self._engine) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Cart storage failure: %s", exc)
            raise StorageError("Cart storage failure") from exc

    @staticmethod
    def _to_domain(row: CartItemRow) -> CartItem:
        try:
            amount = Decimal(row.amount)
        except InvalidOperation as exc:
            raise StorageError(
                f"Malformed amount for cart item {row.user_id}/{row.product_id}"
            ) from exc
        return CartItem(
            user_id=row.user_id,
            product_id=row.product_id,
            quantity=row.quantity,
            amount=Money(amount, row.currency),
        )
