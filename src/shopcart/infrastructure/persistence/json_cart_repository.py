"""JSON-file-backed implementation of CartItemRepository.

Single-process backend: all repository instances in one process that
point at the same file share one lock, so ``modify`` is atomic between
them. Separate processes are not coordinated; use the SQL backend when
several processes write the same cart data. Writes replace the file
atomically, so readers never observe a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shopcart.domain.exceptions import StorageError, ValidationError
from shopcart.domain.model.cart_item import CartItem
from shopcart.domain.model.value_objects import Money
from shopcart.domain.repository.cart_item_repository import (
    CartItemChange,
    CartItemRepository,
)

logger = logging.getLogger(__name__)

_file_locks: dict[Path, threading.RLock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _file_locks_guard:
        lock = _file_locks.get(path)
        if lock is None:
            lock = _file_locks[path] = threading.RLock()
        return lock


class JsonCartItemRepository(CartItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    # --- CartItemRepository interface -----------------------------------------

    def get(self, user_id: str, product_id: str) -> CartItem | None:
        with self._lock:
            raw = self._find(self._load_raw(), user_id, product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_by_user(self, user_id: str) -> list[CartItem]:
        with self._lock:
            records = self._load_raw()
        items = [self._to_domain(raw) for raw in records if raw["user_id"] == user_id]
        return sorted(items, key=lambda item: item.product_id)

    def modify(
        self,
        user_id: str,
        product_id: str,
        change: CartItemChange,
    ) -> CartItem | None:
        with self._lock:
            records = self._load_raw()
            raw = self._find(records, user_id, product_id)
            updated = change(self._to_domain(raw) if raw is not None else None)
            if updated is None:
                if raw is not None:
                    records.remove(raw)
                    self._persist_raw(records)
                return None
            self._replace(records, updated)
            self._persist_raw(records)
            return updated

    def save(self, item: CartItem) -> None:
        with self._lock:
            records = self._load_raw()
            self._replace(records, item)
            self._persist_raw(records)

    def delete(self, user_id: str, product_id: str) -> None:
        with self._lock:
            records = self._load_raw()
            raw = self._find(records, user_id, product_id)
            if raw is not None:
                records.remove(raw)
                self._persist_raw(records)

    def delete_all_for_user(self, user_id: str) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw["user_id"] != user_id]
            if len(kept) != len(records):
                self._persist_raw(kept)

    # --- Record helpers -------------------------------------------------------

    @staticmethod
    def _find(records: list[dict], user_id: str, product_id: str) -> dict | None:
        for raw in records:
            if raw["user_id"] == user_id and raw["product_id"] == product_id:
                return raw
        return None

    def _replace(self, records: list[dict], item: CartItem) -> None:
        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(records):
            if raw["user_id"] == item.user_id and raw["product_id"] == item.product_id:
                records[i] = self._to_raw(item)
                return
        records.append(self._to_raw(item))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: CartItem) -> dict:
        return {
            "user_id": item.user_id,
            "product_id": item.product_id,
            "quantity": item.quantity,
            "amount": str(item.amount.amount),
            "currency": item.amount.currency,
        }

    def _to_domain(self, raw: dict) -> CartItem:
        try:
            return CartItem(
                user_id=raw["user_id"],
                product_id=raw["product_id"],
                quantity=raw["quantity"],
                amount=Money(Decimal(raw["amount"]), raw.get("currency", "USD")),
            )
        except (KeyError, InvalidOperation, ValidationError) as exc:
            logger.error("Malformed cart record in %s: %r", self._file_path, raw)
            raise StorageError(f"Malformed cart record in {self._file_path}") from exc

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Cannot read cart file %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot read cart file {self._file_path}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        # Write a sibling temp file, then swap it in with one rename
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("Cannot write cart file %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot write cart file {self._file_path}") from exc

    def _ensure_file(self) -> None:
        with self._lock:
            if self._file_path.exists():
                return
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageError(f"Cannot create cart file {self._file_path}") from exc
            self._persist_raw([])
