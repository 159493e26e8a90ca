"""Unit tests for the CartLineItemStore domain service."""

from decimal import Decimal

import pytest

from shopcart.domain.exceptions import EntityNotFoundError, StorageError, ValidationError
from shopcart.domain.model.value_objects import Money
from shopcart.domain.service.cart_line_item_store import CartLineItemStore
from tests.fakes import FailingCartItemRepository, FakeCartItemRepository

PRICE = Money.of("10")


@pytest.fixture
def store() -> CartLineItemStore:
    return CartLineItemStore(FakeCartItemRepository())


class TestUpsert:

    def test_creates_new_line(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        item = store.get("alice", "p1")
        assert item.quantity == 2
        assert item.amount == Money.of("20")

    def test_merges_and_recomputes_amount(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        store.upsert("alice", "p1", 3, PRICE)
        item = store.get("alice", "p1")
        assert item.quantity == 5
        assert item.amount == Money.of("50")

    def test_second_add_reprices_existing_units(self, store):
        store.upsert("alice", "p1", 2, Money.of("10"))
        store.upsert("alice", "p1", 1, Money.of("12"))
        assert store.get("alice", "p1").amount == Money.of("36")

    def test_accepts_plain_decimal_price(self, store):
        store.upsert("alice", "p1", 2, Decimal("1.25"))
        assert store.get("alice", "p1").amount == Money.of("2.50")

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, store, qty):
        with pytest.raises(ValidationError, match="must be positive"):
            store.upsert("alice", "p1", qty, PRICE)
        assert store.get("alice", "p1") is None

    def test_negative_price_rejected(self, store):
        with pytest.raises(ValidationError, match="cannot be negative"):
            store.upsert("alice", "p1", 1, Decimal("-1"))

    def test_zero_price_allowed(self, store):
        store.upsert("alice", "p1", 4, Money.zero())
        assert store.get("alice", "p1").amount == Money.zero()


class TestIncrementDecrement:

    def test_increment(self, store):
        store.upsert("alice", "p1", 1, PRICE)
        store.increment("alice", "p1", PRICE)
        item = store.get("alice", "p1")
        assert item.quantity == 2
        assert item.amount == Money.of("20")

    def test_increment_missing_raises(self, store):
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            store.increment("alice", "p1", PRICE)

    def test_decrement(self, store):
        store.upsert("alice", "p1", 3, PRICE)
        store.decrement("alice", "p1", PRICE)
        item = store.get("alice", "p1")
        assert item.quantity == 2
        assert item.amount == Money.of("20")

    def test_decrement_last_unit_removes_line(self, store):
        store.upsert("alice", "p1", 1, PRICE)
        store.decrement("alice", "p1", PRICE)
        assert store.get("alice", "p1") is None
        assert store.get_by_user("alice") == []

    def test_decrement_missing_raises(self, store):
        with pytest.raises(EntityNotFoundError):
            store.decrement("alice", "p1", PRICE)

    def test_net_delta_sequence(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        store.increment("alice", "p1", PRICE)
        store.upsert("alice", "p1", 4, PRICE)
        store.decrement("alice", "p1", PRICE)
        store.decrement("alice", "p1", PRICE)
        assert store.get("alice", "p1").quantity == 2 + 1 + 4 - 2

    def test_quantity_never_observed_as_zero(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        for _ in range(2):
            store.decrement("alice", "p1", PRICE)
            item = store.get("alice", "p1")
            assert item is None or item.quantity >= 1
        assert store.get("alice", "p1") is None


class TestSetQuantity:

    def test_overwrites_quantity(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        store.set_quantity("alice", "p1", 7, Money.of("3"))
        item = store.get("alice", "p1")
        assert item.quantity == 7
        assert item.amount == Money.of("21")

    @pytest.mark.parametrize("qty", [0, -4])
    def test_non_positive_removes_line(self, store, qty):
        store.upsert("alice", "p1", 9, PRICE)
        store.set_quantity("alice", "p1", qty, PRICE)
        assert store.get("alice", "p1") is None

    def test_zero_on_absent_line_is_noop(self, store):
        store.set_quantity("alice", "p1", 0, PRICE)
        assert store.get("alice", "p1") is None

    def test_positive_on_absent_line_raises(self, store):
        with pytest.raises(EntityNotFoundError):
            store.set_quantity("alice", "p1", 3, PRICE)
        assert store.get("alice", "p1") is None


class TestQueries:

    def test_get_by_user_ordered_by_product_id(self, store):
        for pid in ["p3", "p1", "p2"]:
            store.upsert("alice", pid, 1, PRICE)
        assert [i.product_id for i in store.get_by_user("alice")] == ["p1", "p2", "p3"]

    def test_get_by_user_only_returns_own_lines(self, store):
        store.upsert("alice", "p1", 1, PRICE)
        store.upsert("bob", "p2", 1, PRICE)
        assert [i.product_id for i in store.get_by_user("alice")] == ["p1"]

    def test_returned_items_are_copies(self, store):
        store.upsert("alice", "p1", 1, PRICE)
        item = store.get("alice", "p1")
        item.quantity = 99
        assert store.get("alice", "p1").quantity == 1

    def test_total_and_item_count(self, store):
        store.upsert("alice", "p1", 2, Money.of("10"))
        store.upsert("alice", "p2", 3, Money.of("1.50"))
        assert store.total("alice") == Money.of("24.50")
        assert store.item_count("alice") == 5

    def test_total_matches_sum_of_lines(self, store):
        store.upsert("alice", "p1", 2, Money.of("10"))
        store.upsert("alice", "p2", 1, Money.of("4.99"))
        store.increment("alice", "p2", Money.of("4.99"))
        store.decrement("alice", "p1", Money.of("9"))
        expected = sum((i.amount.amount for i in store.get_by_user("alice")), Decimal("0"))
        assert store.total("alice").amount == expected

    def test_empty_cart(self, store):
        assert store.get_by_user("nobody") == []
        assert store.total("nobody") == Money.zero()
        assert store.item_count("nobody") == 0


class TestDeleteAndClear:

    def test_delete(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        store.delete("alice", "p1")
        assert store.get("alice", "p1") is None

    def test_delete_absent_is_noop(self, store):
        store.delete("alice", "p1")

    def test_clear(self, store):
        store.upsert("alice", "p1", 2, PRICE)
        store.upsert("alice", "p2", 1, PRICE)
        store.upsert("bob", "p1", 1, PRICE)
        store.clear("alice")
        assert store.get_by_user("alice") == []
        assert store.total("alice") == Money.zero()
        assert store.get("bob", "p1") is not None

    def test_clear_empty_cart_is_noop(self, store):
        store.clear("alice")


class TestStorageFailure:

    def test_storage_error_passes_through(self):
        repo = FailingCartItemRepository()
        store = CartLineItemStore(repo)
        with pytest.raises(StorageError) as info:
            store.upsert("alice", "p1", 1, PRICE)
        assert info.value.__cause__ is repo.cause

    def test_validation_happens_before_storage(self):
        store = CartLineItemStore(FailingCartItemRepository())
        with pytest.raises(ValidationError):
            store.upsert("alice", "p1", 0, PRICE)


class TestSummary:

    def test_summary_is_consistent(self, store):
        store.upsert("alice", "p2", 2, Money.of("10"))
        store.upsert("alice", "p1", 1, Money.of("0.125"))
        summary = store.summary("alice")
        assert [i.product_id for i in summary.items] == ["p1", "p2"]
        assert summary.total == Money.of("20.125")
        assert summary.item_count == 3

    def test_summary_reads_storage_once(self):
        repo = FakeCartItemRepository()
        store = CartLineItemStore(repo)
        store.upsert("alice", "p1", 2, PRICE)
        calls = []
        original = repo.list_by_user

        def counting(user_id):
            calls.append(user_id)
            return original(user_id)

        repo.list_by_user = counting
        store.summary("alice")
        assert calls == ["alice"]
