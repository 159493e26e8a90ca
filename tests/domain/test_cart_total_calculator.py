"""Unit tests for the CartTotalCalculator domain service."""

from shopcart.domain.model.cart_item import CartItem
from shopcart.domain.model.value_objects import Money
from shopcart.domain.service.cart_total_calculator import CartTotalCalculator


class TestCartTotalCalculator:

    def test_sums_stored_amounts(self):
        items = [
            CartItem.create("u1", "p1", 2, Money.of("3.00")),
            CartItem.create("u1", "p2", 1, Money.of("0.99")),
        ]
        assert CartTotalCalculator().total(items) == Money.of("6.99")

    def test_uses_snapshot_not_current_price(self):
        # amount is taken as stored, even if it no longer matches quantity * price
        item = CartItem(user_id="u1", product_id="p1", quantity=3, amount=Money.of("5"))
        assert CartTotalCalculator().total([item]) == Money.of("5")

    def test_item_count_sums_quantities(self):
        items = [
            CartItem.create("u1", "p1", 2, Money.of("1")),
            CartItem.create("u1", "p2", 5, Money.of("1")),
        ]
        assert CartTotalCalculator().item_count(items) == 7

    def test_empty(self):
        calc = CartTotalCalculator()
        assert calc.total([]) == Money.zero()
        assert calc.item_count([]) == 0
