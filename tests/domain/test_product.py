"""Unit tests for the Product aggregate."""

import pytest

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Money


class TestDiscountedPrice:

    def test_no_discount_is_full_price(self):
        p = Product(id="1", name="Widget", price=Money.of("15.00"))
        assert p.discounted_price == Money.of("15.00")

    def test_discount_is_subtracted(self):
        p = Product(id="1", name="Widget", price=Money.of("15.00"), discount=Money.of("2.50"))
        assert p.discounted_price == Money.of("12.50")

    def test_discount_larger_than_price_clamps_to_zero(self):
        p = Product(id="1", name="Widget", price=Money.of("5"), discount=Money.of("8"))
        assert p.discounted_price == Money.zero()


class TestUpdatePrice:

    def test_update_price(self):
        p = Product(id="1", name="Widget", price=Money.of("15.00"))
        p.update_price(Money.of("20.00"))
        assert p.price == Money.of("20.00")

    def test_update_keeps_discount_when_not_given(self):
        p = Product(id="1", name="Widget", price=Money.of("15"), discount=Money.of("5"))
        p.update_price(Money.of("20"))
        assert p.discounted_price == Money.of("15")

    def test_update_replaces_discount(self):
        p = Product(id="1", name="Widget", price=Money.of("15"), discount=Money.of("5"))
        p.update_price(Money.of("20"), Money.of("1"))
        assert p.discounted_price == Money.of("19")

    def test_zero_price_rejected(self):
        p = Product(id="1", name="Widget", price=Money.of("15.00"))
        with pytest.raises(ValidationError, match="greater than zero"):
            p.update_price(Money.of("0"))

    def test_clear_discount(self):
        p = Product(id="1", name="Widget", price=Money.of("15"), discount=Money.of("5"))
        p.clear_discount()
        assert p.discounted_price == Money.of("15")
