"""Tests for the session cart container (database/carts.py)"""

from datetime import timedelta
from decimal import Decimal

import pytest

from storefront.database.carts import SessionCart, CartDatabase, format_amount
from storefront.models.cart import CartItemInput


@pytest.fixture
def mug():
    return CartItemInput(id=1, name="Mug", price="399", image_url="/m.jpg", description="Blue mug")


@pytest.fixture
def vase():
    return CartItemInput(id=2, name="Vase", price="149.50")


@pytest.fixture
def cart():
    return SessionCart()


class TestAddToCart:

    def test_first_add_creates_line(self, cart, mug):
        cart.add_to_cart(mug)

        line = cart.get_line(1)
        assert line.quantity == 1
        assert line.name == "Mug"
        assert line.unit_price == "399"
        assert line.image_url == "/m.jpg"

    def test_adding_twice_merges(self, cart, mug):
        cart.add_to_cart(mug, 1)
        cart.add_to_cart(mug, 1)

        assert len(cart.lines) == 1
        assert cart.get_line(1).quantity == 2

    def test_negative_delta_to_zero_removes_line(self, cart, mug):
        cart.add_to_cart(mug, 2)
        cart.add_to_cart(mug, -2)

        assert cart.get_line(1) is None
        assert cart.lines == []

    def test_negative_delta_past_zero_is_absorbed(self, cart, mug):
        cart.add_to_cart(mug, 1)
        cart.add_to_cart(mug, -5)

        assert cart.get_line(1) is None

    def test_non_positive_first_add_creates_nothing(self, cart, mug):
        cart.add_to_cart(mug, 0)
        cart.add_to_cart(mug, -1)

        assert cart.lines == []

    def test_quantity_is_sum_since_last_removal(self, cart, mug, vase):
        deltas = [3, -1, 2, -4, 5, 1]
        for delta in deltas:
            cart.add_to_cart(mug, delta)
        cart.add_to_cart(vase, 2)

        # 3, 2, 4, 0 (removed), 5, 6
        assert cart.get_line(1).quantity == 6
        assert cart.get_line(2).quantity == 2
        assert len({line.product_id for line in cart.lines}) == len(cart.lines)

    def test_no_stock_limit(self, cart, mug):
        cart.add_to_cart(mug, 1000)
        assert cart.get_line(1).quantity == 1000


class TestRemoveAndClear:

    def test_remove_line(self, cart, mug, vase):
        cart.add_to_cart(mug, 3)
        cart.add_to_cart(vase)

        cart.remove_from_cart(1)

        assert [line.product_id for line in cart.lines] == [2]

    def test_remove_missing_is_noop(self, cart, mug):
        cart.add_to_cart(mug)
        cart.remove_from_cart(99)
        assert len(cart.lines) == 1

    def test_clear(self, cart, mug, vase):
        cart.add_to_cart(mug)
        cart.add_to_cart(vase)
        cart.clear_cart()
        assert cart.lines == []
        assert cart.item_count == 0


class TestTotals:

    def test_item_count_and_subtotal(self, cart, mug, vase):
        cart.add_to_cart(mug, 2)
        cart.add_to_cart(vase, 1)

        assert cart.item_count == 3
        assert cart.subtotal == Decimal("947.50")

    def test_unpriced_lines_count_as_zero(self, cart):
        cart.add_to_cart(CartItemInput(id=5, name="Gift", price=""), 2)
        assert cart.subtotal == Decimal(0)

    def test_to_order_items(self, cart, mug, vase):
        cart.add_to_cart(mug, 2)
        cart.add_to_cart(vase, 1)

        items = cart.to_order_items()
        assert [(i.id, i.quantity) for i in items] == [(1, 2), (2, 1)]

    def test_format_amount(self):
        assert format_amount(Decimal("798")) == "798"
        assert format_amount(Decimal("947.50")) == "947.50"
        assert format_amount(Decimal("799.0")) == "799"


class TestCartDatabase:

    def test_create_and_get(self):
        db = CartDatabase()
        cart = db.create_cart()

        assert db.get_cart(cart.cart_id) is cart
        assert db.get_cart("missing") is None

    def test_get_or_create(self):
        db = CartDatabase()
        cart = db.create_cart()

        assert db.get_or_create_cart(cart.cart_id) is cart
        assert db.get_or_create_cart("unknown") is not cart
        assert len(db.carts) == 2

    def test_delete(self):
        db = CartDatabase()
        cart = db.create_cart()

        assert db.delete_cart(cart.cart_id)
        assert not db.delete_cart(cart.cart_id)

    def test_cleanup_old_carts(self, mug):
        db = CartDatabase()
        old = db.create_cart()
        fresh = db.create_cart()
        old.updated_at -= timedelta(hours=25)

        assert db.cleanup_old_carts(max_age_hours=24) == 1
        assert db.get_cart(old.cart_id) is None
        assert db.get_cart(fresh.cart_id) is fresh
