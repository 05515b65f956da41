"""Unit tests for the Cart aggregate and its invariants."""

import pytest

from pos.domain.exceptions import ValidationError
from pos.domain.model.cart import Cart, LineItem
from pos.domain.model.value_objects import Money, Quantity
from tests.fakes import make_product

MILO = make_product("1", "Milo 1kg", "10.00")
BREAD = make_product("2", "Gardenia Bread", "5.00", taxable=False)
RICE = make_product("3", "Rice 5kg", "18.90", taxable=False)


def _quantities(cart: Cart) -> list[tuple[str, int]]:
    return [(item.product_id, item.quantity.value) for item in cart.items]


class TestCartAdd:

    def test_first_add_appends_with_quantity_one(self):
        cart = Cart()
        item = cart.add(MILO)
        assert item.quantity == Quantity(1)
        assert _quantities(cart) == [("1", 1)]

    def test_repeat_add_merges_into_existing_line(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(BREAD)
        cart.add(MILO)
        assert _quantities(cart) == [("1", 2), ("2", 1)]

    def test_no_duplicate_product_ids_for_any_add_sequence(self):
        cart = Cart()
        for product in [MILO, BREAD, MILO, RICE, BREAD, MILO, RICE]:
            cart.add(product)
        ids = [item.product_id for item in cart.items]
        assert len(ids) == len(set(ids))
        assert cart.item_count == 7

    def test_insertion_order_is_display_order(self):
        cart = Cart()
        cart.add(RICE)
        cart.add(MILO)
        cart.add(BREAD)
        assert [item.product_id for item in cart.items] == ["3", "1", "2"]


class TestCartQuantity:

    def test_increment_keeps_position(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(BREAD)
        assert cart.adjust_quantity("1", 1) is True
        assert _quantities(cart) == [("1", 2), ("2", 1)]

    def test_decrement(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(MILO)
        assert cart.adjust_quantity("1", -1) is True
        assert _quantities(cart) == [("1", 1)]

    def test_decrement_at_one_is_a_no_op(self):
        """Decrementing the last unit leaves the line at 1 rather than removing it."""
        cart = Cart()
        cart.add(MILO)
        assert cart.adjust_quantity("1", -1) is False
        assert _quantities(cart) == [("1", 1)]

    def test_large_negative_delta_is_a_no_op(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(MILO)
        assert cart.adjust_quantity("1", -5) is False
        assert _quantities(cart) == [("1", 2)]

    def test_unknown_product_is_ignored(self):
        cart = Cart()
        assert cart.adjust_quantity("nope", 1) is False
        assert cart.is_empty


class TestCartRemoval:

    def test_remove_deletes_line(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(BREAD)
        assert cart.remove("1") is True
        assert _quantities(cart) == [("2", 1)]

    def test_remove_unknown_returns_false(self):
        cart = Cart()
        assert cart.remove("42") is False

    def test_re_add_after_remove_goes_to_the_end(self):
        cart = Cart()
        cart.add(MILO)
        cart.add(BREAD)
        cart.remove("1")
        cart.add(MILO)
        assert [item.product_id for item in cart.items] == ["2", "1"]

    def test_clear(self):
        cart = Cart()
        cart.add(MILO)
        cart.clear()
        assert cart.is_empty
        assert len(cart) == 0


class TestCartRelease:

    def test_release_subtracts_committed_quantities(self):
        cart = Cart()
        for product in [MILO, MILO, MILO, BREAD]:
            cart.add(product)
        committed = (LineItem(MILO, Quantity(2)), LineItem(BREAD, Quantity(1)))
        cart.release(committed)
        assert _quantities(cart) == [("1", 1)]

    def test_release_skips_products_no_longer_in_cart(self):
        cart = Cart()
        cart.add(RICE)
        cart.release((LineItem(MILO, Quantity(1)),))
        assert _quantities(cart) == [("3", 1)]


class TestLineItem:

    def test_line_total(self):
        item = LineItem(product=MILO, quantity=Quantity(3))
        assert item.line_total == Money.of("30.00")

    def test_is_immutable(self):
        item = LineItem(product=MILO, quantity=Quantity(1))
        with pytest.raises(AttributeError):
            item.quantity = Quantity(2)

    def test_zero_quantity_cannot_exist(self):
        with pytest.raises(ValidationError, match="must be positive"):
            LineItem(product=MILO, quantity=Quantity(0))

    def test_snapshot_is_unaffected_by_later_mutations(self):
        cart = Cart()
        cart.add(MILO)
        snapshot = cart.items
        cart.add(MILO)
        cart.add(BREAD)
        assert [(i.product_id, i.quantity.value) for i in snapshot] == [("1", 1)]
