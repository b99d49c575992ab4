"""Tests for the ShoppingCart aggregate: line merging, pricing and totals."""

import json

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartItemAdded, CartItemRemoved, CartItemsCheckedOut, CartQuantityUpdated
from protean.exceptions import ObjectNotFoundError, ValidationError


def _cart_with_lines():
    cart = ShoppingCart.create(customer_id="cust-001")
    tapsilog = cart.add_item("shop-a", "prod-tapsilog", 2, 50.0, product_name="Tapsilog")
    longsilog = cart.add_item("shop-a", "prod-longsilog", 1, 30.0, product_name="Longsilog")
    latte = cart.add_item("shop-b", "prod-latte", 1, 100.0, product_name="Iced Latte")
    cart._events.clear()
    return cart, tapsilog, longsilog, latte


class TestCartCreation:
    def test_create_starts_empty(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        assert cart.is_empty
        assert cart.total_amount == 0.0

    def test_create_sets_timestamps(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        assert cart.created_at is not None
        assert cart.updated_at is not None


class TestAddItem:
    def test_new_product_creates_line(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        cart.add_item("shop-a", "prod-tapsilog", 2, 50.0, product_name="Tapsilog")

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].subtotal == 100.0
        assert cart.total_amount == 100.0

    def test_same_product_merges_into_one_line(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        first = cart.add_item("shop-a", "prod-tapsilog", 1, 50.0)
        second = cart.add_item("shop-a", "prod-tapsilog", 2, 50.0)

        assert first == second
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.total_amount == 150.0

    def test_merge_reprices_line_at_current_price(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        cart.add_item("shop-a", "prod-tapsilog", 1, 50.0)
        cart.add_item("shop-a", "prod-tapsilog", 1, 55.0)

        assert cart.items[0].unit_price == 55.0
        assert cart.items[0].subtotal == 110.0

    def test_lines_from_different_shops_coexist(self):
        cart, *_ = _cart_with_lines()
        assert {str(i.shop_id) for i in cart.items} == {"shop-a", "shop-b"}
        assert cart.total_amount == 230.0

    def test_zero_quantity_rejected(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        with pytest.raises(ValidationError):
            cart.add_item("shop-a", "prod-tapsilog", 0, 50.0)

    def test_raises_item_added_event(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        cart.add_item("shop-a", "prod-tapsilog", 2, 50.0)

        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 2
        assert event.total_amount == 100.0


class TestUpdateQuantity:
    def test_update_sets_quantity_and_reprices(self):
        cart, tapsilog, *_ = _cart_with_lines()
        cart.update_item_quantity(tapsilog, 3, 60.0)

        item = cart.find_item(tapsilog)
        assert item.quantity == 3
        assert item.unit_price == 60.0
        assert item.subtotal == 180.0
        assert cart.total_amount == 310.0

    def test_update_leaves_other_lines_alone(self):
        cart, tapsilog, longsilog, _ = _cart_with_lines()
        cart.update_item_quantity(tapsilog, 3, 60.0)

        assert cart.find_item(longsilog).subtotal == 30.0

    def test_zero_quantity_is_not_a_removal(self):
        cart, tapsilog, *_ = _cart_with_lines()
        with pytest.raises(ValidationError):
            cart.update_item_quantity(tapsilog, 0, 50.0)
        assert cart.find_item(tapsilog).quantity == 2

    def test_unknown_item_raises_not_found(self):
        cart, *_ = _cart_with_lines()
        with pytest.raises(ObjectNotFoundError):
            cart.update_item_quantity("missing", 1, 50.0)

    def test_raises_quantity_updated_event(self):
        cart, tapsilog, *_ = _cart_with_lines()
        cart.update_item_quantity(tapsilog, 4, 50.0)

        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 2
        assert event.new_quantity == 4


class TestRemoveItem:
    def test_remove_recomputes_total(self):
        cart, _, _, latte = _cart_with_lines()
        cart.remove_item(latte)

        assert len(cart.items) == 2
        assert cart.total_amount == 130.0
        assert isinstance(cart._events[0], CartItemRemoved)

    def test_removing_last_line_empties_cart(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        item_id = cart.add_item("shop-a", "prod-tapsilog", 1, 50.0)
        cart.remove_item(item_id)

        assert cart.is_empty
        assert cart.total_amount == 0.0

    def test_unknown_item_raises_not_found(self):
        cart, *_ = _cart_with_lines()
        with pytest.raises(ObjectNotFoundError):
            cart.remove_item("missing")


class TestSelectAndConsume:
    def test_empty_selection_means_whole_cart(self):
        cart, *_ = _cart_with_lines()
        assert len(cart.select_items(None)) == 3
        assert len(cart.select_items([])) == 3

    def test_selection_filters_by_item_id(self):
        cart, tapsilog, longsilog, _ = _cart_with_lines()
        selected = cart.select_items([tapsilog, longsilog])
        assert {str(i.id) for i in selected} == {tapsilog, longsilog}

    def test_consume_removes_only_selected_lines(self):
        cart, tapsilog, longsilog, latte = _cart_with_lines()
        cart.consume([tapsilog, longsilog], order_id="ord-001")

        assert [str(i.id) for i in cart.items] == [latte]
        assert cart.total_amount == 100.0

    def test_consume_does_not_reprice_remaining_lines(self):
        cart, tapsilog, _, latte = _cart_with_lines()
        cart.consume([tapsilog], order_id="ord-001")

        assert cart.find_item(latte).unit_price == 100.0
        assert cart.find_item(latte).subtotal == 100.0

    def test_consume_raises_checked_out_event(self):
        cart, tapsilog, longsilog, _ = _cart_with_lines()
        cart.consume([tapsilog, longsilog], order_id="ord-001")

        event = cart._events[0]
        assert isinstance(event, CartItemsCheckedOut)
        assert event.order_id == "ord-001"
        assert sorted(json.loads(event.item_ids)) == sorted([tapsilog, longsilog])
        assert event.remaining_items == 1
