"""Application tests for order history and detail queries."""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.cart.items import AddToCart
from ordering.errors import PermissionDeniedError
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.queries import order_for_customer, order_for_shop, orders_for_customer, orders_for_shop
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _order(customer_id="cust-001", shop_id="shop-a", product_id="prod-tapsilog", age_minutes=0):
    current_domain.process(
        AddToCart(customer_id=customer_id, shop_id=shop_id, product_id=product_id, quantity=1),
        asynchronous=False,
    )
    order_id = current_domain.process(
        PlaceOrder(customer_id=customer_id, fulfillment_option="pickup", payment_method="cash"),
        asynchronous=False,
    )
    if age_minutes:
        repo = current_domain.repository_for(Order)
        order = repo.get(order_id)
        order.created_at = datetime.now(UTC) - timedelta(minutes=age_minutes)
        repo.add(order)
    return order_id


class TestHistories:
    def test_customer_history_newest_first(self):
        older = _order(age_minutes=30)
        newer = _order(product_id="prod-longsilog")
        _order(customer_id="cust-002")

        history = orders_for_customer("cust-001")
        assert [o["order_id"] for o in history] == [newer, older]

    def test_shop_history_only_shows_own_orders(self):
        mine = _order()
        _order(shop_id="shop-b", product_id="prod-latte", customer_id="cust-002")

        assert [o["order_id"] for o in orders_for_shop("shop-a")] == [mine]

    def test_empty_history(self):
        assert orders_for_customer("cust-001") == []


class TestDetail:
    def test_customer_detail_resolves_names(self):
        order_id = _order()

        detail = order_for_customer("cust-001", order_id)
        assert detail["shop_name"] == "Kuya's Silog"
        assert detail["items"][0]["product_name"] == "Tapsilog"
        assert detail["total_amount"] == 50.0

    def test_shop_detail(self):
        order_id = _order()
        assert order_for_shop("shop-a", order_id)["status"] == "pending"

    def test_other_customer_denied(self):
        order_id = _order()
        with pytest.raises(PermissionDeniedError):
            order_for_customer("cust-999", order_id)

    def test_other_shop_denied(self):
        order_id = _order()
        with pytest.raises(PermissionDeniedError):
            order_for_shop("shop-b", order_id)

    def test_missing_order_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            order_for_customer("cust-001", "ord-missing")
