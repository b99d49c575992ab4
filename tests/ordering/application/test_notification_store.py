"""Application tests for notifications stored through the repository sink."""

import pytest
from ordering.cart.items import AddToCart
from ordering.errors import InvalidStateError
from ordering.notification import set_sink
from ordering.notification.notification import Notification
from ordering.notification.repository_sink import RepositoryNotificationSink
from ordering.order.customer_actions import ClaimOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.shop_actions import AcceptOrder, CancelOrderByShop, UpdateOrderStatus
from protean import current_domain


@pytest.fixture(autouse=True)
def repository_sink():
    set_sink(RepositoryNotificationSink())


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _place_order():
    _process(AddToCart(customer_id="cust-001", shop_id="shop-a", product_id="prod-tapsilog", quantity=1))
    return _process(PlaceOrder(customer_id="cust-001", fulfillment_option="pickup", payment_method="cash"))


def _stored(recipient_id=None):
    notifications = current_domain.repository_for(Notification)._dao.query.all().items
    if recipient_id is not None:
        notifications = [n for n in notifications if str(n.recipient_id) == recipient_id]
    return sorted(notifications, key=lambda n: n.created_at)


@pytest.fixture
def failing_notification_store(monkeypatch):
    """Make every write of a Notification fail while other aggregates still persist."""
    dao_cls = type(current_domain.repository_for(Notification)._dao)

    for method_name in ("_create", "_update"):
        original = getattr(dao_cls, method_name)

        def failing(self, model_obj, *args, _original=original, **kwargs):
            if self.entity_cls is Notification:
                raise RuntimeError("notification store down")
            return _original(self, model_obj, *args, **kwargs)

        monkeypatch.setattr(dao_cls, method_name, failing)


class TestStoredNotifications:
    def test_placement_stores_one_notification_for_shop(self):
        order_id = _place_order()

        stored = _stored()
        assert len(stored) == 1
        notification = stored[0]
        assert str(notification.recipient_id) == "shop-a"
        assert notification.recipient_role == "shop"
        assert notification.notification_type == "order"
        assert str(notification.order_id) == order_id
        assert notification.title == "New Order"
        assert notification.is_read is False

    def test_each_transition_stores_exactly_one_notification(self):
        order_id = _place_order()
        _process(AcceptOrder(order_id=order_id, shop_id="shop-a"))
        _process(UpdateOrderStatus(order_id=order_id, shop_id="shop-a", status="preparing"))
        _process(UpdateOrderStatus(order_id=order_id, shop_id="shop-a", status="ready_for_pickup"))
        _process(ClaimOrder(order_id=order_id, customer_id="cust-001"))

        assert len(_stored()) == 5
        assert [n.title for n in _stored("cust-001")] == [
            "Order Accepted",
            "Order preparing",
            "Order ready for pickup",
        ]
        assert all(n.recipient_role == "customer" for n in _stored("cust-001"))
        assert [n.title for n in _stored("shop-a")] == ["New Order", "Order Claimed"]
        assert all(str(n.order_id) == order_id for n in _stored())

    def test_shop_cancellation_tells_customer(self):
        order_id = _place_order()
        _process(CancelOrderByShop(order_id=order_id, shop_id="shop-a"))

        customer_notifications = _stored("cust-001")
        assert len(customer_notifications) == 1
        assert customer_notifications[0].message == f"Your order #{order_id} has been cancelled by the shop."

    def test_failed_transition_stores_nothing(self):
        order_id = _place_order()
        with pytest.raises(InvalidStateError):
            _process(ClaimOrder(order_id=order_id, customer_id="cust-001"))
        assert len(_stored()) == 1


class TestNotificationStoreFailure:
    def test_placement_survives_store_failure(self, failing_notification_store):
        order_id = _place_order()

        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_transition_survives_store_failure(self, failing_notification_store):
        order_id = _place_order()

        status = _process(AcceptOrder(order_id=order_id, shop_id="shop-a"))

        assert status == "accepted"
        assert current_domain.repository_for(Order).get(order_id).status == "accepted"
