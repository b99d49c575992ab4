"""Tests for best-effort notification dispatch and message wording."""

from ordering.notification import messages
from ordering.notification.dispatch import emit


class TestEmit:
    def test_emit_records_through_active_sink(self, sink):
        notification_id = emit("shop-a", "shop", "New Order", "You have a new order", order_id="ord-001")

        assert notification_id is not None
        assert len(sink.sent) == 1
        sent = sink.sent[0]
        assert sent["recipient_id"] == "shop-a"
        assert sent["recipient_role"] == "shop"
        assert sent["notification_type"] == "order"
        assert sent["order_id"] == "ord-001"

    def test_failing_sink_is_swallowed(self, sink):
        sink.configure(should_succeed=False, failure_reason="Sink offline")

        assert emit("cust-001", "customer", "Order Accepted", "Accepted") is None
        assert sink.sent == []

    def test_sent_to_filters_by_recipient(self, sink):
        emit("cust-001", "customer", "A", "a")
        emit("shop-a", "shop", "B", "b")

        assert [n["title"] for n in sink.sent_to("cust-001")] == ["A"]


class TestMessages:
    def test_new_order(self):
        title, message = messages.new_order("ord-001")
        assert title == "New Order"
        assert "#ord-001" in message

    def test_status_changed_title_uses_spaces(self):
        title, message = messages.status_changed("ord-001", "ready_for_pickup")
        assert title == "Order ready for pickup"
        assert message == "Order #ord-001: Your order is ready for pickup."

    def test_customer_actions_address_the_shop(self):
        assert messages.cancelled_by_customer("ord-001")[0] == "Order Cancelled"
        assert messages.claimed_by_customer("ord-001")[0] == "Order Claimed"

    def test_shop_cancellation_addresses_the_customer(self):
        title, message = messages.cancelled_by_shop("ord-001")
        assert title == "Order Cancelled"
        assert message == "Your order #ord-001 has been cancelled by the shop."
