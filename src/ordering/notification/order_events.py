"""Order events handler — turns order lifecycle events into notifications.

Runs after the order's unit of work has committed, so the order change is
already durable when a notification is written. Every notification goes to
the party that did not act: the shop hears about placement and customer
actions, the customer hears about everything the shop does.
"""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.notification import messages
from ordering.notification.dispatch import emit
from ordering.notification.notification import Notification, RecipientRole
from ordering.order.actors import Role
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.order import OrderAction

logger = structlog.get_logger(__name__)

_CUSTOMER_ACTION_MESSAGES = {
    OrderAction.CANCEL.value: messages.cancelled_by_customer,
    OrderAction.CLAIM.value: messages.claimed_by_customer,
}

_SHOP_ACTION_MESSAGES = {
    OrderAction.ACCEPT.value: messages.order_accepted,
    OrderAction.REJECT.value: messages.order_rejected,
    OrderAction.CANCEL.value: messages.cancelled_by_shop,
}


@ordering.event_handler(part_of=Notification, stream_category="ordering::order")
class OrderEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        title, message = messages.new_order(event.order_id)
        emit(event.shop_id, RecipientRole.SHOP.value, title, message, order_id=event.order_id)

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if event.changed_by == Role.CUSTOMER.value:
            title, message = _CUSTOMER_ACTION_MESSAGES[event.action](event.order_id)
            emit(event.shop_id, RecipientRole.SHOP.value, title, message, order_id=event.order_id)
            return

        builder = _SHOP_ACTION_MESSAGES.get(event.action)
        if builder is not None:
            title, message = builder(event.order_id)
        else:
            title, message = messages.status_changed(event.order_id, event.new_status)
        emit(event.customer_id, RecipientRole.CUSTOMER.value, title, message, order_id=event.order_id)

        logger.debug(
            "Order status notification dispatched",
            order_id=str(event.order_id),
            action=event.action,
            new_status=event.new_status,
        )
