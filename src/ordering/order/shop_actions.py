"""Shop-side order transitions — commands and handler.

Each transition reloads the order inside the handler's unit of work, checks
its preconditions against that fresh copy and saves it. The customer is told
by ``OrderEventsHandler`` once the change has committed.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AcceptOrder:
    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RejectOrder:
    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)


@ordering.command(part_of="Order")
class CancelOrderByShop:
    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@ordering.command_handler(part_of=Order)
class ShopOrderActionsHandler:
    @handle(AcceptOrder)
    def accept_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.accept(shop_id=command.shop_id)
        repo.add(order)

        logger.info("Order accepted", order_id=str(order.id), shop_id=str(command.shop_id))
        return order.status

    @handle(RejectOrder)
    def reject_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.reject(shop_id=command.shop_id)
        repo.add(order)

        logger.info("Order rejected", order_id=str(order.id), shop_id=str(command.shop_id))
        return order.status

    @handle(CancelOrderByShop)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.cancel_by_shop(shop_id=command.shop_id)
        repo.add(order)

        logger.info(
            "Order cancelled by shop",
            order_id=str(order.id),
            shop_id=str(command.shop_id),
            previous_status=previous,
        )
        return order.status

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.update_status(shop_id=command.shop_id, new_status=command.status)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            shop_id=str(command.shop_id),
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
