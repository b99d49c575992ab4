"""Customer-side order transitions — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@ordering.command(part_of="Order")
class ClaimOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CustomerOrderActionsHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel_by_customer(customer_id=command.customer_id)
        repo.add(order)

        logger.info("Order cancelled by customer", order_id=str(order.id), customer_id=str(command.customer_id))
        return order.status

    @handle(ClaimOrder)
    def claim_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.claim(customer_id=command.customer_id)
        repo.add(order)

        logger.info("Order claimed", order_id=str(order.id), customer_id=str(command.customer_id))
        return order.status
