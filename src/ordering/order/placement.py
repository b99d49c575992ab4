"""Order placement — command and handler.

Placement re-validates the selected cart lines against the catalog, snapshots
current prices into a new Order, and removes exactly the ordered lines from
the cart. All of it happens in the handler's unit of work, so a failure at
any step leaves the cart as it was.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.persistence import find_cart, save_cart
from ordering.checkout.quote import delivery_fee_for, select_checkout_items
from ordering.domain import ordering
from ordering.order.order import Order, validate_order_input

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    fulfillment_option = String(required=True, max_length=20)
    payment_method = String(required=True, max_length=20)
    delivery_address = String(max_length=500)
    payment_reference = String(max_length=255)
    notes = Text()
    selected_item_ids = Text()  # JSON: list of cart item ids; empty means the whole cart


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        validate_order_input(
            command.fulfillment_option,
            command.payment_method,
            command.delivery_address,
            command.payment_reference,
        )

        selected = json.loads(command.selected_item_ids) if command.selected_item_ids else None
        cart = find_cart(command.customer_id)
        selection = select_checkout_items(cart, selected)

        order = Order.place(
            customer_id=command.customer_id,
            shop_id=selection.shop.shop_id,
            items_data=[
                {
                    "product_id": line.product.product_id,
                    "product_name": line.product.name,
                    "quantity": line.quantity,
                    "unit_price": line.product.price,
                }
                for line in selection.lines
            ],
            fulfillment_option=command.fulfillment_option,
            payment_method=command.payment_method,
            delivery_fee=delivery_fee_for(selection.shop, command.fulfillment_option),
            delivery_address=command.delivery_address,
            payment_reference=command.payment_reference,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        cart.consume(selection.item_ids, order_id=str(order.id))
        save_cart(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            shop_id=str(order.shop_id),
            item_count=len(selection.lines),
            total_amount=order.total_amount,
        )
        return str(order.id)
