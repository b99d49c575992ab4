"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order from a single-shop selection of cart lines."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item snapshots
    subtotal = Float(required=True)
    delivery_fee = Float(required=True)
    total_amount = Float(required=True)
    fulfillment_option = String(required=True)
    payment_method = String(required=True)
    payment_status = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An order moved from one status to another."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = String(required=True)  # actor role
    action = String(required=True, max_length=50)  # command that caused the change
    changed_at = DateTime(required=True)
