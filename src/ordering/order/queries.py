"""Order read model: histories and detail views for customers and shops.

Detail lookups enforce ownership. An order that exists but belongs to someone
else is a permission failure, not a missing order.
"""

from protean.utils.globals import current_domain

from ordering.catalog import get_catalog
from ordering.errors import PermissionDeniedError
from ordering.order.order import Order


def describe_order(order: Order) -> dict:
    """Flatten an order for display, resolving the shop name from the catalog."""
    shop = get_catalog().shop_by_id(order.shop_id)
    return {
        "order_id": str(order.id),
        "customer_id": str(order.customer_id),
        "shop_id": str(order.shop_id),
        "shop_name": shop.name if shop else None,
        "items": [
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
        "subtotal": order.subtotal,
        "delivery_fee": order.delivery_fee,
        "total_amount": order.total_amount,
        "fulfillment_option": order.fulfillment_option,
        "delivery_address": order.delivery_address,
        "payment_method": order.payment_method,
        "payment_reference": order.payment_reference,
        "payment_status": order.payment_status,
        "status": order.status,
        "notes": order.notes,
        "cancelled_by": order.cancelled_by,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }


def _orders_where(**filters) -> list[Order]:
    repo = current_domain.repository_for(Order)
    matches = repo._dao.query.filter(**filters).all().items
    orders = [repo.get(match.id) for match in matches]
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def orders_for_customer(customer_id) -> list[dict]:
    """The customer's order history, newest first."""
    return [describe_order(o) for o in _orders_where(customer_id=str(customer_id))]


def orders_for_shop(shop_id) -> list[dict]:
    """Orders received by the shop, newest first."""
    return [describe_order(o) for o in _orders_where(shop_id=str(shop_id))]


def order_for_customer(customer_id, order_id) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != str(customer_id):
        raise PermissionDeniedError({"order": [f"Order {order_id} does not belong to this customer"]})
    return describe_order(order)


def order_for_shop(shop_id, order_id) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.shop_id) != str(shop_id):
        raise PermissionDeniedError({"order": [f"Order {order_id} does not belong to this shop"]})
    return describe_order(order)
