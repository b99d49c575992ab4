"""Cart read model.

Reading a customer's cart never fails because the cart is missing: a
customer without a cart sees an empty one.
"""

from ordering.cart.persistence import find_cart
from ordering.catalog import get_catalog


def empty_cart(customer_id) -> dict:
    return {
        "cart_id": None,
        "customer_id": str(customer_id),
        "items": [],
        "total_amount": 0.0,
    }


def cart_view(customer_id) -> dict:
    """Return the customer's cart with shop names resolved for display."""
    cart = find_cart(customer_id)
    if cart is None:
        return empty_cart(customer_id)

    catalog = get_catalog()
    items = []
    for item in cart.items:
        shop = catalog.shop_by_id(item.shop_id)
        items.append(
            {
                "item_id": str(item.id),
                "shop_id": str(item.shop_id),
                "shop_name": shop.name if shop else None,
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "subtotal": item.subtotal,
            }
        )

    return {
        "cart_id": str(cart.id),
        "customer_id": str(cart.customer_id),
        "items": items,
        "total_amount": cart.total_amount,
    }
