"""Checkout quote lookup by customer."""

from ordering.cart.persistence import find_cart
from ordering.checkout.quote import CheckoutQuote, FulfillmentOption, prepare_checkout


def get_checkout_quote(
    customer_id,
    selected_item_ids=None,
    fulfillment_option: str = FulfillmentOption.DELIVERY.value,
) -> CheckoutQuote:
    """Quote the customer's current cart. A missing cart is treated as an empty one."""
    return prepare_checkout(
        find_cart(customer_id),
        selected_item_ids=selected_item_ids,
        fulfillment_option=fulfillment_option,
    )
