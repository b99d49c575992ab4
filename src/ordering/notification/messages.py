"""Human-readable titles and messages for order lifecycle notifications."""

_STATUS_MESSAGES = {
    "accepted": "Your order has been accepted by the shop.",
    "preparing": "Your order is being prepared.",
    "ready_for_pickup": "Your order is ready for pickup.",
    "on_the_way": "Your order is on the way!",
    "delivered": "Your order has been delivered.",
    "claimed": "Your order has been marked as claimed.",
    "cancelled": "Your order has been cancelled.",
}


def _title(status: str) -> str:
    return "Order " + status.replace("_", " ")


def new_order(order_id) -> tuple[str, str]:
    return "New Order", f"You have a new order #{order_id} from a customer."


def order_accepted(order_id) -> tuple[str, str]:
    return "Order Accepted", f"Your order #{order_id} has been accepted by the shop."


def order_rejected(order_id) -> tuple[str, str]:
    return "Order Rejected", f"Your order #{order_id} has been rejected by the shop."


def status_changed(order_id, status: str) -> tuple[str, str]:
    return _title(status), f"Order #{order_id}: {_STATUS_MESSAGES[status]}"


def cancelled_by_customer(order_id) -> tuple[str, str]:
    return "Order Cancelled", f"Order #{order_id} has been cancelled by the customer."


def claimed_by_customer(order_id) -> tuple[str, str]:
    return "Order Claimed", f"Order #{order_id} has been received and claimed by the customer."


def cancelled_by_shop(order_id) -> tuple[str, str]:
    return "Order Cancelled", f"Your order #{order_id} has been cancelled by the shop."
