"""Cart lookup and save helpers shared by the cart and order handlers."""

import structlog
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart

logger = structlog.get_logger(__name__)


def find_cart(customer_id) -> ShoppingCart | None:
    """Return the customer's cart, or None when they have none."""
    repo = current_domain.repository_for(ShoppingCart)
    matches = repo._dao.query.filter(customer_id=str(customer_id)).all()
    if not matches.items:
        return None
    return repo.get(matches.items[0].id)


def save_cart(cart: ShoppingCart) -> None:
    """Persist the cart, or delete it outright once it holds no lines."""
    repo = current_domain.repository_for(ShoppingCart)
    if cart.is_empty:
        repo._dao.delete(cart)
        logger.info("Cart emptied and deleted", cart_id=str(cart.id), customer_id=str(cart.customer_id))
    else:
        repo.add(cart)
