"""Ordering bounded context — Shopping Cart, Checkout and Order Lifecycle.

Handles the per-customer cart, the checkout validation that turns a
single-shop selection of cart lines into a priced quote, and the order
state machine driven by customers and shops.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
