"""FastAPI routes for the Ordering domain — carts, checkout and orders."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CheckoutRequest,
    OrderStatusResponse,
    PlaceOrderRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.queries import cart_view
from ordering.checkout.queries import get_checkout_quote
from ordering.order.customer_actions import CancelOrder, ClaimOrder
from ordering.order.placement import PlaceOrder
from ordering.order.queries import order_for_customer, order_for_shop, orders_for_customer, orders_for_shop
from ordering.order.shop_actions import AcceptOrder, CancelOrderByShop, RejectOrder, UpdateOrderStatus

# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/customers/{customer_id}", tags=["customers"])


@customer_router.get("/cart")
async def get_cart(customer_id: str) -> dict:
    return cart_view(customer_id)


@customer_router.post("/cart/items", status_code=201, response_model=CartIdResponse)
async def add_cart_item(customer_id: str, body: AddToCartRequest) -> CartIdResponse:
    command = AddToCart(
        customer_id=customer_id,
        shop_id=body.shop_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@customer_router.put("/cart/items/{item_id}", response_model=StatusResponse)
async def update_cart_item_quantity(customer_id: str, item_id: str, body: UpdateCartQuantityRequest) -> StatusResponse:
    command = UpdateCartQuantity(
        customer_id=customer_id,
        item_id=item_id,
        new_quantity=body.new_quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@customer_router.delete("/cart/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(customer_id: str, item_id: str) -> StatusResponse:
    command = RemoveFromCart(
        customer_id=customer_id,
        item_id=item_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@customer_router.post("/checkout")
async def checkout(customer_id: str, body: CheckoutRequest) -> dict:
    """Price the selected cart lines without placing anything."""
    quote = get_checkout_quote(
        customer_id,
        selected_item_ids=body.selected_item_ids or None,
        fulfillment_option=body.fulfillment_option,
    )
    return quote.to_dict()


@customer_router.post("/orders", status_code=201)
async def place_order(customer_id: str, body: PlaceOrderRequest) -> dict:
    command = PlaceOrder(
        customer_id=customer_id,
        fulfillment_option=body.fulfillment_option,
        payment_method=body.payment_method,
        delivery_address=body.delivery_address,
        payment_reference=body.payment_reference,
        notes=body.notes,
        selected_item_ids=json.dumps(body.selected_item_ids) if body.selected_item_ids else None,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return order_for_customer(customer_id, order_id)


@customer_router.get("/orders")
async def list_customer_orders(customer_id: str) -> list[dict]:
    return orders_for_customer(customer_id)


@customer_router.get("/orders/{order_id}")
async def get_customer_order(customer_id: str, order_id: str) -> dict:
    return order_for_customer(customer_id, order_id)


@customer_router.put("/orders/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(customer_id: str, order_id: str) -> OrderStatusResponse:
    command = CancelOrder(order_id=order_id, customer_id=customer_id)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@customer_router.put("/orders/{order_id}/claim", response_model=OrderStatusResponse)
async def claim_order(customer_id: str, order_id: str) -> OrderStatusResponse:
    command = ClaimOrder(order_id=order_id, customer_id=customer_id)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


# ---------------------------------------------------------------------------
# Shop Router
# ---------------------------------------------------------------------------
shop_router = APIRouter(prefix="/shops/{shop_id}", tags=["shops"])


@shop_router.get("/orders")
async def list_shop_orders(shop_id: str) -> list[dict]:
    return orders_for_shop(shop_id)


@shop_router.get("/orders/{order_id}")
async def get_shop_order(shop_id: str, order_id: str) -> dict:
    return order_for_shop(shop_id, order_id)


@shop_router.put("/orders/{order_id}/accept", response_model=OrderStatusResponse)
async def accept_order(shop_id: str, order_id: str) -> OrderStatusResponse:
    command = AcceptOrder(order_id=order_id, shop_id=shop_id)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@shop_router.put("/orders/{order_id}/reject", response_model=OrderStatusResponse)
async def reject_order(shop_id: str, order_id: str) -> OrderStatusResponse:
    command = RejectOrder(order_id=order_id, shop_id=shop_id)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@shop_router.put("/orders/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(shop_id: str, order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(order_id=order_id, shop_id=shop_id, status=body.status)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@shop_router.put("/orders/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order_by_shop(shop_id: str, order_id: str) -> OrderStatusResponse:
    command = CancelOrderByShop(order_id=order_id, shop_id=shop_id)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)
