"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    shop_id: str
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shop_id": "shop-001",
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    new_quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Checkout / Order Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    selected_item_ids: list[str] = Field(default_factory=list)
    fulfillment_option: str = "delivery"


class PlaceOrderRequest(BaseModel):
    fulfillment_option: str
    payment_method: str
    delivery_address: str | None = None
    payment_reference: str | None = None
    notes: str | None = None
    selected_item_ids: list[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "fulfillment_option": "delivery",
                    "payment_method": "gcash",
                    "delivery_address": "Dorm 4, Room 210",
                    "payment_reference": "GC-0091827",
                    "notes": "No onions",
                    "selected_item_ids": [],
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CartIdResponse(BaseModel):
    cart_id: str


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str
