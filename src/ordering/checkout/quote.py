"""Checkout validation and quoting.

``select_checkout_items`` is the authoritative check that order placement
re-runs at commit time: it picks the working set of cart lines, enforces
single-shop scope and re-checks product availability against the catalog.
``prepare_checkout`` adds the price breakdown on top. Neither touches the
cart.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from ordering.catalog import get_catalog
from ordering.catalog.port import CatalogReader, ProductRecord, ShopRecord
from ordering.errors import InvalidStateError


class FulfillmentOption(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


@dataclass(frozen=True)
class CheckoutLine:
    """A validated cart line paired with the product as the catalog has it now."""

    item_id: str
    product: ProductRecord
    quantity: int
    unit_price: float  # price stored on the cart line
    subtotal: float  # subtotal stored on the cart line


@dataclass(frozen=True)
class CheckoutSelection:
    shop: ShopRecord
    lines: tuple[CheckoutLine, ...]

    @property
    def item_ids(self) -> list[str]:
        return [line.item_id for line in self.lines]


@dataclass(frozen=True)
class CheckoutQuote:
    """Advisory price breakdown for a candidate order."""

    shop: ShopRecord
    lines: tuple[CheckoutLine, ...]
    fulfillment_option: str
    subtotal: float
    delivery_fee: float
    total_amount: float

    def to_dict(self) -> dict:
        return {
            "shop_id": self.shop.shop_id,
            "shop_name": self.shop.name,
            "fulfillment_option": self.fulfillment_option,
            "items": [
                {
                    "item_id": line.item_id,
                    "product_id": line.product.product_id,
                    "product_name": line.product.name,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "subtotal": line.subtotal,
                }
                for line in self.lines
            ],
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "total_amount": self.total_amount,
        }


def delivery_fee_for(shop: ShopRecord, fulfillment_option: str) -> float:
    """Pickup is free; delivery costs whatever the shop charges."""
    if fulfillment_option == FulfillmentOption.PICKUP.value:
        return 0.0
    return float(shop.delivery_fee or 0.0)


def select_checkout_items(cart, selected_item_ids=None, catalog: CatalogReader | None = None) -> CheckoutSelection:
    """Pick the working set from the cart and validate it for checkout."""
    catalog = catalog or get_catalog()

    if cart is None or cart.is_empty:
        raise InvalidStateError({"cart": ["Cart is empty"]})

    items = cart.select_items(selected_item_ids)
    if not items:
        raise InvalidStateError({"selected_item_ids": ["No cart items match the selection"]})

    shop_ids = {str(item.shop_id) for item in items}
    if len(shop_ids) > 1:
        raise ValidationError({"cart": ["Multi-shop checkout not supported; select items from one shop"]})

    shop_id = shop_ids.pop()
    shop = catalog.shop_by_id(shop_id)
    if shop is None:
        raise InvalidStateError({"shop_id": [f"Shop {shop_id} no longer exists"]})

    lines = []
    for item in items:
        product = catalog.product_by_id(item.product_id)
        if product is None or not product.is_available:
            raise InvalidStateError(
                {"product_id": [f"Product {item.product_name or item.product_id} no longer available"]}
            )
        lines.append(
            CheckoutLine(
                item_id=str(item.id),
                product=product,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
        )

    return CheckoutSelection(shop=shop, lines=tuple(lines))


def prepare_checkout(
    cart,
    selected_item_ids=None,
    fulfillment_option: str = FulfillmentOption.DELIVERY.value,
    catalog: CatalogReader | None = None,
) -> CheckoutQuote:
    """Validate the selection and price it. Pure read; the cart is left untouched."""
    if fulfillment_option not in {o.value for o in FulfillmentOption}:
        raise ValidationError({"fulfillment_option": [f"Unknown fulfillment option: {fulfillment_option}"]})

    selection = select_checkout_items(cart, selected_item_ids, catalog)

    subtotal = round(sum(line.subtotal for line in selection.lines), 2)
    fee = delivery_fee_for(selection.shop, fulfillment_option)

    return CheckoutQuote(
        shop=selection.shop,
        lines=selection.lines,
        fulfillment_option=fulfillment_option,
        subtotal=subtotal,
        delivery_fee=fee,
        total_amount=round(subtotal + fee, 2),
    )
