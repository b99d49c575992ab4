"""Cart item management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer

from ordering.cart.cart import ShoppingCart
from ordering.cart.persistence import find_cart, save_cart
from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.errors import ConflictError, InvalidStateError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


def _require_cart(customer_id):
    cart = find_cart(customer_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": [f"Customer {customer_id} has no cart"]})
    return cart


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        catalog = get_catalog()

        shop = catalog.shop_by_id(command.shop_id)
        if shop is None:
            raise ObjectNotFoundError({"shop_id": [f"Shop {command.shop_id} not found"]})
        product = catalog.product_by_id(command.product_id)
        if product is None:
            raise ObjectNotFoundError({"product_id": [f"Product {command.product_id} not found"]})

        if not shop.is_verified:
            raise ConflictError({"shop_id": ["Shop is not verified to accept orders"]})
        if product.shop_id != shop.shop_id:
            raise ConflictError({"product_id": ["Product does not belong to this shop"]})
        if not product.is_available:
            raise InvalidStateError({"product_id": [f"Product is {product.status}"]})

        cart = find_cart(command.customer_id) or ShoppingCart.create(customer_id=command.customer_id)
        cart.add_item(
            shop_id=shop.shop_id,
            product_id=product.product_id,
            quantity=command.quantity,
            unit_price=product.price,
            product_name=product.name,
        )
        save_cart(cart)

        logger.info(
            "Item added to cart",
            cart_id=str(cart.id),
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _require_cart(command.customer_id)
        item = cart.find_item(command.item_id)

        product = get_catalog().product_by_id(item.product_id)
        if product is None:
            raise ObjectNotFoundError({"product_id": [f"Product {item.product_id} not found"]})

        cart.update_item_quantity(
            item_id=command.item_id,
            new_quantity=command.new_quantity,
            unit_price=product.price,
        )
        save_cart(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _require_cart(command.customer_id)
        cart.remove_item(item_id=command.item_id)
        save_cart(cart)
