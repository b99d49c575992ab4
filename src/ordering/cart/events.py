"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its existing line was topped up."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # quantity added, not the new line total
    unit_price = Float(required=True)
    total_amount = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_amount = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    total_amount = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemsCheckedOut:
    """Cart lines were consumed by a placed order."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    item_ids = Text(required=True)  # JSON: list of consumed line ids
    remaining_items = Integer(required=True)
    total_amount = Float(required=True)
