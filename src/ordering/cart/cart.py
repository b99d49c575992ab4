"""Shopping Cart aggregate (CQRS): the customer's mutable, multi-shop cart.

A customer owns at most one cart. It is created lazily on the first add and
deleted outright (not soft-deleted) as soon as it holds no lines. Lines may
come from several shops; single-shop scope is only enforced at checkout.

Line subtotals are priced at the product's catalog price at the time the
line was last touched, and ``total_amount`` is always recomputed from the
lines rather than adjusted incrementally.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartItemAdded,
    CartItemRemoved,
    CartItemsCheckedOut,
    CartQuantityUpdated,
)
from ordering.domain import ordering


def _line_subtotal(quantity, unit_price):
    return round(quantity * unit_price, 2)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    shop_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            total_amount=0.0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.items

    def find_item(self, item_id):
        """Return the line with the given id, or raise ObjectNotFoundError."""
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError({"item_id": [f"Item {item_id} not found in cart"]})
        return item

    def _recalculate_total(self):
        self.total_amount = round(sum(item.subtotal for item in self.items), 2)
        self.updated_at = datetime.now(UTC)

    @staticmethod
    def _assert_quantity(quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, shop_id, product_id, quantity, unit_price, product_name=None):
        """Add a product, or top up its existing line and re-price it at ``unit_price``."""
        self._assert_quantity(quantity)

        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)

        if existing:
            existing.quantity += quantity
            existing.unit_price = unit_price
            existing.subtotal = _line_subtotal(existing.quantity, unit_price)
            if product_name:
                existing.product_name = product_name
            item_id = str(existing.id)
        else:
            item = CartItem(
                shop_id=shop_id,
                product_id=product_id,
                product_name=product_name,
                quantity=quantity,
                unit_price=unit_price,
                subtotal=_line_subtotal(quantity, unit_price),
                added_at=datetime.now(UTC),
            )
            self.add_items(item)
            item_id = str(item.id)

        self._recalculate_total()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                item_id=item_id,
                shop_id=str(shop_id),
                product_id=str(product_id),
                quantity=quantity,
                unit_price=unit_price,
                total_amount=self.total_amount,
            )
        )
        return item_id

    def update_item_quantity(self, item_id, new_quantity, unit_price):
        """Set a line's quantity, re-pricing it at ``unit_price``. Zero is not a removal."""
        item = self.find_item(item_id)
        self._assert_quantity(new_quantity)

        previous_quantity = item.quantity
        item.quantity = new_quantity
        item.unit_price = unit_price
        item.subtotal = _line_subtotal(new_quantity, unit_price)
        self._recalculate_total()

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                total_amount=self.total_amount,
            )
        )

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self._recalculate_total()

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                total_amount=self.total_amount,
            )
        )

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def select_items(self, item_ids=None):
        """Return the checkout working set: every line, or only the selected ones."""
        if not item_ids:
            return list(self.items)
        wanted = {str(i) for i in item_ids}
        return [item for item in self.items if str(item.id) in wanted]

    def consume(self, item_ids, order_id):
        """Drop the lines taken by an order. Untouched lines keep their subtotals."""
        consumed = {str(i) for i in item_ids}
        for item in [i for i in self.items if str(i.id) in consumed]:
            self.remove_items(item)
        self._recalculate_total()

        self.raise_(
            CartItemsCheckedOut(
                cart_id=str(self.id),
                order_id=str(order_id),
                item_ids=json.dumps(sorted(consumed)),
                remaining_items=len(self.items),
                total_amount=self.total_amount,
            )
        )
