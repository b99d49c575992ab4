"""Order aggregate (CQRS): an immutable snapshot of a checkout plus its status.

Everything captured at placement (customer, shop, item prices, fees, payment
details) is fixed for the life of the order. Status is the only thing that
moves, and who may move it depends on the actor's role.

State Machine (8 states):
    pending → accepted → preparing → ready_for_pickup → on_the_way → delivered → claimed
    pending → cancelled                     (shop reject, or customer within the window)
    accepted/preparing/ready_for_pickup/on_the_way → cancelled   (shop)
    ready_for_pickup/delivered → claimed    (customer confirms receipt)
    cancelled, claimed: terminal
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.checkout.quote import FulfillmentOption
from ordering.domain import ordering
from ordering.errors import InvalidStateError, PermissionDeniedError
from ordering.order.actors import Actor, Role
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.settings import cancellation_window

PICKUP_ADDRESS = "Pickup at Store"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    PREPARING = "preparing"
    READY_FOR_PICKUP = "ready_for_pickup"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CLAIMED = "claimed"


class PaymentMethod(Enum):
    CASH = "cash"
    GCASH = "gcash"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class OrderAction(Enum):
    """Which command moved the order. Two actions can reach the same status."""

    ACCEPT = "accept"
    REJECT = "reject"
    UPDATE_STATUS = "update_status"
    CANCEL = "cancel"
    CLAIM = "claim"


# Edges each role may take. Up to ready_for_pickup the shop moves one step at
# a time; from there on any forward move is allowed.
_TRANSITIONS = {
    Role.SHOP: {
        OrderStatus.PENDING: {OrderStatus.ACCEPTED, OrderStatus.CANCELLED},
        OrderStatus.ACCEPTED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
        OrderStatus.PREPARING: {OrderStatus.READY_FOR_PICKUP, OrderStatus.CANCELLED},
        OrderStatus.READY_FOR_PICKUP: {
            OrderStatus.ON_THE_WAY,
            OrderStatus.DELIVERED,
            OrderStatus.CLAIMED,
            OrderStatus.CANCELLED,
        },
        OrderStatus.ON_THE_WAY: {OrderStatus.DELIVERED, OrderStatus.CLAIMED, OrderStatus.CANCELLED},
        OrderStatus.DELIVERED: {OrderStatus.CLAIMED},
    },
    Role.CUSTOMER: {
        OrderStatus.PENDING: {OrderStatus.CANCELLED},
        OrderStatus.READY_FOR_PICKUP: {OrderStatus.CLAIMED},
        OrderStatus.DELIVERED: {OrderStatus.CLAIMED},
    },
}

TERMINAL_STATES = {OrderStatus.CANCELLED, OrderStatus.CLAIMED}


def validate_order_input(fulfillment_option, payment_method, delivery_address=None, payment_reference=None):
    """Check the customer-supplied order details, in the order a client would fix them."""
    if fulfillment_option not in {o.value for o in FulfillmentOption}:
        raise ValidationError({"fulfillment_option": [f"Unknown fulfillment option: {fulfillment_option}"]})
    if payment_method not in {m.value for m in PaymentMethod}:
        raise ValidationError({"payment_method": [f"Unknown payment method: {payment_method}"]})
    if fulfillment_option == FulfillmentOption.DELIVERY.value and not (delivery_address or "").strip():
        raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})
    if payment_method == PaymentMethod.GCASH.value and not (payment_reference or "").strip():
        raise ValidationError({"payment_reference": ["GCash payments require a reference number"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A priced line of an order. The unit price is the one in force at placement."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    total_amount = Float(default=0.0)
    fulfillment_option = String(choices=FulfillmentOption, required=True)
    delivery_address = String(required=True, max_length=500)
    payment_method = String(choices=PaymentMethod, required=True)
    payment_reference = String(max_length=255)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    notes = Text()
    cancelled_by = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        shop_id,
        items_data,
        fulfillment_option,
        payment_method,
        delivery_fee=0.0,
        delivery_address=None,
        payment_reference=None,
        notes=None,
    ):
        """Create a pending order from validated checkout data.

        Args:
            customer_id: The customer placing the order.
            shop_id: The single shop every item belongs to.
            items_data: List of dicts with product_id, product_name, quantity, unit_price.
            fulfillment_option: "delivery" or "pickup".
            payment_method: "cash" or "gcash".
            delivery_fee: The shop's delivery fee; ignored for pickup.
        """
        validate_order_input(fulfillment_option, payment_method, delivery_address, payment_reference)

        is_pickup = fulfillment_option == FulfillmentOption.PICKUP.value
        is_gcash = payment_method == PaymentMethod.GCASH.value
        now = datetime.now(UTC)

        items = [
            OrderItem(
                product_id=item["product_id"],
                product_name=item.get("product_name"),
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                subtotal=round(item["quantity"] * item["unit_price"], 2),
            )
            for item in items_data
        ]
        subtotal = round(sum(i.subtotal for i in items), 2)
        fee = 0.0 if is_pickup else float(delivery_fee or 0.0)

        order = cls(
            customer_id=customer_id,
            shop_id=shop_id,
            items=items,
            subtotal=subtotal,
            delivery_fee=fee,
            total_amount=round(subtotal + fee, 2),
            fulfillment_option=fulfillment_option,
            delivery_address=PICKUP_ADDRESS if is_pickup else delivery_address.strip(),
            payment_method=payment_method,
            payment_reference=payment_reference if is_gcash else None,
            # GCash references are taken at face value; nothing verifies them.
            payment_status=PaymentStatus.COMPLETED.value if is_gcash else PaymentStatus.PENDING.value,
            status=OrderStatus.PENDING.value,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                shop_id=str(shop_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(i.product_id),
                            "product_name": i.product_name,
                            "quantity": i.quantity,
                            "unit_price": i.unit_price,
                            "subtotal": i.subtotal,
                        }
                        for i in items
                    ]
                ),
                subtotal=order.subtotal,
                delivery_fee=order.delivery_fee,
                total_amount=order.total_amount,
                fulfillment_option=fulfillment_option,
                payment_method=payment_method,
                payment_status=order.payment_status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------
    def _assert_party(self, actor: Actor):
        """The actor must be this order's customer or this order's shop."""
        owner = {
            Role.CUSTOMER: self.customer_id,
            Role.SHOP: self.shop_id,
        }.get(actor.role)
        if owner is None or str(owner) != str(actor.user_id):
            raise PermissionDeniedError({"order": [f"Order {self.id} does not belong to this {actor.role.value}"]})

    def _assert_can_transition(self, actor: Actor, target: OrderStatus):
        current = OrderStatus(self.status)
        allowed = _TRANSITIONS.get(actor.role, {}).get(current, set())
        if target not in allowed:
            raise InvalidStateError(
                {"status": [f"A {actor.role.value} cannot move an order from {current.value} to {target.value}"]},
                current_status=current.value,
            )

    def _change_status(self, actor: Actor, target: OrderStatus, action: OrderAction):
        self._assert_party(actor)
        self._assert_can_transition(actor, target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        if target == OrderStatus.CANCELLED:
            self.cancelled_by = actor.role.value

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                shop_id=str(self.shop_id),
                previous_status=previous,
                new_status=target.value,
                changed_by=actor.role.value,
                action=action.value,
                changed_at=now,
            )
        )

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATES

    # -------------------------------------------------------------------
    # Shop transitions
    # -------------------------------------------------------------------
    def accept(self, shop_id):
        """Shop takes a pending order."""
        self._assert_party(Actor.shop(shop_id))
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidStateError(
                {"status": [f"Cannot accept order with status: {self.status}"]},
                current_status=self.status,
            )
        self._change_status(Actor.shop(shop_id), OrderStatus.ACCEPTED, OrderAction.ACCEPT)

    def reject(self, shop_id):
        """Shop declines a pending order."""
        self._assert_party(Actor.shop(shop_id))
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidStateError(
                {"status": [f"Cannot reject order with status: {self.status}"]},
                current_status=self.status,
            )
        self._change_status(Actor.shop(shop_id), OrderStatus.CANCELLED, OrderAction.REJECT)

    def update_status(self, shop_id, new_status):
        """Shop moves the order along its fulfillment path, or cancels it."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Invalid order status: {new_status}"]}) from None
        self._change_status(Actor.shop(shop_id), target, OrderAction.UPDATE_STATUS)

    def cancel_by_shop(self, shop_id):
        """Shop calls off an order it can no longer fulfil. Delivered orders stay delivered."""
        self._change_status(Actor.shop(shop_id), OrderStatus.CANCELLED, OrderAction.CANCEL)

    # -------------------------------------------------------------------
    # Customer transitions
    # -------------------------------------------------------------------
    def cancel_by_customer(self, customer_id, now=None, window: timedelta | None = None):
        """Customer withdraws a pending order shortly after placing it."""
        actor = Actor.customer(customer_id)
        self._assert_party(actor)
        self._assert_can_transition(actor, OrderStatus.CANCELLED)

        now = now or datetime.now(UTC)
        window = window if window is not None else cancellation_window()
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        if now - created_at > window:
            raise InvalidStateError(
                {"status": [f"Orders can only be cancelled within {int(window.total_seconds())} seconds of placement"]},
                current_status=self.status,
            )

        self._change_status(actor, OrderStatus.CANCELLED, OrderAction.CANCEL)

    def claim(self, customer_id):
        """Customer confirms they received the order."""
        self._change_status(Actor.customer(customer_id), OrderStatus.CLAIMED, OrderAction.CLAIM)
