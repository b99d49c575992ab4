"""Notification aggregate (CQRS): a message addressed to a customer or a shop.

Notifications are written as a side effect of order placement and order
status changes. Reading them and marking them read belongs to the
notification subsystem, which is outside this context.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from ordering.domain import ordering


class NotificationType(Enum):
    ORDER = "order"
    PAYMENT = "payment"
    SYSTEM = "system"


class RecipientRole(Enum):
    CUSTOMER = "customer"
    SHOP = "shop"


@ordering.aggregate
class Notification:
    recipient_id: Identifier(required=True)
    recipient_role: String(choices=RecipientRole, required=True)
    notification_type: String(choices=NotificationType, default=NotificationType.ORDER.value)
    title: String(required=True, max_length=255)
    message: Text(required=True)
    order_id: Identifier()
    is_read: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def create(
        cls,
        recipient_id,
        recipient_role,
        title,
        message,
        notification_type=NotificationType.ORDER.value,
        order_id=None,
    ):
        return cls(
            recipient_id=recipient_id,
            recipient_role=recipient_role,
            notification_type=notification_type,
            title=title,
            message=message,
            order_id=order_id,
            is_read=False,
            created_at=datetime.now(UTC),
        )
