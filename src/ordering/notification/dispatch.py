"""Best-effort notification dispatch.

Emitting a notification is never part of the transition it reports: a
failing sink is logged and ignored, and the caller's state change stands.
"""

import structlog

from ordering.notification import get_sink
from ordering.notification.notification import NotificationType

logger = structlog.get_logger(__name__)


def emit(
    recipient_id,
    recipient_role: str,
    title: str,
    message: str,
    order_id=None,
    notification_type: str = NotificationType.ORDER.value,
) -> str | None:
    """Send one notification through the active sink without propagating failures.

    Returns:
        The notification id, or None when the sink failed.
    """
    try:
        return get_sink().emit(
            recipient_id=str(recipient_id),
            recipient_role=recipient_role,
            title=title,
            message=message,
            notification_type=notification_type,
            order_id=str(order_id) if order_id else None,
        )
    except Exception as e:
        logger.warning(
            "Notification dispatch failed",
            recipient_id=str(recipient_id),
            recipient_role=recipient_role,
            order_id=str(order_id) if order_id else None,
            title=title,
            error=str(e),
        )
        return None
