"""Repository-backed notification sink that stores Notification aggregates."""

from protean.core.unit_of_work import UnitOfWork
from protean.utils.globals import current_domain

from ordering.notification.notification import Notification
from ordering.notification.port import NotificationSink


class RepositoryNotificationSink(NotificationSink):
    """Persists each notification through the Notification repository.

    The write runs in its own unit of work, or joins the event handler's,
    which only starts after the order change has committed. A failing write
    raises inside ``emit`` and never reaches the order's transaction.
    """

    def emit(
        self,
        recipient_id: str,
        recipient_role: str,
        title: str,
        message: str,
        notification_type: str,
        order_id: str | None = None,
    ) -> str | None:
        notification = Notification.create(
            recipient_id=recipient_id,
            recipient_role=recipient_role,
            title=title,
            message=message,
            notification_type=notification_type,
            order_id=order_id,
        )
        with UnitOfWork():
            current_domain.repository_for(Notification).add(notification)
        return str(notification.id)
