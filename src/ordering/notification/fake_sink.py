"""Fake notification sink — records notifications in memory for testing."""

from uuid import uuid4

from ordering.notification.port import NotificationSink


class FakeNotificationSink(NotificationSink):
    """Sink that keeps emitted notifications in a list, or fails on demand."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification store unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification store unavailable"):
        """Configure the fake sink behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def emit(
        self,
        recipient_id: str,
        recipient_role: str,
        title: str,
        message: str,
        notification_type: str,
        order_id: str | None = None,
    ) -> str | None:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        notification_id = f"notif-{uuid4().hex[:12]}"
        self.sent.append(
            {
                "notification_id": notification_id,
                "recipient_id": str(recipient_id),
                "recipient_role": recipient_role,
                "title": title,
                "message": message,
                "notification_type": notification_type,
                "order_id": str(order_id) if order_id else None,
            }
        )
        return notification_id

    def sent_to(self, recipient_id) -> list[dict]:
        return [n for n in self.sent if n["recipient_id"] == str(recipient_id)]

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification store unavailable"
