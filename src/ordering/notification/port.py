"""Port for delivering order lifecycle notifications."""

from abc import ABC, abstractmethod


class NotificationSink(ABC):
    """Fire-and-forget recipient of order lifecycle notifications."""

    @abstractmethod
    def emit(
        self,
        recipient_id: str,
        recipient_role: str,
        title: str,
        message: str,
        notification_type: str,
        order_id: str | None = None,
    ) -> str | None:
        """Record a notification for the recipient.

        Returns:
            The notification id, when the sink assigns one.
        """
        ...
