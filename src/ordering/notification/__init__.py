"""Notification sink factory.

Provides get_sink() / set_sink() so the order handlers emit through the
``NotificationSink`` port. Uses the repository-backed sink by default;
NOTIFICATION_SINK=fake selects the in-memory recorder.
"""

import os

from ordering.notification.port import NotificationSink

_current_sink: NotificationSink | None = None


def get_sink() -> NotificationSink:
    """Return the configured notification sink (singleton)."""
    global _current_sink
    if _current_sink is None:
        adapter = os.environ.get("NOTIFICATION_SINK", "repository")
        if adapter == "repository":
            from ordering.notification.repository_sink import RepositoryNotificationSink

            _current_sink = RepositoryNotificationSink()
        elif adapter == "fake":
            from ordering.notification.fake_sink import FakeNotificationSink

            _current_sink = FakeNotificationSink()
        else:
            raise ValueError(f"Unknown notification sink: {adapter}")
    return _current_sink


def set_sink(sink: NotificationSink) -> None:
    """Override the active notification sink (useful for tests)."""
    global _current_sink
    _current_sink = sink


def reset_sink() -> None:
    """Reset to the default sink."""
    global _current_sink
    _current_sink = None
