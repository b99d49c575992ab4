"""Runtime settings for the Ordering domain, read from the environment at call time."""

import os
from datetime import timedelta

DEFAULT_CANCELLATION_WINDOW_SECONDS = 10


def cancellation_window() -> timedelta:
    """How long after placement a customer may still cancel a pending order."""
    seconds = os.environ.get("ORDER_CANCELLATION_WINDOW_SECONDS", str(DEFAULT_CANCELLATION_WINDOW_SECONDS))
    return timedelta(seconds=float(seconds))
