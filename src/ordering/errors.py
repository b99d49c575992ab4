"""Ordering error kinds that protean does not ship.

``NotFound`` and ``InvalidArgument`` use protean's own
``ObjectNotFoundError`` and ``ValidationError``. The remaining kinds follow
the same ``messages`` shape (field name -> list of messages) so the API layer
can render all of them uniformly.
"""


class OrderingError(Exception):
    """Base class for ordering errors surfaced directly to the caller."""

    def __init__(self, messages: dict):
        self.messages = messages
        super().__init__(messages)


class PermissionDeniedError(OrderingError):
    """The acting customer or shop does not own the resource."""


class ConflictError(OrderingError):
    """The request conflicts with catalog state (unverified shop, foreign product)."""


class InvalidStateError(OrderingError):
    """The operation is not valid for the aggregate's current state.

    ``current_status`` is populated for order transitions so the caller can
    react to the status it actually found.
    """

    def __init__(self, messages: dict, current_status: str | None = None):
        self.current_status = current_status
        super().__init__(messages)
