"""
Domain errors raised by the deal store and the routing layer.

Each error carries the fixed message returned to clients in the
``error`` field of the JSON body.  The handlers registered in
``main.create_app`` translate them into HTTP 400 responses.
"""

NOT_FOUND_MESSAGE = "Could not find this id"
INVALID_PAYLOAD_MESSAGE = "Empty or missing properties and/or values"
INVALID_ID_MESSAGE = "Invalid id"


class DealError(Exception):
    """Base class for deal errors surfaced to API clients."""

    message = "Deal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class DealNotFoundError(DealError):
    """The requested deal id is not in the collection."""

    message = NOT_FOUND_MESSAGE


class DealValidationError(DealError):
    """A payload or identifier failed validation."""

    message = INVALID_PAYLOAD_MESSAGE
