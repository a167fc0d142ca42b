"""
Domain exceptions raised by the store and the services.

Each exception carries the HTTP status code the API layer should
answer with.  Endpoints translate them into ``HTTPException`` so that
the application‑wide handlers in ``main`` render the uniform
``{"success": false, "message": ...}`` body.
"""

from fastapi import status


class MarketplaceError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    """Required input is missing or cannot be interpreted."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class NotFoundError(MarketplaceError):
    """No listing carries the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AlreadySoldError(MarketplaceError):
    """The listing has already been marked as sold."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already sold"


class StoreError(MarketplaceError):
    default_message = "Listing store failure"


class StoreReadError(StoreError):
    default_message = "Failed to read listings"


class StoreWriteError(StoreError):
    default_message = "Failed to write listings"


class RelayError(MarketplaceError):
    """The outbound email relay rejected or failed to deliver a message."""

    default_message = "Failed to send email"
