"""
Errors a request can end with. Each one carries the HTTP status it maps to
and the single message returned to the caller.
"""


class CustomBaseError(Exception):
    """Base class for expected failures; @Logger.io logs these without a traceback"""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidInputError(CustomBaseError):
    """Malformed path parameter or request body."""

    status_code = 400


class NotFoundError(CustomBaseError):
    """Unknown event, or one or more unknown spot names of an event."""

    status_code = 404


class DomainError(CustomBaseError):
    """Request is well-formed but the catalog state refuses it (spot already reserved)."""

    status_code = 400


class CatalogLoadError(Exception):
    """Startup data could not be turned into a consistent catalog. Never mapped to HTTP."""
