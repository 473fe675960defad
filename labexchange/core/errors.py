"""Error taxonomy for the listing lifecycle.

Controllers catch these at their boundary and turn them into notifications and
navigation. The HTTP adapters translate backend status codes into them.
"""

from labexchange.core.results import FieldError


class LabExchangeError(Exception):
    """Base class for all marketplace client errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LabExchangeError):
    """One or more fields failed sanitization or validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))
        self.errors = errors


class AuthenticationRequired(LabExchangeError):
    """The action needs a signed-in session."""


class Unauthorized(LabExchangeError):
    """The session does not own the record it tried to act on."""


class NotFound(LabExchangeError):
    """The requested record does not exist or is not visible."""


class StoreError(LabExchangeError):
    """Any other failure of a backend call. No partial write is assumed."""
