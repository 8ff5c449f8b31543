"""Domain errors raised below the API layer.

Endpoints translate these into ``HTTPException`` responses.
"""
from typing import Optional


class ParseError(ValueError):
    """A timestamp could not be parsed into a valid instant."""

    def __init__(self, value, reason: Optional[str] = None):
        self.value = value
        message = f"Invalid timestamp: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class LedgerError(Exception):
    """A read or write against the progress ledger failed."""


class AuthError(Exception):
    """The identity provider rejected a request."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthUnavailableError(AuthError):
    """The identity provider could not be reached."""

    def __init__(self, message: str):
        super().__init__(message, status_code=502)


class ContentNotFound(LookupError):
    """No lesson document exists for the requested day."""

    def __init__(self, day_number: int):
        super().__init__(f"No lesson content found for day {day_number}")
        self.day_number = day_number
