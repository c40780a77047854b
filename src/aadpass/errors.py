from __future__ import annotations
from typing import Any, Optional

class AadpassError(Exception):
    """Base error for aadpass."""

class InvalidArgumentError(AadpassError, ValueError):
    pass

class AuthError(AadpassError):
    def __init__(
        self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None
    ) -> None:
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
        self.status_code = status_code
        self.details = details

class MalformedResponseError(AadpassError):
    """Raised when the identity endpoint returns a body that is not a token response."""
