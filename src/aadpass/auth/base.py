from __future__ import annotations
from abc import ABC, abstractmethod

from ..errors import InvalidArgumentError

DEFAULT_SCHEME = "Bearer"

class TokenProvider(ABC):
    @abstractmethod
    def get_authentication_header(self) -> str:
        """Return the value for an ``Authorization`` header, e.g. ``Bearer <token>``."""

class StringTokenProvider(TokenProvider):
    def __init__(self, token: str, token_type: str = DEFAULT_SCHEME) -> None:
        if not token:
            raise InvalidArgumentError("Token cannot be empty")
        self._token = token
        self._token_type = token_type
    def get_authentication_header(self) -> str:
        return f"{self._token_type} {self._token}"
