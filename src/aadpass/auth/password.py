"""Username/password token provider for Azure AD and Azure Stack.

:class:`PasswordTokenProvider` exchanges a tenant, client id, username and
password for a bearer token using the OAuth2 resource owner password
credentials grant. The token is cached in memory and re-acquired once the
configured :class:`ExpiryPolicy` judges it expired.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import AuthError, InvalidArgumentError, MalformedResponseError
from ..http_client import HttpClient, TransportOptions
from .base import TokenProvider
from .token_request import FORM_CONTENT_TYPE, build_token_request_body, build_token_url

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_THRESHOLD = 5 * 60
SUPPORTED_METHODS = ("GET", "POST")
# 9999-12-31T23:59:59Z, the last second datetime can represent.
MAX_EXPIRES_ON = 253_402_300_799
LOGIN_FAILED_MESSAGE = (
    "Couldn't log in to Azure, please verify your tenant id, client id and username/password"
)


class ServiceSettings(Protocol):
    authentication_endpoint: str
    token_audience: str


class ExpiryPolicy(str, Enum):
    """How the expiration threshold is applied to a token's ``expires_on``."""

    REFRESH_EARLY = "refresh-early"
    LEGACY_GRACE = "legacy-grace"

    def is_expired(self, now: float, expires_on: float, threshold: float) -> bool:
        if self is ExpiryPolicy.LEGACY_GRACE:
            # Keeps serving the token until ``threshold`` seconds past its expiry.
            return now >= expires_on + threshold
        return now >= expires_on - threshold


@dataclass(frozen=True)
class CachedToken:
    token: str
    token_type: str
    expires_on: float

    def header(self) -> str:
        return f"{self.token_type} {self.token}"


class TokenResponse(BaseModel):
    """Fields read from a successful token endpoint response."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    token_type: str = Field(min_length=1)
    # Azure AD serialises this as a string of epoch seconds.
    expires_on: int

    @field_validator("expires_on", mode="before")
    @classmethod
    def _epoch_seconds(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("expires_on must be epoch seconds, not a boolean")
        if isinstance(value, str) and value.isascii() and value.isdigit():
            value = int(value)
        if not isinstance(value, int):
            raise ValueError("expires_on must be an integer or a string of digits")
        if value > MAX_EXPIRES_ON:
            raise ValueError(f"expires_on {value} is beyond the representable date range")
        return value


def _require(value: Any, label: str) -> None:
    if value is None or (isinstance(value, str) and not value):
        raise InvalidArgumentError(f"{label} cannot be empty")


class PasswordTokenProvider(TokenProvider):
    """Provide ``Authorization`` header values from a username/password login.

    Args:
        tenant_id: Directory (tenant) id, also known as the domain.
        client_id: Application id registered in the directory.
        username: User principal name.
        password: User password.
        settings: Object exposing ``authentication_endpoint`` and
            ``token_audience``, usually an
            :class:`~aadpass.settings.ActiveDirectoryServiceSettings`.
        transport: TLS and timeout options for the token request.
        expiry_policy: Comparison used to decide when the cached token expired.
        method: HTTP method of the token request. ``GET`` carries the form body
            on a GET request; ``POST`` is the method the OAuth2 RFC prescribes.
        expiration_threshold: Seconds applied to ``expires_on`` by the policy.
        clock: Returns the current POSIX time in seconds.

    Raises:
        InvalidArgumentError: If a credential or the settings is missing, or an
            option is not recognised.
    """

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        username: str,
        password: str,
        settings: ServiceSettings,
        *,
        transport: TransportOptions | None = None,
        expiry_policy: ExpiryPolicy | str = ExpiryPolicy.REFRESH_EARLY,
        method: str = "GET",
        expiration_threshold: float = DEFAULT_EXPIRATION_THRESHOLD,
        clock: Callable[[], float] = time.time,
    ) -> None:
        _require(tenant_id, "Tenant id")
        _require(client_id, "Client id")
        _require(username, "Username")
        _require(password, "Password")
        if settings is None:
            raise InvalidArgumentError("Azure AD settings cannot be empty")
        for attribute in ("authentication_endpoint", "token_audience"):
            if not getattr(settings, attribute, None):
                raise InvalidArgumentError(f"Azure AD settings are missing '{attribute}'")
        normalized_method = method.upper()
        if normalized_method not in SUPPORTED_METHODS:
            raise InvalidArgumentError(
                f"Unsupported token request method '{method}'; use GET or POST"
            )
        try:
            policy = ExpiryPolicy(expiry_policy)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown expiry policy '{expiry_policy}'") from exc

        self.tenant_id = tenant_id
        self.client_id = client_id
        self.username = username
        self._password = password
        self.settings = settings
        self.transport = transport or TransportOptions()
        self.expiry_policy = policy
        self.method = normalized_method
        self.expiration_threshold = expiration_threshold
        self._clock = clock
        self._cached: CachedToken | None = None
        self._lock = threading.Lock()

    @property
    def token_expires_on(self) -> datetime | None:
        cached = self._cached
        if cached is None:
            return None
        return datetime.fromtimestamp(cached.expires_on, tz=timezone.utc)

    def get_authentication_header(self) -> str:
        """Return ``"<token_type> <token>"``, acquiring a token when needed.

        Concurrent callers share a single acquisition when the cache expired.

        Raises:
            AuthError: If the identity endpoint rejects the credentials.
            MalformedResponseError: If the token response cannot be read.
            httpx.TransportError: If the identity endpoint is unreachable.
        """

        with self._lock:
            cached = self._cached
            if cached is None or self._is_expired(cached):
                cached = self._acquire_token()
            return cached.header()

    def is_token_expired(self) -> bool:
        return self._is_expired(self._cached)

    def invalidate(self) -> None:
        """Drop the cached token so the next header request logs in again."""

        with self._lock:
            self._cached = None

    def _is_expired(self, cached: CachedToken | None) -> bool:
        if cached is None:
            return True
        return self.expiry_policy.is_expired(
            self._clock(), cached.expires_on, self.expiration_threshold
        )

    def _acquire_token(self) -> CachedToken:
        url = build_token_url(self.settings.authentication_endpoint, self.tenant_id)
        body = build_token_request_body(
            self.settings.token_audience, self.client_id, self.username, self._password
        )
        logger.debug("Requesting token for tenant %s from %s", self.tenant_id, url)
        with HttpClient(self.transport) as client:
            response = client.request(
                self.method,
                url,
                content=body,
                headers={"content-type": FORM_CONTENT_TYPE},
            )
            if response.status_code != 200:
                logger.warning(
                    "Token request for tenant %s failed with HTTP %s",
                    self.tenant_id,
                    response.status_code,
                )
                try:
                    details: Any = response.json()
                except ValueError:
                    details = response.text
                raise AuthError(
                    LOGIN_FAILED_MESSAGE, status_code=response.status_code, details=details
                )
            try:
                parsed = TokenResponse.model_validate_json(response.content)
            except ValidationError as exc:
                raise MalformedResponseError(f"Unexpected token response: {exc}") from exc

        cached = CachedToken(
            token=parsed.access_token,
            token_type=parsed.token_type,
            expires_on=float(parsed.expires_on),
        )
        expires_at = datetime.fromtimestamp(cached.expires_on, tz=timezone.utc)
        self._cached = cached
        logger.info(
            "Acquired %s token for tenant %s expiring at %s",
            cached.token_type,
            self.tenant_id,
            expires_at,
        )
        return cached


__all__ = [
    "CachedToken",
    "DEFAULT_EXPIRATION_THRESHOLD",
    "ExpiryPolicy",
    "LOGIN_FAILED_MESSAGE",
    "PasswordTokenProvider",
    "TokenResponse",
]
