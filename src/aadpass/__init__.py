"""Bearer tokens for Azure AD from username/password credentials."""

from __future__ import annotations

from .auth import ExpiryPolicy, PasswordTokenProvider, StringTokenProvider, TokenProvider
from .errors import AadpassError, AuthError, InvalidArgumentError, MalformedResponseError
from .http_client import TransportOptions
from .settings import ActiveDirectoryServiceSettings, get_azure_settings, get_settings

__version__ = "0.1.0"

__all__ = [
    "AadpassError",
    "ActiveDirectoryServiceSettings",
    "AuthError",
    "ExpiryPolicy",
    "InvalidArgumentError",
    "MalformedResponseError",
    "PasswordTokenProvider",
    "StringTokenProvider",
    "TokenProvider",
    "TransportOptions",
    "get_azure_settings",
    "get_settings",
]
