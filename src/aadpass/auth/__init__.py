from __future__ import annotations

from .base import StringTokenProvider, TokenProvider
from .password import CachedToken, ExpiryPolicy, PasswordTokenProvider

__all__ = [
    "CachedToken",
    "ExpiryPolicy",
    "PasswordTokenProvider",
    "StringTokenProvider",
    "TokenProvider",
]
