"""Request building for the Azure AD resource owner password credentials grant."""

from __future__ import annotations

from urllib.parse import quote

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
PASSWORD_GRANT_TYPE = "password"


def build_token_url(authentication_endpoint: str, tenant_id: str) -> str:
    """Return ``{authentication_endpoint}{tenant_id}/oauth2/token``.

    The endpoint is expected to carry its trailing slash, as the cloud presets do.
    """

    return f"{authentication_endpoint}{tenant_id}/oauth2/token"


def _encode_form(pairs: list[tuple[str, str]]) -> str:
    # quote() with no safe characters leaves only RFC 3986 unreserved characters.
    return "&".join(f"{key}={quote(value, safe='')}" for key, value in pairs)


def build_token_request_body(resource: str, client_id: str, username: str, password: str) -> str:
    """Return the urlencoded form body for the password grant."""

    return _encode_form(
        [
            ("resource", resource),
            ("client_id", client_id),
            ("username", username),
            ("password", password),
            ("grant_type", PASSWORD_GRANT_TYPE),
        ]
    )


__all__ = [
    "FORM_CONTENT_TYPE",
    "PASSWORD_GRANT_TYPE",
    "build_token_request_body",
    "build_token_url",
]
