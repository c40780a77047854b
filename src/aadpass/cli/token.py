"""Commands that log in and print authorization header values."""

from __future__ import annotations

import typer
from rich.table import Table

from ..auth.password import PasswordTokenProvider
from ..errors import InvalidArgumentError
from ..http_client import TransportOptions
from ..settings import list_clouds
from .common import console, handle_cli_errors, resolve_password, resolve_profile


def register(app: typer.Typer) -> None:
    app.command("token")(token)
    app.command("clouds")(clouds)


@handle_cli_errors
def token(
    profile_name: str | None = typer.Option(
        None, "--profile", "-p", help="Profile name (defaults to the default profile)"
    ),
    password_env: str | None = typer.Option(
        None, help="Environment variable holding the password"
    ),
    raw: bool = typer.Option(False, help="Print only the token, without its scheme"),
    ca_bundle: str | None = typer.Option(None, help="CA bundle used to verify TLS"),
    timeout: float = typer.Option(60.0, help="Token request timeout in seconds"),
) -> None:
    """Log in with the profile's username/password and print the header value."""

    profile = resolve_profile(profile_name)
    if not (profile.tenant_id and profile.client_id and profile.username):
        raise InvalidArgumentError(
            f"Profile '{profile.name}' is missing tenant id, client id or username."
        )
    password = resolve_password(profile, password_env)
    provider = PasswordTokenProvider(
        profile.tenant_id,
        profile.client_id,
        profile.username,
        password,
        profile.settings(),
        transport=TransportOptions(verify=ca_bundle or True, timeout=timeout),
        expiry_policy=profile.expiry_policy or "refresh-early",
        method=profile.http_method or "GET",
    )
    header = provider.get_authentication_header()
    typer.echo(header.split(" ", 1)[1] if raw else header)


@handle_cli_errors
def clouds() -> None:
    """List the Azure clouds with built-in Active Directory settings."""

    table = Table("Cloud", "Authentication endpoint", "Token audience")
    for name, settings in sorted(list_clouds().items()):
        table.add_row(name, settings.authentication_endpoint, settings.token_audience)
    console.print(table)


__all__ = ["register", "token", "clouds"]
