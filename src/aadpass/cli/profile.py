"""Commands for inspecting and mutating stored login profiles."""

from __future__ import annotations

from enum import Enum

import typer
from rich import print

from ..auth.password import ExpiryPolicy
from ..config import ConfigStore, Profile
from ..secrets import (
    SUPPORTED_BACKENDS,
    build_password_keyring_ref,
    store_keyring_secret,
)
from ..settings import AZURE_CLOUD, get_settings
from .common import handle_cli_errors

app = typer.Typer(help="Login profiles")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@app.command("add")
@handle_cli_errors
def profile_add(
    name: str = typer.Argument(..., help="Profile name"),
    tenant_id: str = typer.Option(..., "--tenant", help="Tenant (directory) id"),
    client_id: str = typer.Option(..., "--client", help="Application (client) id"),
    username: str = typer.Option(..., help="User principal name"),
    cloud: str = typer.Option(AZURE_CLOUD, help="Azure cloud preset, see `aadpass clouds`"),
    authentication_endpoint: str | None = typer.Option(
        None, help="Override the cloud's login endpoint (Azure Stack)"
    ),
    token_audience: str | None = typer.Option(
        None, help="Override the cloud's token audience (Azure Stack)"
    ),
    password_backend: str | None = typer.Option(
        None, help="Password secret backend: env or keyring"
    ),
    password_ref: str | None = typer.Option(
        None, help="Secret reference: VAR for env, SERVICE:USERNAME for keyring"
    ),
    store_password: bool = typer.Option(
        False, help="Prompt for the password and save it to the system keyring"
    ),
    expiry_policy: ExpiryPolicy = typer.Option(
        ExpiryPolicy.REFRESH_EARLY, help="When a cached token counts as expired"
    ),
    method: HttpMethod = typer.Option(HttpMethod.GET, help="Token request HTTP method"),
    set_default: bool = typer.Option(False, help="Make this the default profile"),
) -> None:
    """Create or replace a login profile."""

    # Fails early on an unknown cloud or empty override.
    get_settings(
        cloud,
        authentication_endpoint=authentication_endpoint,
        token_audience=token_audience,
    )
    if password_backend and password_backend.lower() not in SUPPORTED_BACKENDS:
        raise typer.BadParameter(
            f"Unsupported password backend '{password_backend}'; use env or keyring."
        )
    if store_password:
        password_backend = "keyring"
        password_ref = password_ref or build_password_keyring_ref(name)
        secret = typer.prompt(f"Password for {username}", hide_input=True)
        stored, reason = store_keyring_secret(password_ref, secret)
        if not stored:
            raise typer.BadParameter(f"Could not store password in keyring ({reason}).")

    profile = Profile(
        name=name,
        tenant_id=tenant_id,
        client_id=client_id,
        username=username,
        cloud=cloud.lower(),
        authentication_endpoint=authentication_endpoint,
        token_audience=token_audience,
        password_backend=password_backend,
        password_ref=password_ref,
        expiry_policy=expiry_policy.value,
        http_method=method.value,
    )
    ConfigStore().add_or_update_profile(profile, set_default=set_default)
    print(f"Profile [bold]{name}[/bold] saved")


@app.command("list")
@handle_cli_errors
def profile_list() -> None:
    """Show all saved profiles, highlighting the default profile."""

    cfg = ConfigStore().load()
    for name in sorted(cfg.profiles):
        star = "*" if cfg.default_profile == name else " "
        print(f"{star} {name}")


@app.command("show")
@handle_cli_errors
def profile_show(name: str = typer.Argument(..., help="Profile name")) -> None:
    """Display the stored configuration for a profile."""

    cfg = ConfigStore().load()
    profile = cfg.profiles.get(name)
    if not profile:
        raise typer.BadParameter(f"Profile '{name}' not found")
    print(dict(vars(profile)))


@app.command("use")
@handle_cli_errors
def profile_use(name: str = typer.Argument(..., help="Profile name")) -> None:
    """Make ``name`` the default profile."""

    try:
        ConfigStore().set_default_profile(name)
    except KeyError:
        raise typer.BadParameter(f"Profile '{name}' not found") from None
    print(f"Default profile set to {name}")


@app.command("remove")
@handle_cli_errors
def profile_remove(name: str = typer.Argument(..., help="Profile name")) -> None:
    """Delete a saved profile."""

    try:
        ConfigStore().delete_profile(name)
    except KeyError:
        raise typer.BadParameter(f"Profile '{name}' not found") from None
    print(f"Profile {name} removed")


__all__ = [
    "app",
    "profile_add",
    "profile_list",
    "profile_remove",
    "profile_show",
    "profile_use",
]
