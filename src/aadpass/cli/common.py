from __future__ import annotations

import json
import os
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import httpx
import typer
from rich.console import Console

from ..config import ConfigStore, Profile
from ..errors import AadpassError, AuthError
from ..secrets import SecretSpec, get_secret

console = Console()


def _render_auth_error(exc: AuthError) -> None:
    console.print(f"[red]Error:[/red] Authentication failed: {exc}")
    details = exc.details
    if details:
        snippet = json.dumps(details, indent=2) if isinstance(details, dict) else details
        console.print(str(snippet))


CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except AuthError as exc:
            _render_auth_error(exc)
            console.print(
                "Check the profile with `aadpass profile show NAME` and the password source."
            )
            raise typer.Exit(1) from None
        except AadpassError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from None
        except httpx.TransportError as exc:
            console.print(f"[red]Error:[/red] Could not reach the identity endpoint: {exc}")
            raise typer.Exit(1) from None
        except Exception as exc:
            if os.getenv("AADPASS_DEBUG"):
                raise
            console.print(f"[red]Error:[/red] Unexpected failure: {exc}")
            console.print("Set AADPASS_DEBUG=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


def resolve_profile(name: str | None, *, store: ConfigStore | None = None) -> Profile:
    """Return the profile called ``name`` or the default profile."""

    cfg = (store or ConfigStore()).load()
    profile_name = name or cfg.default_profile
    if not profile_name:
        raise typer.BadParameter("No profile given and no default profile configured.")
    profile = cfg.profiles.get(profile_name)
    if profile is None:
        raise typer.BadParameter(f"Profile '{profile_name}' not found")
    return profile


def resolve_password(profile: Profile, password_env: str | None = None) -> str:
    """Resolve the login password for ``profile``.

    Resolution order is:

    1. The environment variable named by ``password_env``.
    2. The secret referenced by ``password_backend``/``password_ref``.
    3. An interactive hidden prompt.
    """

    if password_env:
        value = os.getenv(password_env)
        if not value:
            raise typer.BadParameter(f"Environment variable {password_env} is not set.")
        return value

    if profile.password_backend and profile.password_ref:
        secret = get_secret(SecretSpec(backend=profile.password_backend, ref=profile.password_ref))
        if secret:
            return secret

    return typer.prompt(f"Password for {profile.username}", hide_input=True)


__all__ = [
    "console",
    "handle_cli_errors",
    "resolve_password",
    "resolve_profile",
]
