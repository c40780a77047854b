from __future__ import annotations

import logging

import typer

from . import profile, token

app = typer.Typer(help="Azure AD username/password tokens")

app.add_typer(profile.app, name="profile")
token.register(app)


@app.callback()
def common(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize shared Typer context state."""

    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def main() -> None:
    app()


__all__ = ["app", "main", "profile", "token"]
