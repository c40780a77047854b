from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from importlib import import_module
from typing import Protocol, cast

KEYRING_SERVICE_NAME = "aadpass"
SUPPORTED_BACKENDS = ("env", "keyring")


class KeyringModule(Protocol):
    def get_password(self, service_name: str, username: str) -> str | None: ...

    def set_password(self, service_name: str, username: str, password: str) -> None: ...


def _load_keyring() -> KeyringModule | None:
    try:
        module = import_module("keyring")
    except ImportError:
        return None
    return cast(KeyringModule, module)


def build_password_keyring_ref(profile_name: str) -> str:
    """Return the default keyring reference holding the password of ``profile_name``."""

    return f"{KEYRING_SERVICE_NAME}:{profile_name}"


def _split_keyring_ref(ref: str) -> tuple[str, str] | None:
    parts = ref.split(":", 1)
    if len(parts) != 2:
        return None
    service, username = parts
    if not service or not username:
        return None
    return service, username


def store_keyring_secret(ref: str, secret: str) -> tuple[bool, str | None]:
    """Persist ``secret`` to the system keyring referenced by ``ref``."""

    module = _load_keyring()
    if module is None:
        return False, "module-unavailable"
    parsed = _split_keyring_ref(ref)
    if parsed is None:
        return False, "invalid-ref"
    service, username = parsed
    module.set_password(service, username, secret)
    return True, None


@dataclass
class SecretSpec:
    backend: str  # "env" or "keyring"
    ref: str  # env: VAR, keyring: SERVICE:USERNAME


def get_secret(spec: SecretSpec) -> str | None:
    backend = spec.backend.lower()
    if backend == "env":
        return os.getenv(spec.ref)
    if backend == "keyring":
        keyring_module = _load_keyring()
        if keyring_module is None:
            return None
        parsed = _split_keyring_ref(spec.ref)
        if parsed is None:
            return None
        service, username = parsed
        getter = cast(Callable[[str, str], str | None], keyring_module.get_password)
        return getter(service, username)
    return None


__all__ = [
    "KEYRING_SERVICE_NAME",
    "SUPPORTED_BACKENDS",
    "SecretSpec",
    "build_password_keyring_ref",
    "get_secret",
    "store_keyring_secret",
]
