from __future__ import annotations

import pytest

from aadpass.secrets import (
    SecretSpec,
    build_password_keyring_ref,
    get_secret,
    store_keyring_secret,
)


class StubKeyring:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.stored: dict[tuple[str, str], str] = {}

    def get_password(self, service_name: str, username: str) -> str | None:
        self.calls.append((service_name, username))
        return self.stored.get((service_name, username), "keyring-secret")

    def set_password(self, service_name: str, username: str, password: str) -> None:
        self.stored[(service_name, username)] = password


def test_get_secret_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AAD_PASSWORD", "super-secret")
    assert get_secret(SecretSpec(backend="env", ref="AAD_PASSWORD")) == "super-secret"


def test_get_secret_keyring(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = StubKeyring()
    monkeypatch.setattr("aadpass.secrets._load_keyring", lambda: stub)

    assert get_secret(SecretSpec(backend="keyring", ref="svc:user")) == "keyring-secret"
    assert stub.calls == [("svc", "user")]


def test_get_secret_keyring_invalid_ref(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("aadpass.secrets._load_keyring", lambda: StubKeyring())
    assert get_secret(SecretSpec(backend="keyring", ref="missing-delimiter")) is None


def test_get_secret_keyring_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("aadpass.secrets._load_keyring", lambda: None)
    assert get_secret(SecretSpec(backend="keyring", ref="svc:user")) is None


def test_get_secret_unknown_backend() -> None:
    assert get_secret(SecretSpec(backend="vault", ref="x")) is None


def test_store_keyring_secret_round_trip(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = StubKeyring()
    monkeypatch.setattr("aadpass.secrets._load_keyring", lambda: stub)
    ref = build_password_keyring_ref("work")

    assert ref == "aadpass:work"
    assert store_keyring_secret(ref, "pw") == (True, None)
    assert get_secret(SecretSpec(backend="keyring", ref=ref)) == "pw"


def test_store_keyring_secret_reports_missing_module(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("aadpass.secrets._load_keyring", lambda: None)
    assert store_keyring_secret("aadpass:work", "pw") == (False, "module-unavailable")
