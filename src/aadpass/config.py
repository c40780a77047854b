from __future__ import annotations

import json
import logging
import os
import stat
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from .settings import AZURE_CLOUD, ActiveDirectoryServiceSettings, get_settings

logger = logging.getLogger(__name__)

AADPASS_DIR = os.path.expanduser(os.getenv("AADPASS_HOME", "~/.aadpass"))
CONFIG_PATH = os.path.join(AADPASS_DIR, "config.json")


def _secure_path(path: Path) -> None:
    if not path.exists():
        return

    try:
        if os.name == "nt":
            os.chmod(path, stat.S_IREAD | stat.S_IWRITE)
        else:
            mode = stat.S_IMODE(path.stat().st_mode)
            if mode & (stat.S_IRWXG | stat.S_IRWXO):
                logger.warning("Adjusted permissions for %s to 0o600", path)
            path.chmod(0o600)
    except PermissionError as exc:
        logger.warning("Unable to enforce secure permissions for %s: %s", path, exc)


@dataclass
class Profile:
    name: str
    tenant_id: str | None = None
    client_id: str | None = None
    username: str | None = None
    cloud: str = AZURE_CLOUD
    authentication_endpoint: str | None = None
    token_audience: str | None = None
    password_backend: str | None = None
    password_ref: str | None = None
    expiry_policy: str | None = None
    http_method: str | None = None

    def settings(self) -> ActiveDirectoryServiceSettings:
        """Return the Active Directory settings this profile logs in against."""

        return get_settings(
            self.cloud,
            authentication_endpoint=self.authentication_endpoint,
            token_audience=self.token_audience,
        )


_PROFILE_FIELDS = frozenset(f.name for f in fields(Profile))


def _profile_from_dict(name: str, data: dict[str, Any]) -> Profile:
    known = {k: v for k, v in data.items() if k in _PROFILE_FIELDS and k != "name"}
    return Profile(name=name, **known)


@dataclass
class ConfigData:
    default_profile: str | None = None
    profiles: dict[str, Profile] = field(default_factory=dict)


class ConfigStore:
    """JSON-backed store of login profiles. Passwords are never written here."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path else Path(CONFIG_PATH)

    def _ensure(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"default": None, "profiles": {}}
        _secure_path(self.path)
        with self.path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def _write(self, data: dict[str, Any]) -> None:
        self._ensure()
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
        tmp.replace(self.path)
        _secure_path(self.path)

    def load(self) -> ConfigData:
        raw = self._read()
        profs = {
            name: _profile_from_dict(name, data)
            for name, data in raw.get("profiles", {}).items()
        }
        return ConfigData(default_profile=raw.get("default"), profiles=profs)

    def save(self, cfg: ConfigData) -> None:
        data = {
            "default": cfg.default_profile,
            "profiles": {name: asdict(profile) for name, profile in cfg.profiles.items()},
        }
        self._write(data)

    def add_or_update_profile(self, profile: Profile, *, set_default: bool = False) -> ConfigData:
        """Persist ``profile`` and optionally set it as default."""

        cfg = self.load()
        cfg.profiles[profile.name] = profile
        if set_default or not cfg.default_profile:
            cfg.default_profile = profile.name
        self.save(cfg)
        return cfg

    def set_default_profile(self, name: str) -> ConfigData:
        """Mark the profile ``name`` as the default profile."""

        cfg = self.load()
        if name not in cfg.profiles:
            raise KeyError(f"Profile '{name}' not found")
        cfg.default_profile = name
        self.save(cfg)
        return cfg

    def delete_profile(self, name: str) -> ConfigData:
        cfg = self.load()
        if name not in cfg.profiles:
            raise KeyError(f"Profile '{name}' not found")
        del cfg.profiles[name]
        if cfg.default_profile == name:
            cfg.default_profile = None
        self.save(cfg)
        return cfg


__all__ = ["AADPASS_DIR", "CONFIG_PATH", "ConfigData", "ConfigStore", "Profile"]
