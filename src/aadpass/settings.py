"""Active Directory endpoint settings for the public and sovereign Azure clouds."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidArgumentError


class ActiveDirectoryServiceSettings(BaseModel):
    """Authentication endpoint and token audience of an Azure AD deployment."""

    model_config = ConfigDict(frozen=True)

    authentication_endpoint: str
    token_audience: str

    @field_validator("authentication_endpoint", "token_audience")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


AZURE_CLOUD = "azure"
AZURE_CHINA_CLOUD = "china"
AZURE_GERMAN_CLOUD = "german"
AZURE_US_GOVERNMENT_CLOUD = "us-government"

_CLOUD_SETTINGS: dict[str, ActiveDirectoryServiceSettings] = {
    AZURE_CLOUD: ActiveDirectoryServiceSettings(
        authentication_endpoint="https://login.microsoftonline.com/",
        token_audience="https://management.core.windows.net/",
    ),
    AZURE_CHINA_CLOUD: ActiveDirectoryServiceSettings(
        authentication_endpoint="https://login.chinacloudapi.cn/",
        token_audience="https://management.core.chinacloudapi.cn/",
    ),
    AZURE_GERMAN_CLOUD: ActiveDirectoryServiceSettings(
        authentication_endpoint="https://login.microsoftonline.de/",
        token_audience="https://management.core.cloudapi.de/",
    ),
    AZURE_US_GOVERNMENT_CLOUD: ActiveDirectoryServiceSettings(
        authentication_endpoint="https://login.microsoftonline.us/",
        token_audience="https://management.core.usgovcloudapi.net/",
    ),
}


def get_azure_settings() -> ActiveDirectoryServiceSettings:
    return _CLOUD_SETTINGS[AZURE_CLOUD]


def get_azure_china_settings() -> ActiveDirectoryServiceSettings:
    return _CLOUD_SETTINGS[AZURE_CHINA_CLOUD]


def get_azure_german_settings() -> ActiveDirectoryServiceSettings:
    return _CLOUD_SETTINGS[AZURE_GERMAN_CLOUD]


def get_azure_us_government_settings() -> ActiveDirectoryServiceSettings:
    return _CLOUD_SETTINGS[AZURE_US_GOVERNMENT_CLOUD]


def list_clouds() -> dict[str, ActiveDirectoryServiceSettings]:
    """Return a copy of the known cloud presets keyed by name."""

    return dict(_CLOUD_SETTINGS)


def get_settings(
    cloud: str = AZURE_CLOUD,
    *,
    authentication_endpoint: str | None = None,
    token_audience: str | None = None,
) -> ActiveDirectoryServiceSettings:
    """Resolve ``cloud`` to its preset and apply endpoint overrides.

    Overrides exist for Azure Stack deployments, whose login endpoint and
    audience are specific to the installation.
    """

    preset = _CLOUD_SETTINGS.get(cloud.lower())
    if preset is None:
        known = ", ".join(sorted(_CLOUD_SETTINGS))
        raise InvalidArgumentError(f"Unknown cloud '{cloud}'; expected one of: {known}")
    if authentication_endpoint is None and token_audience is None:
        return preset
    try:
        return ActiveDirectoryServiceSettings(
            authentication_endpoint=(
                preset.authentication_endpoint
                if authentication_endpoint is None
                else authentication_endpoint
            ),
            token_audience=preset.token_audience if token_audience is None else token_audience,
        )
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid Active Directory settings override: {exc}") from exc


__all__ = [
    "AZURE_CHINA_CLOUD",
    "AZURE_CLOUD",
    "AZURE_GERMAN_CLOUD",
    "AZURE_US_GOVERNMENT_CLOUD",
    "ActiveDirectoryServiceSettings",
    "get_azure_china_settings",
    "get_azure_german_settings",
    "get_azure_settings",
    "get_azure_us_government_settings",
    "get_settings",
    "list_clouds",
]
