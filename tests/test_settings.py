from __future__ import annotations

import pytest
from pydantic import ValidationError

from aadpass.errors import InvalidArgumentError
from aadpass.settings import (
    ActiveDirectoryServiceSettings,
    get_azure_china_settings,
    get_azure_german_settings,
    get_azure_settings,
    get_azure_us_government_settings,
    get_settings,
    list_clouds,
)


def test_public_cloud_preset() -> None:
    settings = get_azure_settings()
    assert settings.authentication_endpoint == "https://login.microsoftonline.com/"
    assert settings.token_audience == "https://management.core.windows.net/"


def test_sovereign_cloud_presets() -> None:
    assert get_azure_china_settings().authentication_endpoint == "https://login.chinacloudapi.cn/"
    assert get_azure_german_settings().token_audience == "https://management.core.cloudapi.de/"
    assert (
        get_azure_us_government_settings().authentication_endpoint
        == "https://login.microsoftonline.us/"
    )
    assert set(list_clouds()) == {"azure", "china", "german", "us-government"}


def test_get_settings_applies_overrides() -> None:
    settings = get_settings("Azure", authentication_endpoint="https://adfs.local.azurestack.external/adfs/")
    assert settings.authentication_endpoint == "https://adfs.local.azurestack.external/adfs/"
    assert settings.token_audience == "https://management.core.windows.net/"


def test_get_settings_without_overrides_returns_preset() -> None:
    assert get_settings("china") is get_azure_china_settings()


def test_unknown_cloud_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        get_settings("mars")


def test_settings_are_frozen_and_non_empty() -> None:
    settings = get_azure_settings()
    with pytest.raises(ValidationError):
        settings.token_audience = "changed"
    with pytest.raises(ValidationError):
        ActiveDirectoryServiceSettings(authentication_endpoint=" ", token_audience="aud")


@pytest.mark.parametrize("override", ["", "   "])
def test_empty_override_is_rejected(override: str) -> None:
    with pytest.raises(InvalidArgumentError):
        get_settings("azure", authentication_endpoint=override)
    with pytest.raises(InvalidArgumentError):
        get_settings("azure", token_audience=override)
