from __future__ import annotations

import sys
from pathlib import Path

import pytest
import respx
from typer.testing import CliRunner


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from aadpass.settings import ActiveDirectoryServiceSettings  # noqa: E402


@pytest.fixture
def settings() -> ActiveDirectoryServiceSettings:
    return ActiveDirectoryServiceSettings(
        authentication_endpoint="https://login.example.test/",
        token_audience="https://management.example.test/",
    )


@pytest.fixture
def respx_mock():
    with respx.mock(assert_all_called=False) as respx_mgr:
        yield respx_mgr


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config.json"
    monkeypatch.setattr("aadpass.config.CONFIG_PATH", str(path))
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
