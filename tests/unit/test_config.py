"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from flow_store.config import FlowSettings

_ENV_VARS = [
    "WORKFLOW_SERVICE_URL",
    "WORKFLOW_SERVICE_TOKEN",
    "WORKFLOW_SERVICE_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "FLOW_EXPORT_DIR",
    "FLOW_EXPORT_EXTENSION",
    "FLOW_DEFAULT_TITLE",
    "FLOW_DEFAULT_MODEL",
]


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = FlowSettings()

    assert settings.service_url == "http://localhost:3000/api"
    assert settings.service_token == ""
    assert settings.service_timeout_seconds == 30.0
    assert settings.log_level == "INFO"
    assert settings.export_dir == Path(".")
    assert settings.export_extension == "yml"
    assert settings.default_model == "gpt-3.5-turbo"


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "WORKFLOW_SERVICE_URL=https://flows.example.test/api",
                "WORKFLOW_SERVICE_TOKEN=test-token",
                "LOG_LEVEL=DEBUG",
                "FLOW_EXPORT_EXTENSION=.yaml",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = FlowSettings()

    assert settings.service_url == "https://flows.example.test/api"
    assert settings.service_token == "test-token"
    assert settings.log_level == "DEBUG"
    assert settings.export_extension == "yaml"


def test_environment_overrides_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("FLOW_DEFAULT_TITLE=From file\n", encoding="utf-8")
    monkeypatch.setenv("FLOW_DEFAULT_TITLE", "From env")

    assert FlowSettings().default_title == "From env"


def test_empty_service_url_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKFLOW_SERVICE_URL", "   ")

    with pytest.raises(ValidationError):
        FlowSettings()


def test_timeout_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKFLOW_SERVICE_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        FlowSettings()
