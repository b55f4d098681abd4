"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from decisive_flow.config import FlowSettings


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DECISIVE_FLOW_LOG_LEVEL", "DECISIVE_FLOW_LOG_FORMAT", "DECISIVE_FLOW_TRACE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = FlowSettings()

    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.trace is False


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "DECISIVE_FLOW_LOG_LEVEL=debug",
                "DECISIVE_FLOW_LOG_FORMAT=text",
                "DECISIVE_FLOW_TRACE=true",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = FlowSettings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"
    assert settings.trace is True


def test_environment_overrides_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("DECISIVE_FLOW_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("DECISIVE_FLOW_LOG_LEVEL", "WARNING")

    assert FlowSettings().log_level == "WARNING"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DECISIVE_FLOW_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        FlowSettings()
