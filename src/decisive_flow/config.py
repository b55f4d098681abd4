"""Runtime settings.

Configuration is loaded from:
- environment variables prefixed with `DECISIVE_FLOW_`
- and a local `.env` file (if present)

Notes:
    Pydantic-settings supports overriding the env file in tests via:
    `FlowSettings(_env_file=path_to_env)`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class FlowSettings(BaseSettings):
    """Settings for running workflows from the command line.

    Environment variables:
    - DECISIVE_FLOW_LOG_LEVEL   (optional)
    - DECISIVE_FLOW_LOG_FORMAT  (optional, `json` or `text`)
    - DECISIVE_FLOW_TRACE       (optional)
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )
    trace: bool = Field(
        default=False,
        description="Report every visited node while a workflow runs",
    )

    model_config = SettingsConfigDict(
        env_prefix="DECISIVE_FLOW_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {value!r}")
        return level
