"""
Runtime configuration.

Values are read from environment variables prefixed with ``CYCLOMATIC_``
(and optionally a ``.env`` file), e.g.::

    CYCLOMATIC_LOG_LEVEL=DEBUG
    CYCLOMATIC_OUTPUT_FORMAT=json
    CYCLOMATIC_REPORT_LIMIT=25
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "WARNING"
    output_format: Literal["text", "json"] = "text"
    # Number of functions listed by the text report
    report_limit: int = 10

    model_config = SettingsConfigDict(
        env_prefix="CYCLOMATIC_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
