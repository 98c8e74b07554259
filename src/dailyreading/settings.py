"""Configuration helpers for the daily reading service."""

from __future__ import annotations

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_POETRY_URL = "https://poetrydb.org"
DEFAULT_TEXT_SERVICE_URL = "https://en.wikisource.org/w/api.php"
DEFAULT_USER_AGENT = "dailyreading/0.1 (+https://poetrydb.org; daily reading selector)"


class Settings(BaseModel):
    """Runtime configuration loaded from env vars with sensible defaults."""

    log_level: str = "INFO"
    timezone: str = "UTC"
    poetry_base_url: str = DEFAULT_POETRY_URL
    text_service_url: str = DEFAULT_TEXT_SERVICE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = Field(default=20.0, gt=0)
    max_concurrency: int = Field(default=5, ge=1)

    # Selection and shaping policy. Defaults keep the historical values.
    poet_fan_out: int = Field(default=10, ge=1)
    per_poet_cap: int = Field(default=10, ge=1)
    min_lines: int = Field(default=4, ge=1)
    max_lines: int = Field(default=50, ge=1)
    essay_multiplier: int = 7
    word_budget: int = Field(default=2500, ge=1)
    min_paragraphs: int = Field(default=6, ge=0)
    max_paragraphs: int = Field(default=20, ge=1)

    @field_validator("essay_multiplier")
    @classmethod
    def _odd_multiplier(cls, value: int) -> int:
        if value == 1 or value % 2 == 0:
            raise ValueError("essay_multiplier must be an odd integer other than 1")
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "Settings":
        if self.min_lines > self.max_lines:
            raise ValueError("min_lines must not exceed max_lines")
        if self.min_paragraphs > self.max_paragraphs:
            raise ValueError("min_paragraphs must not exceed max_paragraphs")
        return self

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def load(cls) -> "Settings":
        load_dotenv()
        env = os.environ
        overrides: dict[str, str] = {}
        for field_name in cls.model_fields:
            key = f"DAILYREADING_{field_name.upper()}"
            if key in env:
                overrides[field_name] = env[key]
        # Short aliases kept for the URLs, matching the documented variables.
        if "DAILYREADING_POETRY_URL" in env:
            overrides["poetry_base_url"] = env["DAILYREADING_POETRY_URL"]
        return cls(**overrides)


def get_settings() -> Settings:
    """Convenience accessor for lazy modules."""
    return Settings.load()
