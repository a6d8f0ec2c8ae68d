"""Runtime settings for the proxy, loaded from ``GEMINI_*`` environment variables."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from planner_proxy.core.types import DEFAULT_API_BASE_URL, DEFAULT_MODEL_ID


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google AI API key sent upstream as the 'key' query parameter",
    )

    model: str = Field(
        default=DEFAULT_MODEL_ID,
        description="Gemini model identifier",
        min_length=1,
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the generative language API",
    )

    # None leaves the timeout to the hosting environment.
    timeout_seconds: float | None = Field(default=None, gt=0)

    log_level: str = Field(default="INFO")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs at INFO, and ours carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
