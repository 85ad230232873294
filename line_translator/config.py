"""Process configuration read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORT = "8080"
DEFAULT_MODEL = "gpt-3.5-turbo"

# Required settings, keyed by environment variable name
_REQUIRED = {
    "LINE_CHANNEL_SECRET": "line_channel_secret",
    "LINE_CHANNEL_TOKEN": "line_channel_token",
    "OPENAI_API_KEY": "openai_api_key",
}


class ConfigError(ValueError):
    """Raised when a required setting is missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required settings: {', '.join(missing)}")


class Settings(BaseModel):
    """Read-only settings, populated once at process start."""

    model_config = ConfigDict(frozen=True)

    line_channel_secret: str = ""
    line_channel_token: str = ""
    openai_api_key: str = ""
    port: str = DEFAULT_PORT
    openai_model: str = DEFAULT_MODEL
    webhook_workers: int = Field(default=4, ge=1)
    webhook_queue_size: int = Field(default=100, ge=1)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment. Empty values count as unset."""
        env = os.environ if environ is None else environ

        def _get(name: str, default: str = "") -> str:
            return env.get(name) or default

        return cls(
            line_channel_secret=_get("LINE_CHANNEL_SECRET"),
            line_channel_token=_get("LINE_CHANNEL_TOKEN"),
            openai_api_key=_get("OPENAI_API_KEY"),
            port=_get("PORT", DEFAULT_PORT),
            openai_model=_get("OPENAI_MODEL", DEFAULT_MODEL),
            webhook_workers=int(_get("WEBHOOK_WORKERS", "4")),
            webhook_queue_size=int(_get("WEBHOOK_QUEUE_SIZE", "100")),
            log_level=_get("LOG_LEVEL", "INFO").upper(),
        )

    def require_credentials(self) -> None:
        """Raise ConfigError naming every required variable that is empty."""
        missing = [env for env, attr in _REQUIRED.items() if not getattr(self, attr)]
        if missing:
            raise ConfigError(missing)
