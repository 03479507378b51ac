"""Application configuration via pydantic-settings.

Reads from environment variables and .env file. A single Settings instance is
built by create_app() and handed to request handlers through dependencies.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in example .env files that must not count as credentials
PLACEHOLDER_VALUES = frozenset(
    {
        "your-api-key",
        "your_api_key",
        "your_api_key_here",
        "your-api-key-here",
        "changeme",
        "xxx",
        "sk-ant-...",
    }
)


def _is_set(value: str) -> bool:
    value = value.strip()
    return bool(value) and value.lower() not in PLACEHOLDER_VALUES


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Anthropic
    anthropic_api_key: str = ""
    analysis_model: str | None = None
    research_model: str = "claude-sonnet-4-5-20250929"
    analysis_max_turns: int = 5
    research_max_turns: int = 15

    # Gong
    gong_access_key: str = Field(
        default="",
        validation_alias=AliasChoices("gong_access_key", "gong_api_key"),
    )
    gong_access_key_secret: str = ""
    gong_api_base_url: str = "https://api.gong.io/v2"
    gong_calls_window_days: int = 30
    gong_timeout_seconds: float = 30.0

    # Frontend
    frontend_url: str = "http://localhost:3000"

    log_level: str = "INFO"

    @property
    def anthropic_configured(self) -> bool:
        return _is_set(self.anthropic_api_key)

    @property
    def gong_configured(self) -> bool:
        return _is_set(self.gong_access_key) and _is_set(self.gong_access_key_secret)
