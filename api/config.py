"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Weight given to the narrative analyzer when blending with the rule-based score
NARRATIVE_SCORE_WEIGHT = 0.6
RULE_BASED_SCORE_WEIGHT = 0.4


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Fetch
    fetch_timeout_seconds: float = 20.0
    fetch_max_redirects: int = 5
    fetch_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Check battery
    check_workers: int = 0  # 0 runs checks sequentially

    # Narrative analyzer
    anthropic_api_key: str | None = None
    openrouter_api_key: str | None = None
    narrative_provider: Literal["anthropic", "openrouter"] = "anthropic"
    narrative_model: str = "claude-sonnet-4-20250514"
    narrative_timeout_seconds: float = 45.0
    narrative_max_chars: int = 8000
    narrative_max_tokens: int = 4000

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 10  # Analyses per window per client
    rate_limit_window_seconds: int = 3600

    # Observability
    sentry_dsn: str | None = None
    sentry_traces_sample_rate: float | None = None  # None: 0.1 in production, else 1.0
    metrics_enabled: bool = True

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"

    @property
    def narrative_api_key(self) -> str | None:
        """API key for the configured narrative provider."""
        if self.narrative_provider == "openrouter":
            return self.openrouter_api_key
        return self.anthropic_api_key

    @property
    def narrative_enabled(self) -> bool:
        """Check if narrative analysis can run (has an API key)."""
        return bool(self.narrative_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
