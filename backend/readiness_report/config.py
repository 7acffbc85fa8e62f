"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate types at startup (a typo like PDF_TIMEOUT_MS=abc fails fast)
3. Provide type-safe access throughout the app

Usage:
    from readiness_report.config import settings
    print(settings.PDF_TIMEOUT_MS)

Note: We use a validator that prefers .env values over empty shell
environment variables, so an exported-but-blank variable never shadows
a real value in the .env file.

Only values that operators actually tune live here. Fixed report values
(flag table, score bands, PDF margins) are named constants in
readiness_report.constants.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is empty but .env has a value, use the .env value.

        Pydantic Settings prioritizes real env vars over .env file values,
        so LOG_LEVEL="" in the shell would otherwise hide LOG_LEVEL=DEBUG
        in .env.
        """
        from dotenv import dotenv_values

        dotenv_vals = dotenv_values(".env")
        for key, dotenv_value in dotenv_vals.items():
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- Application ---
    APP_ENV: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # --- Headless browser timeouts (milliseconds) ---
    BROWSER_LAUNCH_TIMEOUT_MS: int = 30000
    PAGE_TIMEOUT_MS: int = 30000
    CONTENT_TIMEOUT_MS: int = 30000
    PDF_TIMEOUT_MS: int = 30000
    # Upper bound on waiting for fonts/images to finish loading
    SETTLE_TIMEOUT_MS: int = 3000

    # --- Render admission control ---
    MAX_CONCURRENT_RENDERS: int = 4
    MAX_QUEUED_RENDERS: int = 16
    QUEUE_TIMEOUT_SECONDS: float = 30.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Singleton instance — import this everywhere
settings = Settings()
