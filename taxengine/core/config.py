"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Error Tracking
    sentry_dsn: str | None = None
    """Sentry DSN for error tracking. Optional."""

    # Environment
    environment: str = "development"
    """Current environment (development, staging, production)."""

    debug: bool = False
    """Enable debug mode."""

    log_format: str | None = None
    """Logging format override (json or console). Defaults by environment."""

    # Computation
    default_tax_year: int = 2025
    """Tax year assumed when an input document omits one."""

    round_to_whole_dollars: bool = False
    """Round engine-written Form 1040 amounts to whole dollars instead of cents."""

    output_dir: str = "/tmp/output"
    """Default output directory for generated worksheets and JSON exports."""

    @field_validator("log_format", mode="before")
    @classmethod
    def parse_log_format(cls, value: object) -> str | None:
        """Accept json/console in any case; blank means "by environment"."""
        if value is None:
            return None
        text = str(value).strip().lower()
        if not text:
            return None
        if text not in LOG_FORMATS:
            raise ValueError("LOG_FORMAT must be 'json' or 'console'.")
        return text


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    root_error = str(exc)
    suggestions = [
        "Allowed values for LOG_FORMAT are: json, console (or leave unset).",
        "DEFAULT_TAX_YEAR must be an integer year such as 2025.",
    ]

    raise RuntimeError(
        "Failed to initialize application settings. "
        f"Check environment variables in {env_file.resolve() if env_file.exists() else '.env'}.\n"
        + f"Error: {root_error}\n"
        + "\n".join(suggestions)
    ) from exc
