"""
Engine configuration using Pydantic Settings
"""
import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


class Settings(BaseSettings):
    """
    Settings loaded from environment variables (prefix FINSCHED_)
    """
    # Clock
    TIMEZONE: str = "UTC"

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Precondition policy: True = raise, False = clamp and log a warning
    STRICT_PRECONDITIONS: bool = True

    # User-level budget cycle defaults, used when a budget has no own start day
    DEFAULT_WEEK_START_DAY: int = 0  # 0 = Sunday
    DEFAULT_MONTH_START_DAY: int = 1

    # Spent share (percent) at which a budget is flagged
    BUDGET_ALERT_PCT: float = 80.0

    model_config = SettingsConfigDict(
        env_prefix="FINSCHED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_log_level(self) -> int:
        """
        Resolve LOG_LEVEL to a logging constant; DEBUG=True always wins
        """
        if self.DEBUG:
            return logging.DEBUG
        return _LOG_LEVELS.get(self.LOG_LEVEL.upper(), logging.INFO)


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging for processes embedding the engine."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.get_log_level())
