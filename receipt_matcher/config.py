from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./receipt_matcher.db"

    # Application
    app_name: str = "Receipt Matcher"
    app_version: str = "1.0.0"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Date proximity windows (days, inclusive)
    date_high_window_days: int = 7
    date_medium_window_days: int = 21

    # Transactions further than this from the receipt date are never scored.
    # Must be at least date_medium_window_days.
    candidate_window_days: int = 21

    # Amount tolerance for a Medium amount score (fraction of receipt amount)
    amount_tolerance_percent: float = 0.10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
