import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    SQLite is only meant for local development. Set DATABASE_URL to a
    PostgreSQL connection string everywhere else.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "tutorlink.db"
    db_url = f"sqlite:///{db_path.resolve()}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}. Set DATABASE_URL to use PostgreSQL.")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")
    forecast_days_per_unit: int = Field(
        default=14,
        validation_alias="FORECAST_DAYS_PER_UNIT",
        description="Calendar days one curriculum unit is expected to take (two-week lesson blocks)",
    )
    weekday_locale: str = Field(
        default="vi",
        validation_alias="WEEKDAY_LOCALE",
        description="Locale used to render contract weekday abbreviations",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("forecast_days_per_unit")
    @classmethod
    def validate_days_per_unit(cls, value: int) -> int:
        """Days per unit must be positive, it is used as a divisor."""
        if value <= 0:
            raise ValueError("FORECAST_DAYS_PER_UNIT must be a positive number of days")
        return value

    @field_validator("weekday_locale")
    @classmethod
    def validate_weekday_locale(cls, value: str) -> str:
        """Fall back to the platform locale when an unsupported one is configured."""
        lowered = value.lower()
        if lowered not in {"vi", "en"}:
            logger.warning(f"Unsupported WEEKDAY_LOCALE '{value}'. Supported: vi, en. Defaulting to vi.")
            return "vi"
        return lowered

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
