"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Dict, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from runrate.shared import EnumDataBackend, EnumEnvironment, EnumLogLevel
from runrate.shared.env import load_secret_file_variables


class DatabaseSettings(BaseSettings):
    """MongoDB readings source settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/energy",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="energy", description="Name of the MongoDB database"
    )
    readings_collection: str = Field(
        default="readings", description="Collection holding raw meter readings"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class SourceSettings(BaseSettings):
    """Which readings source the service reads from."""

    backend: EnumDataBackend = Field(
        default=EnumDataBackend.MONGO, description="Readings backend: mongo or csv"
    )
    csv_directory: str = Field(
        default="./data",
        description="Directory holding YYYY-MM-DD.csv files (csv backend)",
    )

    model_config = SettingsConfigDict(
        env_prefix="SOURCE_", case_sensitive=False, extra="ignore"
    )


class AppInfoSettings(BaseSettings):
    """Service metadata and HTTP server settings."""

    title: str = Field(default="Energy Run-Rate Forecaster", description="API title")
    description: str = Field(
        default="Monthly and daily energy consumption projections per meter",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("APP_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
    )


class PredictionSettings(BaseSettings):
    """Constants of the hybrid engine, the day forecaster and the forecast."""

    hybrid_threshold_days: int = Field(
        default=3,
        ge=1,
        description="Months with fewer observed days are blended with the previous one",
    )
    weight_table: Dict[int, float] = Field(
        default_factory=lambda: {1: 0.30, 2: 0.50},
        description="Current-month weight by number of observed days (JSON object)",
    )
    default_current_weight: float = Field(
        default=0.30, ge=0.0, le=1.0, description="Weight for days not in the table"
    )
    prior_completeness_ratio: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum share of previous-month days required for blending",
    )
    min_days_required: int = Field(default=1, ge=1)
    min_hours_required: int = Field(default=3, ge=1)
    rolling_window_hours: int = Field(default=6, ge=1, le=24)
    prior_period_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Timeout of one previous-month load"
    )
    prior_period_cache_ttl_seconds: float = Field(default=300.0, ge=0)
    forecast_cache_ttl_seconds: float = Field(default=300.0, ge=0)
    forecast_recent_days: int = Field(default=7, ge=1)
    forecast_weight_simple: float = Field(default=0.3, ge=0.0, le=1.0)
    forecast_weight_recent: float = Field(default=0.4, ge=0.0, le=1.0)
    forecast_weight_day_of_week: float = Field(default=0.3, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(
        env_prefix="PREDICTION_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    app: AppInfoSettings = Field(default_factory=AppInfoSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    prediction: PredictionSettings = Field(default_factory=PredictionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Docker secrets (``KEY_FILE``) are resolved first. Mocked in tests.
    """
    load_secret_file_variables()
    return AppSettings()
