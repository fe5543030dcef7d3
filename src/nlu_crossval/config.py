"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Cross-validation settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NLU_CROSSVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Splitting
    seed: str = Field(
        default="confusion",
        description="Seed for the run-scoped shuffle source",
    )
    train_fraction: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Share of each intent's utterances used for training",
    )
    min_train_utterances: int = Field(
        default=3,
        ge=1,
        description="Intents with fewer training utterances after the split are excluded",
    )

    # Evaluation
    concurrency: int = Field(
        default=5,
        ge=1,
        description="Maximum number of test examples evaluated at once",
    )
    macro_f1_threshold: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Minimum macro F1 for the CLI to report success",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Enable JSON structured logging",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
