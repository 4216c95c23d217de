from functools import lru_cache
from pathlib import Path
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Service information
    SERVICE_NAME: str = "hybrid-intent"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    # Classifier resources
    CORPUS_PATH: str = str(DATA_DIR / "classifiers.json")
    RULES_PATH: str = str(DATA_DIR / "keyword_rules.json")
    MODEL_PATH: Optional[str] = None

    # Statistical model
    BAYES_ALPHA: float = 0.1

    # Caller policy (consumed by IntentService, never by the classifier)
    RESPONSE_CONFIDENCE_THRESHOLD: float = 0.7
    RESPONSE_INTENTS: List[str] = [
        "general-knowledge",
        "real-time-knowledge",
        "technical-question",
    ]

    # Diagnostics
    DIAGNOSTIC_SNIPPET_LENGTH: int = 100
    DIAGNOSTIC_TOP_N: int = 5

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is one the logging module knows."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("RESPONSE_CONFIDENCE_THRESHOLD")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Confidence threshold must be between 0 and 1")
        return v

    @field_validator("BAYES_ALPHA")
    @classmethod
    def validate_alpha(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Smoothing alpha must be positive")
        return v

    @field_validator("DIAGNOSTIC_SNIPPET_LENGTH", "DIAGNOSTIC_TOP_N")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Diagnostic limits must be at least 1")
        return v


def load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache application settings.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
