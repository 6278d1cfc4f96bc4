"""Application settings and configuration."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Question bank
    bank_path: Path | None = Field(
        default=None,
        description="Question bank JSON file (bundled bank when unset)",
        validation_alias="QUIZBANK_BANK_PATH",
    )

    strict_validation: bool = Field(
        default=False,
        description="Drop questions that cannot be answered perfectly",
        validation_alias="QUIZBANK_STRICT",
    )

    # Tests
    group_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of questions per test",
        validation_alias="QUIZBANK_GROUP_SIZE",
    )

    test_title_template: str = Field(
        default="Test {id}",
        description="Test title format, {id} is the test number",
        validation_alias="QUIZBANK_TEST_TITLE",
    )

    # Sessions
    reveal_delay_seconds: float = Field(
        default=1.5,
        ge=0.0,
        le=10.0,
        description="Pause after revealing an answer before advancing",
        validation_alias="QUIZBANK_REVEAL_DELAY",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
        validation_alias="QUIZBANK_LOG_LEVEL",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is a known level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("test_title_template")
    @classmethod
    def validate_title_template(cls, v: str) -> str:
        """Ensure the title template renders."""
        try:
            title = v.format(id=1)
        except (KeyError, IndexError, AttributeError, TypeError) as e:
            raise ValueError(f"Test title template has unknown field: {e}") from e
        if not title.strip():
            raise ValueError("Test title template renders an empty title")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Loaded the first time and then cached for the rest of the process
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
