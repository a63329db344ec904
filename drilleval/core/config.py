"""
Engine configuration.

Centralized configuration management with environment variables.
Every value can be overridden with a ``DRILLEVAL_`` prefixed variable
(e.g. ``DRILLEVAL_MAX_RETRY_ATTEMPTS=3``) or from a ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings"""

    # Retry / hint progression
    MAX_RETRY_ATTEMPTS: int = Field(default=5, ge=2)
    FIRST_REVEAL_FRACTION: float = Field(default=0.15, gt=0.0, le=1.0)
    LAST_REVEAL_FRACTION: float = Field(default=0.6, gt=0.0, le=1.0)
    # Shares for attempts 3 .. max-1 when their count matches; otherwise
    # the share runs linearly from FIRST_ to LAST_REVEAL_FRACTION.
    INTERMEDIATE_REVEAL_FRACTIONS: tuple[float, ...] = (0.4, 0.6)

    # Cloze blank selection
    MAX_BLANKS: int = Field(default=3, ge=1)
    DEFAULT_BLANKS: int = Field(default=2, ge=1)
    MIN_WORDS_FOR_MULTI_CLOZE: int = 4
    MIN_BLANK_LENGTH: int = 2

    # Error classification
    SPELLING_DISTANCE_RATIO: float = Field(default=0.3, gt=0.0, le=1.0)
    LETTER_CONFUSION_MAX_DISTANCE: int = 2

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="DRILLEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_ordered_limits(self) -> "Settings":
        """Reject limits that would make hints shrink or blanks exceed their cap."""
        if self.FIRST_REVEAL_FRACTION > self.LAST_REVEAL_FRACTION:
            raise ValueError("FIRST_REVEAL_FRACTION must not exceed LAST_REVEAL_FRACTION")
        fractions = self.INTERMEDIATE_REVEAL_FRACTIONS
        if any(not 0.0 < share <= 1.0 for share in fractions):
            raise ValueError("INTERMEDIATE_REVEAL_FRACTIONS must lie in (0, 1]")
        if list(fractions) != sorted(fractions):
            raise ValueError("INTERMEDIATE_REVEAL_FRACTIONS must be non-decreasing")
        if self.DEFAULT_BLANKS > self.MAX_BLANKS:
            raise ValueError("DEFAULT_BLANKS must not exceed MAX_BLANKS")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
