"""Configuration settings for real-time recalculation."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum answered questions before matches are computed at all.
DEFAULT_SIGNAL_THRESHOLD = 5
DEFAULT_TOP_N = 3
DEFAULT_SIGNIFICANT_CHANGE = 5.0


class RealtimeConfig(BaseSettings):
    """Real-time matcher configuration settings.

    Overridable via environment variables with `REALTIME_` prefix or a
    .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="REALTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    signal_threshold: Annotated[int, Field(ge=0)] = Field(
        default=DEFAULT_SIGNAL_THRESHOLD,
        description="Answered questions required before recalculating",
    )
    top_n: Annotated[int, Field(gt=0)] = Field(
        default=DEFAULT_TOP_N,
        description="Number of matches exposed to the caller",
    )
    significant_change: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=DEFAULT_SIGNIFICANT_CHANGE,
        description="Score change that marks an update as significant",
    )
    history_limit: Annotated[int, Field(ge=3)] = Field(
        default=10,
        description="Scores kept per career for trend detection",
    )


# Singleton instance for easy import
_realtime_config: RealtimeConfig | None = None


def get_realtime_config() -> RealtimeConfig:
    """Get the real-time configuration singleton."""
    global _realtime_config
    if _realtime_config is None:
        _realtime_config = RealtimeConfig()
    return _realtime_config


def reset_realtime_config() -> None:
    """Reset the real-time configuration singleton (useful for testing)."""
    global _realtime_config
    _realtime_config = None
