"""Configuration settings for the career matching engine."""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from career_compass.catalog.models import SkillImportance

# Sub-score weights. They must sum to 1.0.
DEFAULT_WEIGHT_SKILLS = 0.30
DEFAULT_WEIGHT_INTERESTS = 0.25
DEFAULT_WEIGHT_EXPERIENCE = 0.15
DEFAULT_WEIGHT_PREFERENCES = 0.15
DEFAULT_WEIGHT_PERSONALITY = 0.15

# Relative weight of each importance tier in the skills sub-score.
IMPORTANCE_WEIGHTS: dict[SkillImportance, float] = {
    SkillImportance.CRITICAL: 3.0,
    SkillImportance.IMPORTANT: 2.0,
    SkillImportance.BENEFICIAL: 1.0,
}

# Sub-score used when there is nothing to compare against.
NEUTRAL_SCORE = 50.0

DEFAULT_STRONG_THRESHOLD = 75.0
DEFAULT_WEAK_THRESHOLD = 40.0

_WEIGHT_SUM_TOLERANCE = 1e-9


class MatchingConfig(BaseSettings):
    """Career matching configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scoring weights (must sum to 1.0)
    weight_skills: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=DEFAULT_WEIGHT_SKILLS,
        description="Weight for the skills sub-score",
    )
    weight_interests: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=DEFAULT_WEIGHT_INTERESTS,
        description="Weight for the interests sub-score",
    )
    weight_experience: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=DEFAULT_WEIGHT_EXPERIENCE,
        description="Weight for the experience sub-score",
    )
    weight_preferences: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=DEFAULT_WEIGHT_PREFERENCES,
        description="Weight for the preferences sub-score",
    )
    weight_personality: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=DEFAULT_WEIGHT_PERSONALITY,
        description="Weight for the personality sub-score",
    )

    # Explanation thresholds
    strong_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=DEFAULT_STRONG_THRESHOLD,
        description="Sub-scores at or above this produce a strength",
    )
    weak_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=DEFAULT_WEAK_THRESHOLD,
        description="Sub-scores below this produce a gap",
    )

    # Matching settings
    skill_fuzzy_match: bool = Field(
        default=True,
        description="Enable fuzzy skill matching",
    )
    skill_fuzzy_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.85,
        description="Similarity threshold for fuzzy matching",
    )

    # Result filtering
    minimum_score: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=0.0,
        description="Drop matches with an overall score below this",
    )
    max_results: Annotated[int, Field(gt=0)] | None = Field(
        default=None,
        description="Maximum number of matches returned (None = all)",
    )

    # Catalog handling
    catalog_strict: bool = Field(
        default=False,
        description="Raise on malformed catalog entries instead of skipping them",
    )

    @model_validator(mode="after")
    def validate_weights_sum_to_one(self) -> MatchingConfig:
        """Ensure scoring weights sum to 1.0."""
        weight_sum = math.fsum(self.weights.values())
        if abs(weight_sum - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                "Matching weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(skills={self.weight_skills}, interests={self.weight_interests}, "
                f"experience={self.weight_experience}, "
                f"preferences={self.weight_preferences}, "
                f"personality={self.weight_personality})."
            )
        return self

    @model_validator(mode="after")
    def validate_thresholds(self) -> MatchingConfig:
        if self.weak_threshold > self.strong_threshold:
            raise ValueError(
                f"weak_threshold ({self.weak_threshold}) must not exceed "
                f"strong_threshold ({self.strong_threshold})"
            )
        return self

    @property
    def weights(self) -> dict[str, float]:
        """Sub-score weights keyed by sub-score name."""
        return {
            "skills": self.weight_skills,
            "interests": self.weight_interests,
            "experience": self.weight_experience,
            "preferences": self.weight_preferences,
            "personality": self.weight_personality,
        }


# Singleton instance for easy import
_matching_config: MatchingConfig | None = None


def get_matching_config() -> MatchingConfig:
    """Get the matching configuration singleton."""
    global _matching_config
    if _matching_config is None:
        _matching_config = MatchingConfig()
    return _matching_config


def reset_matching_config() -> None:
    """Reset the matching configuration singleton (useful for testing)."""
    global _matching_config
    _matching_config = None
