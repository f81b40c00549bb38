"""Data models produced by the career matching engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from career_compass.catalog.models import Career
from career_compass.catalog.service import SkippedEntry

SUB_SCORE_NAMES = ("skills", "interests", "experience", "preferences", "personality")


def _check_score(name: str, value: float) -> None:
    if not (0.0 <= value <= 100.0):
        raise ValueError(f"{name} must be between 0 and 100 (got {value})")


@dataclass(frozen=True)
class SubScores:
    """The five independent component scores, each in [0, 100]."""

    skills: float
    interests: float
    experience: float
    preferences: float
    personality: float

    def __post_init__(self) -> None:
        for name in SUB_SCORE_NAMES:
            _check_score(name, getattr(self, name))

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SUB_SCORE_NAMES}


@dataclass(frozen=True)
class MatchDetails:
    """Evidence behind the sub-scores, used for explanations."""

    matched_skills: tuple[str, ...] = ()
    missing_skills: tuple[str, ...] = ()
    matched_interests: tuple[str, ...] = ()
    experience_reasoning: str = ""
    relevant_experience: tuple[str, ...] = ()
    matched_preferences: tuple[str, ...] = ()
    tradeoffs: tuple[str, ...] = ()
    personality_traits: tuple[str, ...] = ()
    personality_mismatches: tuple[str, ...] = ()
    meets_education_requirements: bool = True


@dataclass(frozen=True)
class CareerMatch:
    """Scored fit between a profile and one career."""

    career: Career
    overall_score: float
    sub_scores: SubScores
    strengths: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    confidence: float = 0.5
    recommendations: tuple[str, ...] = ()
    details: MatchDetails = field(default_factory=MatchDetails)

    def __post_init__(self) -> None:
        _check_score("overall_score", self.overall_score)
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(
                f"confidence must be between 0.0 and 1.0 (got {self.confidence})"
            )


@dataclass(frozen=True)
class MatchReport:
    """Ranked matches plus the catalog entries that were skipped."""

    matches: tuple[CareerMatch, ...] = ()
    skipped: tuple[SkippedEntry, ...] = ()

    def top(self, n: int) -> list[CareerMatch]:
        return list(self.matches[:n])
