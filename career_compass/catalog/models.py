"""Data models for the career catalog."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from career_compass.profile.models import (
    CareerCategory,
    Communication,
    ExperienceLevel,
    Pace,
    ProblemSolving,
    WorkStyle,
)


class SkillImportance(str, Enum):
    """How much a required skill matters for a career."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    BENEFICIAL = "beneficial"


# Importance labels used by older catalog exports.
_IMPORTANCE_ALIASES = {
    "required": SkillImportance.CRITICAL,
    "preferred": SkillImportance.IMPORTANT,
    "nice-to-have": SkillImportance.BENEFICIAL,
}


class CatalogEntryError(ValueError):
    """Raised when a catalog entry cannot be turned into a Career."""

    def __init__(
        self, message: str, *, index: int | None = None, career_id: str | None = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.career_id = career_id


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SkillRequirement(_Frozen):
    skill: str = Field(..., min_length=1)
    importance: SkillImportance = SkillImportance.IMPORTANT
    category: Literal["technical", "soft", "certification"] = "technical"
    description: str | None = None

    @field_validator("importance", mode="before")
    @classmethod
    def normalize_importance(cls, v: object) -> object:
        """Accept legacy importance labels."""
        if isinstance(v, str):
            value = v.strip().lower()
            return _IMPORTANCE_ALIASES.get(value, value)
        return v


class CareerSalaryRange(_Frozen):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    median: float | None = Field(default=None, ge=0)
    currency: str = "USD"
    experience_level: ExperienceLevel = ExperienceLevel.ENTRY

    @model_validator(mode="after")
    def validate_bounds(self) -> CareerSalaryRange:
        if self.min > self.max:
            raise ValueError(f"Salary min ({self.min}) exceeds max ({self.max})")
        return self


class CareerWorkEnvironment(_Frozen):
    remote: bool = False
    hybrid: bool = False
    onsite: bool = False
    travel_required: bool = False
    typical_hours: str = "40"

    @property
    def offered(self) -> tuple[str, ...]:
        return tuple(
            name for name in ("remote", "hybrid", "onsite") if getattr(self, name)
        )


class DailyTask(_Frozen):
    task: str
    time_percentage: float = Field(default=0, ge=0, le=100)


class JobOutlook(_Frozen):
    growth_rate: str = ""
    projected_jobs: str = ""
    competition_level: Literal["low", "medium", "high"] = "medium"


class EducationRequirements(_Frozen):
    minimum_degree: str | None = None
    preferred_degree: str | None = None
    certifications: tuple[str, ...] = ()
    alternative_pathways: tuple[str, ...] = ()


class CareerArchetype(_Frozen):
    """Working-style profile of a career, compared with the user's personality."""

    work_style: WorkStyle = WorkStyle.MIXED
    pace: Pace = Pace.VARIED
    problem_solving: ProblemSolving = ProblemSolving.MIXED
    communication: Communication = Communication.MODERATE
    leadership_track: bool = False


class Career(_Frozen):
    """A career definition. Read-only reference data for the engine."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    category: CareerCategory
    description: str = ""
    alternative_titles: tuple[str, ...] = ()
    required_skills: tuple[SkillRequirement, ...] = Field(
        ..., description="May be empty, but must be present"
    )
    work_environment: CareerWorkEnvironment
    salary_ranges: tuple[CareerSalaryRange, ...] = Field(..., min_length=1)
    experience_levels: tuple[ExperienceLevel, ...] = Field(
        default=(), description="Levels the career hires at (defaults to salary levels)"
    )
    personality: CareerArchetype | None = None
    daily_tasks: tuple[DailyTask, ...] = ()
    job_outlook: JobOutlook = Field(default_factory=JobOutlook)
    education: EducationRequirements = Field(default_factory=EducationRequirements)
    related_roles: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    industry_trends: tuple[str, ...] = ()

    @property
    def expected_levels(self) -> tuple[ExperienceLevel, ...]:
        """Seniority band the career is aimed at."""
        if self.experience_levels:
            return self.experience_levels
        levels: list[ExperienceLevel] = []
        for salary in self.salary_ranges:
            if salary.experience_level not in levels:
                levels.append(salary.experience_level)
        return tuple(levels)

    def salary_for_level(self, level: ExperienceLevel) -> CareerSalaryRange | None:
        for salary in self.salary_ranges:
            if salary.experience_level == level:
                return salary
        return None

    def salary_span(self) -> tuple[float, float]:
        """Lowest minimum and highest maximum across all salary ranges."""
        return (
            min(s.min for s in self.salary_ranges),
            max(s.max for s in self.salary_ranges),
        )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Career:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)
