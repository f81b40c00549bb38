"""Data models for learning progress tracking."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from career_compass.catalog.models import SkillImportance

# Newest activity entries kept in the log.
MAX_PROGRESS_ENTRIES = 1000


def utcnow() -> datetime:
    return datetime.now(UTC)


class SkillLevel(str, Enum):
    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def points(self) -> float:
        return _LEVEL_POINTS[self]


_LEVEL_POINTS = {
    SkillLevel.NONE: 0.0,
    SkillLevel.BEGINNER: 25.0,
    SkillLevel.INTERMEDIATE: 50.0,
    SkillLevel.ADVANCED: 75.0,
    SkillLevel.EXPERT: 100.0,
}

SkillCategory = Literal["technical", "soft", "industry", "certification"]
CourseType = Literal["course", "certification", "book", "practice", "bootcamp"]
ProgressEntryType = Literal[
    "course_started",
    "course_completed",
    "skill_improved",
    "milestone_achieved",
    "time_logged",
]


class CourseProgress(BaseModel):
    """A learning resource attached to a tracked skill."""

    id: str
    title: str = Field(..., min_length=1)
    provider: str = ""
    type: CourseType = "course"
    skill_area: str
    priority: SkillImportance = SkillImportance.IMPORTANT
    url: str | None = None
    date_added: datetime = Field(default_factory=utcnow)
    date_started: datetime | None = None
    date_completed: datetime | None = None
    time_spent: int = Field(default=0, ge=0, description="Minutes")
    is_completed: bool = False
    notes: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)

    @property
    def in_progress(self) -> bool:
        return self.date_started is not None and not self.is_completed


class SkillProgress(BaseModel):
    """A skill the user is developing."""

    skill_name: str = Field(..., min_length=1)
    category: SkillCategory = "technical"
    current_level: SkillLevel = SkillLevel.NONE
    target_level: SkillLevel = SkillLevel.INTERMEDIATE
    importance: SkillImportance = SkillImportance.IMPORTANT
    total_time_spent: int = Field(default=0, ge=0, description="Minutes")
    last_updated: datetime = Field(default_factory=utcnow)


class ProgressEntry(BaseModel):
    """One line of the activity log."""

    id: str
    type: ProgressEntryType
    title: str
    description: str = ""
    skill_area: str | None = None
    time_spent: int | None = None
    date: datetime = Field(default_factory=utcnow)


class ProgressState(BaseModel):
    """Everything the tracker persists."""

    skills: list[SkillProgress] = Field(default_factory=list)
    courses: list[CourseProgress] = Field(default_factory=list)
    entries: list[ProgressEntry] = Field(
        default_factory=list, description="Newest first"
    )
    last_sync: datetime = Field(default_factory=utcnow)


class ProgressSummary(BaseModel):
    total_time_spent: int = 0
    courses_completed: int = 0
    courses_in_progress: int = 0
    skills_improved: int = 0
    recent_achievements: list[ProgressEntry] = Field(default_factory=list)
    readiness: CareerReadinessScore | None = None


class CareerReadinessScore(BaseModel):
    """How prepared the tracked skills make the user for one career."""

    career_id: str
    overall: float = Field(ge=0, le=100)
    technical_skills: float = Field(ge=0, le=100)
    soft_skills: float = Field(ge=0, le=100)
    industry_knowledge: float = Field(ge=0, le=100)
    experience: float = Field(ge=0, le=100)
    relevant_skills: list[str] = Field(default_factory=list)
    improvement_areas: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


ProgressSummary.model_rebuild()
