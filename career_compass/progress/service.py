"""Learning progress tracking and career readiness."""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

from pydantic import ValidationError

from career_compass.catalog.models import Career, SkillImportance
from career_compass.matching.matchers import skills_match, term_matches_any
from career_compass.progress.models import (
    MAX_PROGRESS_ENTRIES,
    CareerReadinessScore,
    CourseProgress,
    CourseType,
    ProgressEntry,
    ProgressEntryType,
    ProgressState,
    ProgressSummary,
    SkillCategory,
    SkillLevel,
    SkillProgress,
    utcnow,
)
from career_compass.progress.storage import InMemoryProgressStorage, ProgressStorage
from career_compass.utils.logging import get_logger

logger = get_logger("progress")

# Readiness category weights
READINESS_WEIGHT_TECHNICAL = 0.35
READINESS_WEIGHT_SOFT = 0.25
READINESS_WEIGHT_INDUSTRY = 0.25
READINESS_WEIGHT_EXPERIENCE = 0.15

# Per-skill bonuses on top of level points
TIME_BONUS_PER_HOUR = 0.5
TIME_BONUS_CAP = 25.0
COURSE_BONUS_PER_COMPLETION = 5.0
COURSE_BONUS_CAP = 15.0

# Experience component: points per hour logged and per completed course
EXPERIENCE_POINTS_PER_HOUR = 2.0
EXPERIENCE_POINTS_PER_COURSE = 10.0

LOW_PRACTICE_MINUTES = 300
DEFAULT_WEEKLY_TIME_GOAL = 600
RECENT_ACHIEVEMENTS = 10

_ACHIEVEMENT_TYPES = {"course_completed", "skill_improved", "milestone_achieved"}

Listener = Callable[[ProgressState], None]


class UnknownProgressItemError(KeyError):
    """Raised when a skill or course is not being tracked."""


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class ProgressTrackingService:
    """Tracks skills, courses and study time, and scores career readiness.

    State is loaded from the storage backend once and saved after every
    change; subscribers receive a copy of the new state.
    """

    def __init__(
        self,
        storage: ProgressStorage | None = None,
        weekly_time_goal: int = DEFAULT_WEEKLY_TIME_GOAL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.storage = storage or InMemoryProgressStorage()
        self.weekly_time_goal = weekly_time_goal
        self._clock = clock
        self._listeners: list[Listener] = []
        self._state = self.storage.load() or ProgressState(last_sync=clock())

    @property
    def state(self) -> ProgressState:
        return self._state.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_skill(self, skill_name: str) -> SkillProgress:
        """Return a detached copy of a tracked skill."""
        return self._find_skill(skill_name).model_copy(deep=True)

    def get_course(self, course_id: str) -> CourseProgress:
        """Return a detached copy of a course."""
        return self._find_course(course_id).model_copy(deep=True)

    def _find_skill(self, skill_name: str) -> SkillProgress:
        key = skill_name.strip().lower()
        for skill in self._state.skills:
            if skill.skill_name.lower() == key:
                return skill
        raise UnknownProgressItemError(f"Skill not tracked: {skill_name}")

    def _find_course(self, course_id: str) -> CourseProgress:
        for course in self._state.courses:
            if course.id == course_id:
                return course
        raise UnknownProgressItemError(f"Course not found: {course_id}")

    def add_skill(
        self,
        skill_name: str,
        category: SkillCategory = "technical",
        current_level: SkillLevel = SkillLevel.NONE,
        target_level: SkillLevel = SkillLevel.INTERMEDIATE,
        importance: SkillImportance = SkillImportance.IMPORTANT,
    ) -> SkillProgress:
        """Start tracking a skill."""
        name = skill_name.strip()
        if any(s.skill_name.lower() == name.lower() for s in self._state.skills):
            raise ValueError(f"Skill already tracked: {name}")

        skill = SkillProgress(
            skill_name=name,
            category=category,
            current_level=current_level,
            target_level=target_level,
            importance=importance,
            last_updated=self._clock(),
        )
        self._state.skills.append(skill)
        self._add_entry(
            "skill_improved",
            f"Started tracking skill: {name}",
            f"Added {name} to your development roadmap",
            skill_area=name,
        )
        self._commit()
        return skill.model_copy(deep=True)

    def update_skill_level(self, skill_name: str, level: SkillLevel) -> SkillProgress:
        skill = self._find_skill(skill_name)
        old_level = skill.current_level
        skill.current_level = level
        skill.last_updated = self._clock()
        self._add_entry(
            "skill_improved",
            f"Skill level updated: {skill.skill_name}",
            f"Moved from {old_level.value} to {level.value}",
            skill_area=skill.skill_name,
        )
        self._commit()
        return skill.model_copy(deep=True)

    def add_course(
        self,
        skill_name: str,
        title: str,
        provider: str = "",
        course_type: CourseType = "course",
        priority: SkillImportance = SkillImportance.IMPORTANT,
        url: str | None = None,
    ) -> CourseProgress:
        """Attach a course to a tracked skill."""
        skill = self._find_skill(skill_name)
        course = CourseProgress(
            id=_new_id("course"),
            title=title,
            provider=provider,
            type=course_type,
            skill_area=skill.skill_name,
            priority=priority,
            url=url,
            date_added=self._clock(),
        )
        self._state.courses.append(course)
        self._add_entry(
            "course_started",
            f"Added course: {title}",
            f"Added to {skill.skill_name} development plan",
            skill_area=skill.skill_name,
        )
        self._commit()
        return course.model_copy(deep=True)

    def start_course(self, course_id: str) -> CourseProgress:
        """Mark a course as started. Starting twice is a no-op."""
        course = self._find_course(course_id)
        if course.date_started is not None:
            return course.model_copy(deep=True)
        course.date_started = self._clock()
        self._add_entry(
            "course_started",
            f"Started course: {course.title}",
            f"Began {course.title}" + (f" by {course.provider}" if course.provider else ""),
            skill_area=course.skill_area,
        )
        self._commit()
        return course.model_copy(deep=True)

    def complete_course(
        self, course_id: str, rating: int | None = None, notes: str | None = None
    ) -> CourseProgress:
        course = self._find_course(course_id)
        if rating is not None and not 1 <= rating <= 5:
            raise ValueError(f"rating must be between 1 and 5 (got {rating})")

        now = self._clock()
        if course.date_started is None:
            course.date_started = now
        course.is_completed = True
        course.date_completed = now
        if rating is not None:
            course.rating = rating
        if notes:
            course.notes = notes

        self._add_entry(
            "course_completed",
            f"Completed course: {course.title}",
            f"Finished {course.title}" + (f" by {course.provider}" if course.provider else ""),
            skill_area=course.skill_area,
            time_spent=course.time_spent,
        )
        self._commit()
        return course.model_copy(deep=True)

    def log_time(self, course_id: str, minutes: int) -> CourseProgress:
        """Record study time against a course and its skill."""
        if minutes <= 0:
            raise ValueError(f"minutes must be positive (got {minutes})")
        course = self._find_course(course_id)
        course.time_spent += minutes

        for skill in self._state.skills:
            if skill.skill_name == course.skill_area:
                skill.total_time_spent += minutes
                skill.last_updated = self._clock()

        self._add_entry(
            "time_logged",
            f"Logged {minutes} minutes",
            f"Time spent on {course.title}",
            skill_area=course.skill_area,
            time_spent=minutes,
        )
        self._commit()
        return course.model_copy(deep=True)

    def clear(self) -> None:
        """Drop all tracked data."""
        self._state = ProgressState(last_sync=self._clock())
        self._commit()

    def export_data(self) -> str:
        return json.dumps(self._state.model_dump(mode="json"), indent=2)

    def import_data(self, data: str) -> None:
        """Replace the current state with previously exported JSON."""
        try:
            state = ProgressState.model_validate(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError("Invalid import data format") from e
        self._state = state
        self._commit()

    def get_summary(self, career: Career | None = None) -> ProgressSummary:
        """Totals across all tracked work, with readiness for a career if given."""
        courses = self._state.courses
        return ProgressSummary(
            total_time_spent=sum(c.time_spent for c in courses),
            courses_completed=sum(1 for c in courses if c.is_completed),
            courses_in_progress=sum(1 for c in courses if c.in_progress),
            skills_improved=sum(
                1 for s in self._state.skills if s.current_level != SkillLevel.NONE
            ),
            recent_achievements=[
                e for e in self._state.entries if e.type in _ACHIEVEMENT_TYPES
            ][:RECENT_ACHIEVEMENTS],
            readiness=self.calculate_career_readiness(career) if career else None,
        )

    def calculate_career_readiness(self, career: Career) -> CareerReadinessScore:
        """Score how far the tracked skills go towards a career."""
        relevant = [s for s in self._state.skills if self._is_relevant(s, career)]
        if not relevant:
            return CareerReadinessScore(
                career_id=career.id,
                overall=0,
                technical_skills=0,
                soft_skills=0,
                industry_knowledge=0,
                experience=0,
                improvement_areas=["No relevant skills tracked yet"],
                next_steps=["Start adding skills to your development plan"],
            )

        technical = self._category_score([s for s in relevant if s.category == "technical"])
        soft = self._category_score([s for s in relevant if s.category == "soft"])
        industry = self._category_score([s for s in relevant if s.category == "industry"])

        hours = sum(c.time_spent for c in self._state.courses) / 60
        completed = sum(1 for c in self._state.courses if c.is_completed)
        experience = min(
            100.0,
            hours * EXPERIENCE_POINTS_PER_HOUR + completed * EXPERIENCE_POINTS_PER_COURSE,
        )

        overall = (
            technical * READINESS_WEIGHT_TECHNICAL
            + soft * READINESS_WEIGHT_SOFT
            + industry * READINESS_WEIGHT_INDUSTRY
            + experience * READINESS_WEIGHT_EXPERIENCE
        )

        return CareerReadinessScore(
            career_id=career.id,
            overall=round(overall),
            technical_skills=round(technical),
            soft_skills=round(soft),
            industry_knowledge=round(industry),
            experience=round(experience),
            relevant_skills=[s.skill_name for s in relevant],
            improvement_areas=self._improvement_areas(relevant),
            next_steps=self._next_steps(relevant),
        )

    def _is_relevant(self, skill: SkillProgress, career: Career) -> bool:
        if any(
            skills_match(skill.skill_name, requirement.skill)
            for requirement in career.required_skills
        ):
            return True
        return term_matches_any(skill.skill_name, career.keywords) is not None

    def _category_score(self, skills: list[SkillProgress]) -> float:
        if not skills:
            return 0.0
        total = 0.0
        for skill in skills:
            time_bonus = min(TIME_BONUS_CAP, skill.total_time_spent / 60 * TIME_BONUS_PER_HOUR)
            completed = sum(
                1
                for c in self._state.courses
                if c.skill_area == skill.skill_name and c.is_completed
            )
            course_bonus = min(COURSE_BONUS_CAP, completed * COURSE_BONUS_PER_COMPLETION)
            total += skill.current_level.points + time_bonus + course_bonus
        return min(100.0, total / len(skills))

    def _improvement_areas(self, skills: list[SkillProgress]) -> list[str]:
        areas: list[str] = []
        undeveloped = [
            s.skill_name
            for s in skills
            if s.importance == SkillImportance.CRITICAL
            and s.current_level in (SkillLevel.NONE, SkillLevel.BEGINNER)
        ]
        if undeveloped:
            areas.append(f"Critical skills need development: {', '.join(undeveloped)}")
        if any(s.total_time_spent < LOW_PRACTICE_MINUTES for s in skills):
            areas.append("Increase practice time for key skills")
        with_courses = {c.skill_area for c in self._state.courses}
        if any(s.skill_name not in with_courses for s in skills):
            areas.append("Add learning resources for skill development")
        return areas or ["Continue steady progress on all skill areas"]

    def _next_steps(self, skills: list[SkillProgress]) -> list[str]:
        steps: list[str] = []
        critical = [s for s in skills if s.importance == SkillImportance.CRITICAL]

        for skill in critical:
            if skill.current_level in (SkillLevel.NONE, SkillLevel.BEGINNER):
                steps.append(f"Focus on critical skills: {skill.skill_name}")
                break

        in_progress = [c for c in self._state.courses if c.in_progress]
        if in_progress:
            steps.append(f"Complete in-progress course: {in_progress[0].title}")

        for skill in critical:
            if skill.current_level == SkillLevel.INTERMEDIATE:
                steps.append(f"Advance {skill.skill_name} to advanced level")
                break

        week_ago = self._clock() - timedelta(days=7)
        recent_minutes = sum(
            e.time_spent or 0
            for e in self._state.entries
            if e.type == "time_logged" and e.date >= week_ago
        )
        if recent_minutes < self.weekly_time_goal:
            steps.append(
                f"Increase weekly learning time to {self.weekly_time_goal / 60:g} hours"
            )

        return steps or ["Continue current learning plan"]

    def _add_entry(
        self,
        entry_type: ProgressEntryType,
        title: str,
        description: str,
        skill_area: str | None = None,
        time_spent: int | None = None,
    ) -> None:
        entry = ProgressEntry(
            id=_new_id("entry"),
            type=entry_type,
            title=title,
            description=description,
            skill_area=skill_area,
            time_spent=time_spent,
            date=self._clock(),
        )
        self._state.entries.insert(0, entry)
        del self._state.entries[MAX_PROGRESS_ENTRIES:]

    def _commit(self) -> None:
        self._state.last_sync = self._clock()
        self.storage.save(self._state)
        logger.debug(
            "Progress saved (%d skill(s), %d course(s))",
            len(self._state.skills),
            len(self._state.courses),
        )
        for listener in list(self._listeners):
            listener(self.state)
