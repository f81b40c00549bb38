"""Learning progress tracking.

Public API:
    - ProgressTrackingService: track skills, courses and time; score readiness
    - ProgressStorage: persistence protocol
    - InMemoryProgressStorage, JsonFileProgressStorage: storage backends
"""

from career_compass.progress.models import (
    CareerReadinessScore,
    CourseProgress,
    ProgressEntry,
    ProgressState,
    ProgressSummary,
    SkillLevel,
    SkillProgress,
)
from career_compass.progress.service import (
    ProgressTrackingService,
    UnknownProgressItemError,
)
from career_compass.progress.storage import (
    InMemoryProgressStorage,
    JsonFileProgressStorage,
    ProgressStorage,
)

__all__ = [
    "CareerReadinessScore",
    "CourseProgress",
    "InMemoryProgressStorage",
    "JsonFileProgressStorage",
    "ProgressEntry",
    "ProgressState",
    "ProgressStorage",
    "ProgressSummary",
    "ProgressTrackingService",
    "SkillLevel",
    "SkillProgress",
    "UnknownProgressItemError",
]
