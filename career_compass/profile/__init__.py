"""User profile model and builder.

Public API:
    - build_user_profile: fold questionnaire answers into a UserProfile
    - UserProfile: immutable, fully defaulted profile snapshot
"""

from career_compass.profile.builder import build_user_profile
from career_compass.profile.models import (
    CareerCategory,
    Communication,
    Education,
    EducationLevel,
    Experience,
    ExperienceLevel,
    Pace,
    Personality,
    Preferences,
    ProblemSolving,
    SalaryPreference,
    UserProfile,
    WorkEnvironmentPreference,
    WorkLifeBalance,
    WorkStyle,
)

__all__ = [
    "build_user_profile",
    "UserProfile",
    "CareerCategory",
    "Communication",
    "Education",
    "EducationLevel",
    "Experience",
    "ExperienceLevel",
    "Pace",
    "Personality",
    "Preferences",
    "ProblemSolving",
    "SalaryPreference",
    "WorkEnvironmentPreference",
    "WorkLifeBalance",
    "WorkStyle",
]
