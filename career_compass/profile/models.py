"""Data models for the user profile derived from questionnaire answers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SALARY_MIN = 40000
DEFAULT_SALARY_MAX = 100000


class ExperienceLevel(str, Enum):
    """Career seniority, ordered from most junior to most senior."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"

    @property
    def rank(self) -> int:
        return _EXPERIENCE_RANKS[self]


_EXPERIENCE_RANKS = {
    ExperienceLevel.ENTRY: 0,
    ExperienceLevel.MID: 1,
    ExperienceLevel.SENIOR: 2,
    ExperienceLevel.EXECUTIVE: 3,
}


class CareerCategory(str, Enum):
    """Broad field a career belongs to."""

    HEALTHCARE = "healthcare"
    TECH = "tech"
    MARKETING = "marketing"
    FINANCE = "finance"
    EDUCATION = "education"
    BUSINESS = "business"
    WELLNESS = "wellness"
    DESIGN = "design"


class WorkLifeBalance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WorkStyle(str, Enum):
    INDEPENDENT = "independent"
    COLLABORATIVE = "collaborative"
    MIXED = "mixed"


class Pace(str, Enum):
    FAST_PACED = "fast-paced"
    STEADY = "steady"
    VARIED = "varied"


class ProblemSolving(str, Enum):
    ANALYTICAL = "analytical"
    CREATIVE = "creative"
    PRACTICAL = "practical"
    MIXED = "mixed"


class Communication(str, Enum):
    FREQUENT = "frequent"
    MODERATE = "moderate"
    MINIMAL = "minimal"


class EducationLevel(str, Enum):
    """Highest education completed, ordered from lowest to highest."""

    HIGH_SCHOOL = "high-school"
    SOME_COLLEGE = "some-college"
    ASSOCIATES = "associates"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"

    @property
    def rank(self) -> int:
        return _EDUCATION_RANKS[self]


# some-college sits with high school: no degree has been completed yet
_EDUCATION_RANKS = {
    EducationLevel.HIGH_SCHOOL: 0,
    EducationLevel.SOME_COLLEGE: 0,
    EducationLevel.ASSOCIATES: 1,
    EducationLevel.BACHELORS: 2,
    EducationLevel.MASTERS: 3,
    EducationLevel.PHD: 4,
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Experience(_Frozen):
    """Work experience summary."""

    level: ExperienceLevel = Field(default=ExperienceLevel.ENTRY)
    years_of_experience: float = Field(default=0, ge=0)
    industries: tuple[str, ...] = ()
    roles: tuple[str, ...] = ()


class WorkEnvironmentPreference(_Frozen):
    """Acceptable work arrangements. All False means no stated preference."""

    remote: bool = False
    hybrid: bool = False
    onsite: bool = False

    @property
    def selected(self) -> tuple[str, ...]:
        return tuple(
            name for name in ("remote", "hybrid", "onsite") if getattr(self, name)
        )


class SalaryPreference(_Frozen):
    min: float = Field(default=DEFAULT_SALARY_MIN, ge=0)
    max: float = Field(default=DEFAULT_SALARY_MAX, ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> SalaryPreference:
        if self.min > self.max:
            raise ValueError(f"Salary min ({self.min}) exceeds max ({self.max})")
        return self


class Preferences(_Frozen):
    work_environment: WorkEnvironmentPreference = Field(
        default_factory=WorkEnvironmentPreference
    )
    salary: SalaryPreference = Field(default_factory=SalaryPreference)
    categories: tuple[CareerCategory, ...] = ()
    work_life_balance: WorkLifeBalance = WorkLifeBalance.MEDIUM
    travel_willingness: bool = False


class Personality(_Frozen):
    work_style: WorkStyle = WorkStyle.MIXED
    pace: Pace = Pace.VARIED
    problem_solving: ProblemSolving = ProblemSolving.MIXED
    communication: Communication = Communication.MODERATE
    leadership: bool = False


class Education(_Frozen):
    level: EducationLevel = EducationLevel.BACHELORS
    field: str | None = None
    willing_to_get_certifications: bool = False


class UserProfile(_Frozen):
    """Immutable snapshot of a user's answers, normalized for matching.

    Every field has a default, so a profile built from no answers at all is
    still complete. Interests and skills are sequences; duplicates are
    allowed and are removed by the matching engine.
    """

    interests: tuple[str, ...] = ()
    skills: tuple[str, ...] = ()
    experience: Experience = Field(default_factory=Experience)
    preferences: Preferences = Field(default_factory=Preferences)
    personality: Personality = Field(default_factory=Personality)
    education: Education = Field(default_factory=Education)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> UserProfile:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)
