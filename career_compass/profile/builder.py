"""Fold questionnaire answers into a UserProfile."""

from __future__ import annotations

from collections.abc import Mapping

from career_compass.profile.models import (
    DEFAULT_SALARY_MAX,
    DEFAULT_SALARY_MIN,
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
from career_compass.questionnaire.bank import Questionnaire, get_default_questionnaire
from career_compass.questionnaire.models import (
    Answer,
    AnswerValidationError,
    BooleanAnswer,
    ChoiceAnswer,
    MultiChoiceAnswer,
    NumericAnswer,
    TextAnswer,
    coerce_answer,
    is_answered,
)
from career_compass.utils.logging import get_logger

logger = get_logger("profile.builder")

# Question ids read by the builder.
INTEREST_QUESTIONS = ("interests-1", "interests-2")
SKILL_QUESTIONS = ("skills-1",)
SKILL_TEXT_QUESTIONS = ("skills-3",)
CAREER_STAGE_QUESTION = "experience-1"
YEARS_QUESTION = "experience-2"
INDUSTRY_QUESTION = "experience-3"
ROLES_QUESTION = "experience-4"
WORK_STYLE_QUESTION = "personality-1"
PACE_QUESTION = "personality-2"
PROBLEM_SOLVING_QUESTION = "personality-3"
COMMUNICATION_QUESTION = "personality-4"
LEADERSHIP_QUESTION = "personality-5"
WORK_ENVIRONMENT_QUESTION = "preferences-1"
SALARY_MIN_QUESTION = "preferences-2"
SALARY_MAX_QUESTION = "preferences-3"
WORK_LIFE_BALANCE_QUESTION = "preferences-4"
TRAVEL_QUESTION = "preferences-5"
CATEGORIES_QUESTION = "preferences-6"
EDUCATION_LEVEL_QUESTION = "education-1"
EDUCATION_FIELD_QUESTION = "education-2"
CERTIFICATIONS_QUESTION = "education-3"

# Option value meaning "nothing to report"; dropped from list answers.
_NONE_OPTION = "none"

# Career stage answer -> (level, typical years when years were not answered)
_CAREER_STAGES: dict[str, tuple[ExperienceLevel, float]] = {
    "student": (ExperienceLevel.ENTRY, 0),
    "recent-grad": (ExperienceLevel.ENTRY, 0),
    "first-job": (ExperienceLevel.ENTRY, 0.5),
    "early-career": (ExperienceLevel.ENTRY, 2),
    "mid-career": (ExperienceLevel.MID, 5),
    "entry": (ExperienceLevel.ENTRY, 0),
    "mid": (ExperienceLevel.MID, 5),
    "senior": (ExperienceLevel.SENIOR, 10),
    "executive": (ExperienceLevel.EXECUTIVE, 15),
}

_AFFIRMATIVE = {"yes", "maybe", "sometimes"}


def _validated_answers(
    responses: Mapping[str, object], questionnaire: Questionnaire
) -> dict[str, Answer]:
    answers: dict[str, Answer] = {}
    for question_id, raw in responses.items():
        if not is_answered(raw):
            continue
        question = questionnaire.get(question_id)
        if question is None:
            logger.debug("Ignoring answer to unknown question '%s'", question_id)
            continue
        try:
            answers[question_id] = coerce_answer(question, raw)
        except AnswerValidationError as e:
            logger.warning("Discarding invalid answer: %s", e)
    return answers


def _choice(answers: Mapping[str, Answer], question_id: str) -> str | None:
    answer = answers.get(question_id)
    if isinstance(answer, ChoiceAnswer):
        return answer.value
    return None


def _multi(answers: Mapping[str, Answer], question_id: str) -> list[str]:
    answer = answers.get(question_id)
    if isinstance(answer, MultiChoiceAnswer):
        return [value for value in answer.values if value != _NONE_OPTION]
    return []


def _number(answers: Mapping[str, Answer], question_id: str) -> float | None:
    answer = answers.get(question_id)
    if isinstance(answer, NumericAnswer):
        return answer.value
    return None


def _text(answers: Mapping[str, Answer], question_id: str) -> str | None:
    answer = answers.get(question_id)
    if isinstance(answer, TextAnswer) and answer.value.strip():
        return answer.value.strip()
    return None


def _text_list(answers: Mapping[str, Answer], question_id: str) -> list[str]:
    text = _text(answers, question_id)
    if text is None:
        return []
    parts = text.replace(";", ",").replace("\n", ",").split(",")
    return [part.strip() for part in parts if part.strip()]


def _affirmative(answers: Mapping[str, Answer], question_id: str) -> bool:
    answer = answers.get(question_id)
    if isinstance(answer, BooleanAnswer):
        return answer.value
    if isinstance(answer, ChoiceAnswer):
        return answer.value in _AFFIRMATIVE
    return False


def _enum_choice(answers, question_id, enum_cls, default):
    value = _choice(answers, question_id)
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Answer '%s' to %s is not a valid %s; using default",
            value,
            question_id,
            enum_cls.__name__,
        )
        return default


def _build_experience(answers: Mapping[str, Answer]) -> Experience:
    level = ExperienceLevel.ENTRY
    typical_years = 0.0
    stage = _choice(answers, CAREER_STAGE_QUESTION)
    if stage is not None and stage in _CAREER_STAGES:
        level, typical_years = _CAREER_STAGES[stage]

    years = _number(answers, YEARS_QUESTION)
    if years is None:
        years = typical_years

    return Experience(
        level=level,
        years_of_experience=max(0.0, years),
        industries=tuple(_multi(answers, INDUSTRY_QUESTION)),
        roles=tuple(_text_list(answers, ROLES_QUESTION)),
    )


def _build_preferences(answers: Mapping[str, Answer]) -> Preferences:
    environments = set(_multi(answers, WORK_ENVIRONMENT_QUESTION))

    salary_min = _number(answers, SALARY_MIN_QUESTION)
    salary_max = _number(answers, SALARY_MAX_QUESTION)
    if salary_min is None:
        salary_min = DEFAULT_SALARY_MIN
    salary_min = max(0.0, salary_min)
    if salary_max is not None:
        salary_max = max(0.0, salary_max)
    else:
        salary_max = max(DEFAULT_SALARY_MAX, salary_min)
    if salary_min > salary_max:
        salary_min, salary_max = salary_max, salary_min

    categories: list[CareerCategory] = []
    for value in _multi(answers, CATEGORIES_QUESTION):
        try:
            categories.append(CareerCategory(value))
        except ValueError:
            logger.debug("Ignoring unknown career category '%s'", value)

    return Preferences(
        work_environment=WorkEnvironmentPreference(
            remote="remote" in environments,
            hybrid="hybrid" in environments,
            onsite="onsite" in environments,
        ),
        salary=SalaryPreference(min=salary_min, max=salary_max),
        categories=tuple(categories),
        work_life_balance=_enum_choice(
            answers, WORK_LIFE_BALANCE_QUESTION, WorkLifeBalance, WorkLifeBalance.MEDIUM
        ),
        travel_willingness=_affirmative(answers, TRAVEL_QUESTION),
    )


def _build_personality(answers: Mapping[str, Answer]) -> Personality:
    return Personality(
        work_style=_enum_choice(
            answers, WORK_STYLE_QUESTION, WorkStyle, WorkStyle.MIXED
        ),
        pace=_enum_choice(answers, PACE_QUESTION, Pace, Pace.VARIED),
        problem_solving=_enum_choice(
            answers, PROBLEM_SOLVING_QUESTION, ProblemSolving, ProblemSolving.MIXED
        ),
        communication=_enum_choice(
            answers, COMMUNICATION_QUESTION, Communication, Communication.MODERATE
        ),
        leadership=_affirmative(answers, LEADERSHIP_QUESTION),
    )


def _build_education(answers: Mapping[str, Answer]) -> Education:
    return Education(
        level=_enum_choice(
            answers,
            EDUCATION_LEVEL_QUESTION,
            EducationLevel,
            EducationLevel.BACHELORS,
        ),
        field=_text(answers, EDUCATION_FIELD_QUESTION),
        willing_to_get_certifications=_affirmative(answers, CERTIFICATIONS_QUESTION),
    )


def build_user_profile(
    responses: Mapping[str, object],
    questionnaire: Questionnaire | None = None,
) -> UserProfile:
    """Build a complete UserProfile from (possibly partial) responses.

    Never raises for answer content: answers that do not fit their question
    are logged and ignored, and every missing value falls back to the
    UserProfile defaults.
    """
    questionnaire = questionnaire or get_default_questionnaire()
    answers = _validated_answers(responses, questionnaire)

    interests: list[str] = []
    for question_id in INTEREST_QUESTIONS:
        interests.extend(_multi(answers, question_id))

    skills: list[str] = []
    for question_id in SKILL_QUESTIONS:
        skills.extend(_multi(answers, question_id))
    for question_id in SKILL_TEXT_QUESTIONS:
        skills.extend(_text_list(answers, question_id))

    return UserProfile(
        interests=tuple(interests),
        skills=tuple(skills),
        experience=_build_experience(answers),
        preferences=_build_preferences(answers),
        personality=_build_personality(answers),
        education=_build_education(answers),
    )
