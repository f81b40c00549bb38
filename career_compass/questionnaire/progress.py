"""Questionnaire completion tracking."""

from __future__ import annotations

from collections.abc import Mapping

from career_compass.questionnaire.bank import Questionnaire, get_default_questionnaire
from career_compass.questionnaire.models import QuestionCategory, is_answered


def _percent_answered(responses: Mapping[str, object], question_ids: list[str]) -> float:
    if not question_ids:
        return 100.0
    answered = sum(1 for qid in question_ids if is_answered(responses.get(qid)))
    return answered / len(question_ids) * 100


def get_category_progress(
    responses: Mapping[str, object],
    category: QuestionCategory | str,
    questionnaire: Questionnaire | None = None,
) -> float:
    """Percentage of required questions in a category that are answered.

    A category without required questions has nothing outstanding and
    reports 100.
    """
    questionnaire = questionnaire or get_default_questionnaire()
    required_ids = [q.id for q in questionnaire.by_category(category) if q.required]
    return _percent_answered(responses, required_ids)


def get_overall_progress(
    responses: Mapping[str, object],
    questionnaire: Questionnaire | None = None,
) -> float:
    """Percentage of all required questions that are answered."""
    questionnaire = questionnaire or get_default_questionnaire()
    return _percent_answered(responses, [q.id for q in questionnaire.required()])


def count_answered(responses: Mapping[str, object]) -> int:
    """Number of response values that count as answered."""
    return sum(1 for value in responses.values() if is_answered(value))
