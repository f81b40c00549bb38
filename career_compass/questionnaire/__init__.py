"""Career questionnaire definitions.

Public API:
    - Question / QuestionCategory / QuestionType: question definitions
    - Answer and its tagged members: validated answer values
    - QuestionnaireResponses: raw answers keyed by question id
    - Questionnaire: ordered question lookup
    - get_category_progress: required-question completion per category
"""

from career_compass.questionnaire.bank import (
    DEFAULT_QUESTIONS,
    Questionnaire,
    get_default_questionnaire,
)
from career_compass.questionnaire.models import (
    Answer,
    AnswerValidationError,
    BooleanAnswer,
    ChoiceAnswer,
    MultiChoiceAnswer,
    NumericAnswer,
    Question,
    QuestionCategory,
    QuestionnaireResponses,
    QuestionOption,
    QuestionType,
    TextAnswer,
    coerce_answer,
    is_answered,
)
from career_compass.questionnaire.progress import (
    count_answered,
    get_category_progress,
    get_overall_progress,
)

__all__ = [
    "DEFAULT_QUESTIONS",
    "Questionnaire",
    "get_default_questionnaire",
    "Answer",
    "AnswerValidationError",
    "BooleanAnswer",
    "ChoiceAnswer",
    "MultiChoiceAnswer",
    "NumericAnswer",
    "TextAnswer",
    "Question",
    "QuestionCategory",
    "QuestionOption",
    "QuestionType",
    "QuestionnaireResponses",
    "coerce_answer",
    "is_answered",
    "count_answered",
    "get_category_progress",
    "get_overall_progress",
]
