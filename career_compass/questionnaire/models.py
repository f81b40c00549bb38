"""Data models for the career questionnaire."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

RawAnswer = str | int | float | bool | list[str]


class QuestionCategory(str, Enum):
    """Section of the questionnaire a question belongs to."""

    INTERESTS = "interests"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PERSONALITY = "personality"
    PREFERENCES = "preferences"
    EDUCATION = "education"


class QuestionType(str, Enum):
    """Input widget / value shape of a question."""

    SINGLE_CHOICE = "single-choice"
    MULTIPLE_CHOICE = "multiple-choice"
    RATING = "rating"
    RANGE = "range"
    TEXT = "text"


_CHOICE_TYPES = {QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE}
_NUMERIC_TYPES = {QuestionType.RATING, QuestionType.RANGE}


class AnswerValidationError(ValueError):
    """Raised when a raw answer does not fit its question."""

    def __init__(self, question_id: str, message: str) -> None:
        super().__init__(f"{question_id}: {message}")
        self.question_id = question_id


class QuestionOption(BaseModel):
    """A selectable option of a choice question."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="Stored answer value")
    label: str = Field(..., description="Human readable label")


class Question(BaseModel):
    """A single questionnaire question. Immutable once defined."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable question identifier")
    question: str = Field(..., description="Question text")
    category: QuestionCategory
    type: QuestionType
    options: tuple[QuestionOption, ...] | None = Field(
        default=None, description="Options for choice questions"
    )
    min: float | None = Field(default=None, description="Lower bound (numeric types)")
    max: float | None = Field(default=None, description="Upper bound (numeric types)")
    required: bool = Field(default=False)
    help_text: str | None = Field(default=None)

    @model_validator(mode="after")
    def validate_shape(self) -> Question:
        """Ensure options and bounds are consistent with the question type."""
        if self.type in _CHOICE_TYPES and not self.options:
            raise ValueError(f"Choice question '{self.id}' must declare options")
        if (
            self.type in _NUMERIC_TYPES
            and self.min is not None
            and self.max is not None
            and self.min > self.max
        ):
            raise ValueError(
                f"Question '{self.id}' has min ({self.min}) greater than max ({self.max})"
            )
        return self

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options or ())


class ChoiceAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["choice"] = "choice"
    value: str


class MultiChoiceAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["multi"] = "multi"
    values: tuple[str, ...] = ()


class NumericAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float


class TextAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


class BooleanAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    value: bool


Answer = Annotated[
    Union[ChoiceAnswer, MultiChoiceAnswer, NumericAnswer, TextAnswer, BooleanAnswer],
    Field(discriminator="kind"),
]


def coerce_answer(question: Question, raw: object) -> Answer:
    """Validate a raw response value against its question and tag it.

    Raises:
        AnswerValidationError: If the value does not fit the question type.
    """
    qtype = question.type

    if qtype == QuestionType.SINGLE_CHOICE:
        if isinstance(raw, bool):
            return BooleanAnswer(value=raw)
        if not isinstance(raw, str):
            raise AnswerValidationError(
                question.id, f"expected a single option, got {type(raw).__name__}"
            )
        if raw not in question.option_values:
            raise AnswerValidationError(question.id, f"unknown option '{raw}'")
        return ChoiceAnswer(value=raw)

    if qtype == QuestionType.MULTIPLE_CHOICE:
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)) or not all(
            isinstance(item, str) for item in raw
        ):
            raise AnswerValidationError(question.id, "expected a list of options")
        unknown = [item for item in raw if item not in question.option_values]
        if unknown:
            raise AnswerValidationError(
                question.id, f"unknown option(s): {', '.join(unknown)}"
            )
        return MultiChoiceAnswer(values=tuple(raw))

    if qtype in _NUMERIC_TYPES:
        if isinstance(raw, bool):
            raise AnswerValidationError(question.id, "expected a number, got bool")
        if isinstance(raw, str):
            try:
                raw = float(raw.strip())
            except ValueError as e:
                raise AnswerValidationError(
                    question.id, f"expected a number, got '{raw}'"
                ) from e
        if not isinstance(raw, (int, float)):
            raise AnswerValidationError(
                question.id, f"expected a number, got {type(raw).__name__}"
            )
        try:
            value = float(raw)
        except OverflowError as e:
            raise AnswerValidationError(question.id, "number is too large") from e
        if not math.isfinite(value):
            raise AnswerValidationError(
                question.id, f"expected a finite number, got {value}"
            )
        if question.min is not None and value < question.min:
            raise AnswerValidationError(
                question.id, f"{value} is below minimum {question.min}"
            )
        if question.max is not None and value > question.max:
            raise AnswerValidationError(
                question.id, f"{value} is above maximum {question.max}"
            )
        return NumericAnswer(value=value)

    if not isinstance(raw, str):
        raise AnswerValidationError(
            question.id, f"expected text, got {type(raw).__name__}"
        )
    return TextAnswer(value=raw)


def is_answered(value: object) -> bool:
    """Return True if a response value counts as answered.

    Only absence (None) and the empty string are unanswered; False and
    empty lists are explicit answers.
    """
    return value is not None and value != ""


class QuestionnaireResponses(Mapping[str, RawAnswer]):
    """Raw answers keyed by question id.

    Grows as the user answers; the only way to remove answers is reset().
    """

    def __init__(self, initial: Mapping[str, RawAnswer] | None = None) -> None:
        self._answers: dict[str, RawAnswer] = dict(initial or {})

    def __getitem__(self, question_id: str) -> RawAnswer:
        return self._answers[question_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"QuestionnaireResponses({self._answers!r})"

    def answer(self, question_id: str, value: RawAnswer) -> None:
        """Record (or overwrite) the answer to a question."""
        if not question_id:
            raise ValueError("question_id must be non-empty")
        if isinstance(value, list):
            value = list(value)
        self._answers[question_id] = value

    def answered_count(self) -> int:
        """Number of questions with an answered value."""
        return sum(1 for value in self._answers.values() if is_answered(value))

    def reset(self) -> None:
        """Discard every answer."""
        self._answers.clear()

    def to_dict(self) -> dict[str, RawAnswer]:
        """Return a detached copy of the answers."""
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in self._answers.items()
        }
