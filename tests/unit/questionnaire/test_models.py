"""Tests for questionnaire models and answer coercion."""

import pytest


def _question(**overrides):
    from career_compass.questionnaire.models import Question

    data = {
        "id": "q-1",
        "question": "Pick one",
        "category": "interests",
        "type": "single-choice",
        "options": [{"value": "a", "label": "A"}, {"value": "b", "label": "B"}],
    }
    data.update(overrides)
    return Question.model_validate(data)


class TestQuestion:
    """Test Question validation."""

    def test_choice_question_requires_options(self):
        """Choice questions without options should be rejected."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            _question(options=None)

    def test_numeric_question_rejects_inverted_bounds(self):
        """min greater than max should be rejected."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            _question(type="range", options=None, min=10, max=1)

    def test_question_is_immutable(self):
        """Questions should be frozen."""
        from pydantic import ValidationError

        question = _question()
        with pytest.raises(ValidationError):
            question.required = True  # type: ignore[misc]

    def test_option_values(self):
        """option_values should list option values in order."""
        assert _question().option_values == ("a", "b")


class TestCoerceAnswer:
    """Test coerce_answer tagging and validation."""

    def test_single_choice_returns_choice_answer(self):
        from career_compass.questionnaire.models import ChoiceAnswer, coerce_answer

        answer = coerce_answer(_question(), "b")

        assert answer == ChoiceAnswer(value="b")

    def test_single_choice_accepts_boolean(self):
        from career_compass.questionnaire.models import BooleanAnswer, coerce_answer

        assert coerce_answer(_question(), True) == BooleanAnswer(value=True)

    def test_single_choice_rejects_unknown_option(self):
        from career_compass.questionnaire.models import (
            AnswerValidationError,
            coerce_answer,
        )

        with pytest.raises(AnswerValidationError) as exc_info:
            coerce_answer(_question(), "z")

        assert exc_info.value.question_id == "q-1"

    def test_multiple_choice_wraps_single_string(self):
        from career_compass.questionnaire.models import (
            MultiChoiceAnswer,
            coerce_answer,
        )

        question = _question(type="multiple-choice")

        assert coerce_answer(question, "a") == MultiChoiceAnswer(values=("a",))

    def test_multiple_choice_rejects_unknown_items(self):
        from career_compass.questionnaire.models import (
            AnswerValidationError,
            coerce_answer,
        )

        question = _question(type="multiple-choice")

        with pytest.raises(AnswerValidationError):
            coerce_answer(question, ["a", "nope"])

    def test_numeric_parses_strings_and_checks_bounds(self):
        from career_compass.questionnaire.models import (
            AnswerValidationError,
            NumericAnswer,
            coerce_answer,
        )

        question = _question(type="rating", options=None, min=1, max=5)

        assert coerce_answer(question, "4") == NumericAnswer(value=4.0)
        with pytest.raises(AnswerValidationError):
            coerce_answer(question, 6)
        with pytest.raises(AnswerValidationError):
            coerce_answer(question, "lots")

    def test_numeric_rejects_boolean(self):
        from career_compass.questionnaire.models import (
            AnswerValidationError,
            coerce_answer,
        )

        question = _question(type="range", options=None)

        with pytest.raises(AnswerValidationError):
            coerce_answer(question, True)

    def test_text_requires_string(self):
        from career_compass.questionnaire.models import (
            AnswerValidationError,
            TextAnswer,
            coerce_answer,
        )

        question = _question(type="text", options=None)

        assert coerce_answer(question, "hello") == TextAnswer(value="hello")
        with pytest.raises(AnswerValidationError):
            coerce_answer(question, 3)


class TestQuestionnaireResponses:
    """Test the responses mapping."""

    def test_answer_and_count(self):
        """Empty strings and None do not count as answered."""
        from career_compass.questionnaire.models import QuestionnaireResponses

        responses = QuestionnaireResponses()
        responses.answer("a", "x")
        responses.answer("b", "")
        responses.answer("c", False)
        responses.answer("d", [])

        assert len(responses) == 4
        assert responses.answered_count() == 3

    def test_answer_overwrites(self):
        from career_compass.questionnaire.models import QuestionnaireResponses

        responses = QuestionnaireResponses({"a": "x"})
        responses.answer("a", "y")

        assert responses["a"] == "y"
        assert responses.answered_count() == 1

    def test_answer_rejects_empty_id(self):
        from career_compass.questionnaire.models import QuestionnaireResponses

        with pytest.raises(ValueError):
            QuestionnaireResponses().answer("", "x")

    def test_list_answers_are_copied(self):
        """Mutating the caller's list should not change stored answers."""
        from career_compass.questionnaire.models import QuestionnaireResponses

        values = ["a"]
        responses = QuestionnaireResponses()
        responses.answer("q", values)
        values.append("b")

        assert responses["q"] == ["a"]
        assert responses.to_dict()["q"] is not responses["q"]

    def test_reset_clears_answers(self):
        from career_compass.questionnaire.models import QuestionnaireResponses

        responses = QuestionnaireResponses({"a": "x", "b": "y"})
        responses.reset()

        assert len(responses) == 0
        assert responses.answered_count() == 0
