"""Real-time match recalculation over a growing set of answers."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping

from career_compass.matching.models import CareerMatch
from career_compass.matching.service import CareerMatchingService
from career_compass.profile.builder import build_user_profile
from career_compass.questionnaire.bank import Questionnaire, get_default_questionnaire
from career_compass.questionnaire.models import (
    QuestionnaireResponses,
    RawAnswer,
    is_answered,
)
from career_compass.realtime.config import RealtimeConfig, get_realtime_config
from career_compass.realtime.models import (
    LiveCareerUpdate,
    calculate_trend,
    describe_update,
)
from career_compass.utils.logging import get_logger

logger = get_logger("realtime")


def _fingerprint(responses: Mapping[str, RawAnswer]) -> str:
    return json.dumps(dict(responses), sort_keys=True, default=str)


class RealtimeCareerMatcher:
    """Re-runs matching as answers arrive.

    Nothing is computed until enough questions are answered. Each qualifying
    call rebuilds the profile and re-scores the whole catalog; identical
    answers reuse the previous result.
    """

    def __init__(
        self,
        catalog: Iterable[object],
        matching_service: CareerMatchingService | None = None,
        questionnaire: Questionnaire | None = None,
        config: RealtimeConfig | None = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.matching_service = matching_service or CareerMatchingService()
        self.questionnaire = questionnaire
        self.config = config or get_realtime_config()

        self.responses = QuestionnaireResponses()
        self._fingerprint: str | None = None
        self._last_matches: list[CareerMatch] = []
        self._score_history: dict[str, list[float]] = {}
        self._updates: list[LiveCareerUpdate] = []
        self.recalculation_count = 0

    @property
    def last_matches(self) -> list[CareerMatch]:
        return list(self._last_matches)

    @property
    def updates(self) -> list[LiveCareerUpdate]:
        """Score movements from the most recent recalculation."""
        return list(self._updates)

    def significant_updates(self) -> list[LiveCareerUpdate]:
        return [u for u in self._updates if u.is_significant]

    def score_history(self, career_id: str) -> list[float]:
        return list(self._score_history.get(career_id, []))

    def rising_careers(self, limit: int = 3) -> list[LiveCareerUpdate]:
        """Careers trending up, largest change first."""
        rising = [u for u in self._updates if u.trend == "rising"]
        rising.sort(key=lambda u: u.change, reverse=True)
        return rising[:limit]

    def answered_questions(self, responses: QuestionnaireResponses | None = None) -> int:
        """Count answered ids that are questions of the questionnaire."""
        source = self.responses if responses is None else responses
        questionnaire = self.questionnaire
        if questionnaire is None:
            questionnaire = get_default_questionnaire()
        return sum(
            1
            for question_id, value in source.items()
            if question_id in questionnaire and is_answered(value)
        )

    def should_recalculate(self, responses: QuestionnaireResponses | None = None) -> bool:
        """Return True once enough questions are answered."""
        return self.answered_questions(responses) >= self.config.signal_threshold

    def recalculate(
        self, responses: QuestionnaireResponses | None = None
    ) -> list[CareerMatch]:
        """Return the current top matches, or [] below the signal threshold."""
        source = self.responses if responses is None else responses
        if not self.should_recalculate(source):
            logger.debug(
                "Skipping recalculation: %d answered, need %d",
                self.answered_questions(source),
                self.config.signal_threshold,
            )
            return []

        try:
            fingerprint = _fingerprint(source)
            if fingerprint == self._fingerprint:
                return list(self._last_matches)

            profile = build_user_profile(source, questionnaire=self.questionnaire)
            ranked = self.matching_service.match_careers(profile, self.catalog)
            self._record_scores(ranked)
        except Exception:
            logger.exception("Career recalculation failed")
            return []

        self._fingerprint = fingerprint
        self._last_matches = ranked[: self.config.top_n]
        self.recalculation_count += 1
        logger.debug(
            "Recalculated %d match(es); top score %.1f",
            len(ranked),
            ranked[0].overall_score if ranked else 0.0,
        )
        return list(self._last_matches)

    def answer(self, question_id: str, value: RawAnswer) -> list[CareerMatch]:
        """Record an answer and return the refreshed top matches."""
        self.responses.answer(question_id, value)
        return self.recalculate()

    def reset(self) -> None:
        """Forget all answers, matches and score history."""
        self.responses.reset()
        self._fingerprint = None
        self._last_matches = []
        self._score_history.clear()
        self._updates = []
        self.recalculation_count = 0

    def _record_scores(self, ranked: list[CareerMatch]) -> None:
        limit = self.config.history_limit
        threshold = self.config.significant_change
        updates: list[LiveCareerUpdate] = []

        for match in ranked:
            career = match.career
            history = self._score_history.setdefault(career.id, [])
            old_score = history[-1] if history else None
            history.append(match.overall_score)
            del history[:-limit]

            change = 0.0 if old_score is None else match.overall_score - old_score
            updates.append(
                LiveCareerUpdate(
                    career_id=career.id,
                    title=career.title,
                    old_score=old_score,
                    new_score=match.overall_score,
                    trend=calculate_trend(history),
                    is_significant=abs(change) >= threshold,
                    message=describe_update(
                        career.title, old_score, match.overall_score
                    ),
                )
            )

        self._updates = updates
