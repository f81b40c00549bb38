"""Career matching service implementation."""

from __future__ import annotations

import math
from collections.abc import Iterable

from career_compass.catalog.models import Career, CareerArchetype, CatalogEntryError
from career_compass.catalog.service import SkippedEntry, parse_career
from career_compass.matching.config import (
    IMPORTANCE_WEIGHTS,
    NEUTRAL_SCORE,
    MatchingConfig,
    get_matching_config,
)
from career_compass.matching.matchers import (
    dedupe_terms,
    expand_skills,
    find_matching_skills,
    normalize_skill,
    term_matches_any,
)
from career_compass.matching.models import (
    CareerMatch,
    MatchDetails,
    MatchReport,
    SubScores,
)
from career_compass.profile.models import (
    CareerCategory,
    Communication,
    ExperienceLevel,
    Pace,
    ProblemSolving,
    UserProfile,
    WorkLifeBalance,
    WorkStyle,
)
from career_compass.utils.logging import get_logger

logger = get_logger("matching")

# Experience
EXPERIENCE_LEVEL_DECAY = 0.6
EXPERIENCE_YEARS_SCALE = 4.0
EXPERIENCE_LEVEL_SHARE = 0.7
RELATED_ROLE_BONUS = 10.0
INDUSTRY_BONUS = 5.0

# Typical years of experience per level; None means open-ended.
TYPICAL_YEARS: dict[ExperienceLevel, tuple[float, float | None]] = {
    ExperienceLevel.ENTRY: (0.0, 2.0),
    ExperienceLevel.MID: (2.0, 6.0),
    ExperienceLevel.SENIOR: (5.0, 12.0),
    ExperienceLevel.EXECUTIVE: (10.0, None),
}

# Preferences
PREFERENCE_ENVIRONMENT_SHARE = 0.4
PREFERENCE_SALARY_SHARE = 0.4
PREFERENCE_CATEGORY_SHARE = 0.2
SALARY_ABOVE_RANGE_SCORE = 50.0
PREFERENCE_PENALTY = 10.0
_DEMANDING_HOURS = ("50+", "55+", "60+", "long hours", "overtime", "on-call")

# Interests
INTEREST_TASK_CREDIT = 0.5
INTEREST_CATEGORY_HINTS: dict[str, CareerCategory] = {
    "technology": CareerCategory.TECH,
    "coding": CareerCategory.TECH,
    "data": CareerCategory.TECH,
    "design": CareerCategory.DESIGN,
    "health": CareerCategory.HEALTHCARE,
    "finance": CareerCategory.FINANCE,
    "marketing": CareerCategory.MARKETING,
    "creating-content": CareerCategory.MARKETING,
    "coaching": CareerCategory.EDUCATION,
    "strategy": CareerCategory.BUSINESS,
}

# Personality
PERSONALITY_EXACT = 1.0
PERSONALITY_FLEXIBLE = 0.75
PERSONALITY_UNRELATED = 0.5
PERSONALITY_OPPOSITE = 0.25
LEADERSHIP_BONUS = 10.0

_FLEXIBLE_VALUES = {"mixed", "varied", "moderate"}
_OPPOSITE_VALUES = {
    frozenset({"independent", "collaborative"}),
    frozenset({"fast-paced", "steady"}),
    frozenset({"analytical", "creative"}),
    frozenset({"frequent", "minimal"}),
}
_TRAIT_LABELS = {
    "work_style": "work style",
    "pace": "pace",
    "problem_solving": "problem-solving approach",
    "communication": "communication preference",
}

# Archetype inference
_COLLABORATION_WORDS = (
    "collaborat",
    "meeting",
    "team",
    "client",
    "patient",
    "present",
    "stakeholder",
    "coordinat",
)
_ANALYTICAL_TITLE_WORDS = (
    "analyst",
    "data",
    "engineer",
    "developer",
    "scientist",
    "accountant",
)
_CREATIVE_TITLE_WORDS = ("design", "creative", "content", "writer", "artist", "marketing")
_PRACTICAL_TITLE_WORDS = ("nurse", "technician", "therapist", "assistant", "coordinator")

# Confidence
CONFIDENCE_BASE = 0.5
CONFIDENCE_FLOOR = 0.3
CONFIDENCE_SUPPORTED_SCORE = 60.0

MAX_RECOMMENDATIONS = 5
_LIST_PREVIEW = 3


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _education_rank(value: str) -> int | None:
    normalized = value.lower().strip()
    if "phd" in normalized or "doctor" in normalized:
        return 4
    if "master" in normalized:
        return 3
    if "bachelor" in normalized:
        return 2
    if "associate" in normalized:
        return 1
    if "high school" in normalized or "diploma" in normalized:
        return 0
    return None


def _is_demanding(hours: str) -> bool:
    value = hours.lower()
    return any(marker in value for marker in _DEMANDING_HOURS)


def _personality_compatibility(user_value: str, career_value: str) -> float:
    if user_value == career_value:
        return PERSONALITY_EXACT
    if user_value in _FLEXIBLE_VALUES or career_value in _FLEXIBLE_VALUES:
        return PERSONALITY_FLEXIBLE
    if frozenset({user_value, career_value}) in _OPPOSITE_VALUES:
        return PERSONALITY_OPPOSITE
    return PERSONALITY_UNRELATED


def _format_salary(low: float, high: float) -> str:
    return f"${low:,.0f}-${high:,.0f}"


def infer_archetype(career: Career) -> CareerArchetype:
    """Derive a working-style profile from a career's tasks, title and trends."""
    tasks = career.daily_tasks
    if tasks:
        collaboration = sum(
            task.time_percentage
            for task in tasks
            if any(word in task.task.lower() for word in _COLLABORATION_WORDS)
        )
        if collaboration > 30:
            work_style = WorkStyle.COLLABORATIVE
        elif collaboration < 20:
            work_style = WorkStyle.INDEPENDENT
        else:
            work_style = WorkStyle.MIXED

        if collaboration > 40:
            communication = Communication.FREQUENT
        elif collaboration < 15:
            communication = Communication.MINIMAL
        else:
            communication = Communication.MODERATE
    else:
        work_style = WorkStyle.MIXED
        communication = Communication.MODERATE

    trend_text = " ".join((*career.industry_trends, career.description)).lower()
    pace = Pace.FAST_PACED if "fast-paced" in trend_text else Pace.VARIED

    title = career.title.lower()
    if any(word in title for word in _ANALYTICAL_TITLE_WORDS):
        problem_solving = ProblemSolving.ANALYTICAL
    elif any(word in title for word in _CREATIVE_TITLE_WORDS):
        problem_solving = ProblemSolving.CREATIVE
    elif any(word in title for word in _PRACTICAL_TITLE_WORDS):
        problem_solving = ProblemSolving.PRACTICAL
    else:
        problem_solving = ProblemSolving.MIXED

    leadership_track = any(
        level in (ExperienceLevel.SENIOR, ExperienceLevel.EXECUTIVE)
        for level in career.expected_levels
    )

    return CareerArchetype(
        work_style=work_style,
        pace=pace,
        problem_solving=problem_solving,
        communication=communication,
        leadership_track=leadership_track,
    )


class CareerMatchingService:
    """Service for scoring a profile against a career catalog."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_matching_config()

    def score_skills(
        self, career: Career, profile: UserProfile
    ) -> tuple[float, list[str], list[str]]:
        """Score the career's skill requirements against a profile.

        Returns:
            skills_score, matched_skills, missing_skills
        """
        requirements = career.required_skills
        if not requirements:
            return NEUTRAL_SCORE, [], []

        available = expand_skills(dedupe_terms(profile.skills))
        matched, missing = find_matching_skills(
            [requirement.skill for requirement in requirements],
            available,
            fuzzy=self.config.skill_fuzzy_match,
            threshold=self.config.skill_fuzzy_threshold,
        )

        hits = set(matched)
        total_weight = sum(IMPORTANCE_WEIGHTS[r.importance] for r in requirements)
        matched_weight = sum(
            IMPORTANCE_WEIGHTS[r.importance] for r in requirements if r.skill in hits
        )

        if total_weight <= 0:
            return NEUTRAL_SCORE, matched, missing
        return _clamp(matched_weight / total_weight * 100), matched, missing

    def score_interests(
        self, career: Career, profile: UserProfile
    ) -> tuple[float, list[str]]:
        """Score how well the user's interests line up with a career.

        Keyword and category hits earn full credit; a mention in one of the
        daily tasks earns half.
        """
        interests = dedupe_terms(profile.interests)
        if not interests:
            return NEUTRAL_SCORE, []

        tags = (
            *career.keywords,
            career.category.value,
            career.title,
            *career.alternative_titles,
        )
        tasks = [task.task for task in career.daily_tasks]

        credit = 0.0
        matched: list[str] = []
        for interest in interests:
            hinted = INTEREST_CATEGORY_HINTS.get(normalize_skill(interest))
            if hinted == career.category or term_matches_any(interest, tags):
                credit += 1.0
                matched.append(interest)
            elif term_matches_any(interest, tasks):
                credit += INTEREST_TASK_CREDIT
                matched.append(interest)

        return _clamp(credit / len(interests) * 100), matched

    def score_experience(
        self, career: Career, profile: UserProfile
    ) -> tuple[float, str, list[str]]:
        """Score seniority and background against the career's expected band.

        Returns:
            experience_score, reasoning, relevant_experience
        """
        levels = career.expected_levels
        if not levels:
            return NEUTRAL_SCORE, "No seniority information", []

        experience = profile.experience
        distance = min(abs(experience.level.rank - level.rank) for level in levels)
        level_score = 100 * EXPERIENCE_LEVEL_DECAY**distance

        low = min(TYPICAL_YEARS[level][0] for level in levels)
        highs = [TYPICAL_YEARS[level][1] for level in levels]
        high = None
        if all(h is not None for h in highs):
            high = max(h for h in highs if h is not None)

        years = experience.years_of_experience
        if years < low:
            year_gap = low - years
        elif high is not None and years > high:
            year_gap = years - high
        else:
            year_gap = 0.0
        years_score = 100 * math.exp(-year_gap / EXPERIENCE_YEARS_SCALE)

        score = (
            EXPERIENCE_LEVEL_SHARE * level_score
            + (1 - EXPERIENCE_LEVEL_SHARE) * years_score
        )

        relevant: list[str] = []
        role_targets = (*career.related_roles, career.title, *career.alternative_titles)
        for role in dedupe_terms(experience.roles):
            if term_matches_any(role, role_targets):
                score += RELATED_ROLE_BONUS
                relevant.append(f"Related role experience: {role}")
        for industry in dedupe_terms(experience.industries):
            if term_matches_any(industry, (*career.keywords, career.category.value)):
                score += INDUSTRY_BONUS
                relevant.append(f"Industry experience in {industry}")

        band = "/".join(level.value for level in levels)
        if distance == 0 and year_gap == 0:
            reasoning = f"Your {experience.level.value}-level experience fits this {band} role"
        elif distance == 0:
            expected = f"{low:g}+" if high is None else f"{low:g}-{high:g}"
            reasoning = (
                f"Level fits, but {years:g} year(s) is outside the typical {expected}"
            )
        else:
            reasoning = (
                f"Role targets {band} level; you are {experience.level.value} level"
            )

        return _clamp(score), reasoning, relevant

    def score_preferences(
        self, career: Career, profile: UserProfile
    ) -> tuple[float, list[str], list[str]]:
        """Score work environment, salary and field preferences.

        Returns:
            preferences_score, matched_preferences, tradeoffs
        """
        preferences = profile.preferences
        matched: list[str] = []
        tradeoffs: list[str] = []

        wanted = preferences.work_environment.selected
        offered = career.work_environment.offered
        overlap = [name for name in wanted if name in offered]
        if not wanted:
            environment_score = NEUTRAL_SCORE
        elif overlap:
            environment_score = 100.0
            matched.append(f"Work environment: {', '.join(overlap)}")
        else:
            environment_score = 0.0
            tradeoffs.append(
                f"Offers {', '.join(offered) or 'no listed arrangement'}, "
                f"you prefer {', '.join(wanted)}"
            )

        salary_score = self._score_salary(career, profile, matched, tradeoffs)

        if not preferences.categories:
            category_score = NEUTRAL_SCORE
        elif career.category in preferences.categories:
            category_score = 100.0
            matched.append(f"Preferred field: {career.category.value}")
        else:
            category_score = 0.0
            tradeoffs.append(f"Outside your preferred fields ({career.category.value})")

        score = (
            PREFERENCE_ENVIRONMENT_SHARE * environment_score
            + PREFERENCE_SALARY_SHARE * salary_score
            + PREFERENCE_CATEGORY_SHARE * category_score
        )

        environment = career.work_environment
        if environment.travel_required and not preferences.travel_willingness:
            score -= PREFERENCE_PENALTY
            tradeoffs.append("Requires travel")

        if preferences.work_life_balance == WorkLifeBalance.HIGH:
            if _is_demanding(environment.typical_hours):
                score -= PREFERENCE_PENALTY
                tradeoffs.append(
                    f"Typical hours ({environment.typical_hours}) may strain work-life balance"
                )
            else:
                matched.append("Standard hours support work-life balance")

        return _clamp(score), matched, tradeoffs

    def _score_salary(
        self,
        career: Career,
        profile: UserProfile,
        matched: list[str],
        tradeoffs: list[str],
    ) -> float:
        preferred = profile.preferences.salary
        salary = career.salary_for_level(profile.experience.level)
        if salary is not None:
            career_min, career_max = salary.min, salary.max
        else:
            career_min, career_max = career.salary_span()

        label = _format_salary(career_min, career_max)
        overlap = min(preferred.max, career_max) - max(preferred.min, career_min)
        shorter = min(preferred.max - preferred.min, career_max - career_min)

        if overlap < 0 or (overlap == 0 and shorter > 0):
            if career_min >= preferred.max:
                matched.append(f"Salary range {label} is above your expectation")
                return SALARY_ABOVE_RANGE_SCORE
            tradeoffs.append(
                f"Salary range {label} is below your "
                f"{_format_salary(preferred.min, preferred.max)} expectation"
            )
            return 0.0

        score = 100.0 if shorter <= 0 else _clamp(overlap / shorter * 100)
        if career_max > preferred.max:
            # Never below a band wholly above the expectation
            score = max(score, SALARY_ABOVE_RANGE_SCORE)
        if score >= self.config.strong_threshold:
            matched.append(f"Salary range {label} fits your expectation")
        elif score < self.config.weak_threshold:
            tradeoffs.append(
                f"Salary range {label} only partly overlaps your "
                f"{_format_salary(preferred.min, preferred.max)} expectation"
            )
        return score

    def score_personality(
        self, career: Career, profile: UserProfile
    ) -> tuple[float, list[str], list[str]]:
        """Score personality compatibility against the career archetype.

        Returns:
            personality_score, matching_traits, mismatches
        """
        archetype = career.personality or infer_archetype(career)
        personality = profile.personality

        traits: list[str] = []
        mismatches: list[str] = []
        total = 0.0
        for attribute, label in _TRAIT_LABELS.items():
            user_value = getattr(personality, attribute).value
            career_value = getattr(archetype, attribute).value
            compatibility = _personality_compatibility(user_value, career_value)
            total += compatibility

            if compatibility == PERSONALITY_EXACT and user_value not in _FLEXIBLE_VALUES:
                traits.append(f"{user_value.capitalize()} {label} suits this role")
            elif compatibility == PERSONALITY_FLEXIBLE and user_value in _FLEXIBLE_VALUES:
                traits.append(f"Flexible {label} adapts to a {career_value} role")
            elif compatibility == PERSONALITY_OPPOSITE:
                mismatches.append(
                    f"Role leans {career_value}, you prefer {user_value} ({label})"
                )

        score = total / len(_TRAIT_LABELS) * 100
        if archetype.leadership_track and personality.leadership:
            score += LEADERSHIP_BONUS
            traits.append("Leadership ambitions fit this career's growth track")

        return _clamp(score), traits, mismatches

    def meets_education(self, career: Career, profile: UserProfile) -> bool:
        """Return True if the profile meets the career's minimum degree."""
        minimum = career.education.minimum_degree
        if not minimum:
            return True
        required = _education_rank(minimum)
        if required is None:
            return True
        return profile.education.level.rank >= required

    def calculate_confidence(self, profile: UserProfile, sub_scores: SubScores) -> float:
        """Estimate how much the profile supports the score, in [0.3, 1.0]."""
        confidence = CONFIDENCE_BASE
        if len(dedupe_terms(profile.interests)) >= 3:
            confidence += 0.1
        if len(dedupe_terms(profile.skills)) >= 5:
            confidence += 0.1
        if profile.experience.years_of_experience > 0:
            confidence += 0.1

        values = sub_scores.as_dict().values()
        supported = sum(1 for value in values if value >= CONFIDENCE_SUPPORTED_SCORE)
        confidence += 0.2 * supported / len(values)
        return _clamp(confidence, CONFIDENCE_FLOOR, 1.0)

    def _strengths_and_gaps(
        self, sub_scores: SubScores, details: MatchDetails, career: Career
    ) -> tuple[list[str], list[str]]:
        strong = self.config.strong_threshold
        weak = self.config.weak_threshold
        strengths: list[str] = []
        gaps: list[str] = []

        if sub_scores.skills >= strong and details.matched_skills:
            strengths.append(
                f"Strong skill match: {', '.join(details.matched_skills[:_LIST_PREVIEW])}"
            )
        elif sub_scores.skills < weak:
            if details.missing_skills:
                gaps.append(
                    "Missing key skills: "
                    f"{', '.join(details.missing_skills[:_LIST_PREVIEW])}"
                )
            else:
                gaps.append("Limited skill overlap")

        if sub_scores.interests >= strong and details.matched_interests:
            strengths.append(
                "Aligns with your interests in "
                f"{', '.join(details.matched_interests[:_LIST_PREVIEW])}"
            )
        elif sub_scores.interests < weak:
            if career.keywords:
                gaps.append(
                    "Limited overlap with your interests; the work centres on "
                    f"{', '.join(career.keywords[:_LIST_PREVIEW])}"
                )
            else:
                gaps.append("Limited overlap with your interests")

        if sub_scores.experience >= strong:
            strengths.append(details.experience_reasoning)
        elif sub_scores.experience < weak:
            gaps.append(f"Experience gap: {details.experience_reasoning}")

        if sub_scores.preferences >= strong:
            if details.matched_preferences:
                strengths.append(
                    "Matches your preferences: "
                    f"{'; '.join(details.matched_preferences[:_LIST_PREVIEW])}"
                )
            else:
                strengths.append("Matches your work preferences")
        elif sub_scores.preferences < weak:
            if details.tradeoffs:
                gaps.append(
                    f"Preference tradeoffs: {'; '.join(details.tradeoffs[:_LIST_PREVIEW])}"
                )
            else:
                gaps.append("Does not match your stated preferences")

        if sub_scores.personality >= strong and details.personality_traits:
            strengths.append(
                f"Personality fit: {'; '.join(details.personality_traits[:_LIST_PREVIEW])}"
            )
        elif sub_scores.personality < weak:
            if details.personality_mismatches:
                gaps.append(
                    "Work style mismatch: "
                    f"{'; '.join(details.personality_mismatches[:_LIST_PREVIEW])}"
                )
            else:
                gaps.append("Work style mismatch")

        return strengths, gaps

    def _recommendations(
        self,
        career: Career,
        profile: UserProfile,
        sub_scores: SubScores,
        details: MatchDetails,
    ) -> list[str]:
        recommendations: list[str] = []
        education = career.education

        if details.missing_skills:
            recommendations.append(
                f"Develop these skills: {', '.join(details.missing_skills[:_LIST_PREVIEW])}"
            )
        if education.certifications and (
            profile.education.willing_to_get_certifications
            or not details.meets_education_requirements
        ):
            recommendations.append(
                f"Consider certifications: {', '.join(education.certifications[:2])}"
            )
        if sub_scores.experience < 70 and career.related_roles:
            recommendations.append(
                f"Gain experience in related roles: {', '.join(career.related_roles[:2])}"
            )
        if not details.meets_education_requirements:
            if education.alternative_pathways:
                recommendations.append(
                    f"Explore alternative pathways: {education.alternative_pathways[0]}"
                )
            else:
                recommendations.append(
                    f"Plan for the required education: {education.minimum_degree}"
                )
        if career.industry_trends:
            recommendations.append(f"Stay current with: {career.industry_trends[0]}")

        return recommendations[:MAX_RECOMMENDATIONS]

    def score_career(self, career: Career, profile: UserProfile) -> CareerMatch:
        """Score one career against a profile with a full explanation."""
        skills_score, matched_skills, missing_skills = self.score_skills(career, profile)
        interests_score, matched_interests = self.score_interests(career, profile)
        experience_score, reasoning, relevant = self.score_experience(career, profile)
        preferences_score, matched_prefs, tradeoffs = self.score_preferences(
            career, profile
        )
        personality_score, traits, mismatches = self.score_personality(career, profile)

        sub_scores = SubScores(
            skills=skills_score,
            interests=interests_score,
            experience=experience_score,
            preferences=preferences_score,
            personality=personality_score,
        )
        details = MatchDetails(
            matched_skills=tuple(matched_skills),
            missing_skills=tuple(missing_skills),
            matched_interests=tuple(matched_interests),
            experience_reasoning=reasoning,
            relevant_experience=tuple(relevant),
            matched_preferences=tuple(matched_prefs),
            tradeoffs=tuple(tradeoffs),
            personality_traits=tuple(traits),
            personality_mismatches=tuple(mismatches),
            meets_education_requirements=self.meets_education(career, profile),
        )

        weights = self.config.weights
        overall = _clamp(
            math.fsum(
                value * weights[name] for name, value in sub_scores.as_dict().items()
            )
        )
        strengths, gaps = self._strengths_and_gaps(sub_scores, details, career)

        return CareerMatch(
            career=career,
            overall_score=overall,
            sub_scores=sub_scores,
            strengths=tuple(strengths),
            gaps=tuple(gaps),
            confidence=self.calculate_confidence(profile, sub_scores),
            recommendations=tuple(
                self._recommendations(career, profile, sub_scores, details)
            ),
            details=details,
        )

    def _validate_catalog(
        self, catalog: Iterable[object]
    ) -> tuple[list[Career], list[SkippedEntry]]:
        careers: list[Career] = []
        skipped: list[SkippedEntry] = []
        for index, entry in enumerate(catalog):
            try:
                careers.append(parse_career(entry, index=index))
            except CatalogEntryError as e:
                if self.config.catalog_strict:
                    raise
                logger.warning("Skipping catalog entry %d: %s", index, e)
                skipped.append(
                    SkippedEntry(index=index, career_id=e.career_id, reason=str(e))
                )
        return careers, skipped

    def match(self, profile: UserProfile, catalog: Iterable[object]) -> MatchReport:
        """Score every catalog entry and rank the results.

        Ties keep catalog order. Malformed entries are skipped and reported,
        unless ``catalog_strict`` is set.
        """
        careers, skipped = self._validate_catalog(catalog)
        scored = [self.score_career(career, profile) for career in careers]
        ranked = sorted(scored, key=lambda m: m.overall_score, reverse=True)

        minimum = self.config.minimum_score
        if minimum > 0:
            ranked = [m for m in ranked if m.overall_score >= minimum]
        if self.config.max_results is not None:
            ranked = ranked[: self.config.max_results]

        logger.debug(
            "Matched %d career(s), returned %d, skipped %d",
            len(careers),
            len(ranked),
            len(skipped),
        )
        return MatchReport(matches=tuple(ranked), skipped=tuple(skipped))

    def match_careers(
        self, profile: UserProfile, catalog: Iterable[object]
    ) -> list[CareerMatch]:
        """Return ranked matches, best first."""
        return list(self.match(profile, catalog).matches)

    def format_match(self, match: CareerMatch) -> str:
        """Format a CareerMatch for CLI output."""
        scores = " ".join(
            f"{name}={value:.1f}" for name, value in match.sub_scores.as_dict().items()
        )
        lines = [
            f"{match.career.title} ({match.career.category.value})",
            f"Score: {match.overall_score:.1f} (confidence={match.confidence:.2f})",
            f"Breakdown: {scores}",
        ]
        if match.strengths:
            lines.append(f"Strengths: {'; '.join(match.strengths)}")
        if match.gaps:
            lines.append(f"Gaps: {'; '.join(match.gaps)}")
        if match.recommendations:
            lines.append(f"Next steps: {'; '.join(match.recommendations)}")
        return "\n".join(lines)


def match_careers(
    profile: UserProfile,
    catalog: Iterable[object],
    config: MatchingConfig | None = None,
) -> list[CareerMatch]:
    """Rank a catalog for a profile using a fresh service."""
    return CareerMatchingService(config=config).match_careers(profile, catalog)
