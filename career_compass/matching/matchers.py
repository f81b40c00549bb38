"""Skill and keyword matching utilities for career matching."""

from __future__ import annotations

import re
from collections.abc import Iterable
from difflib import SequenceMatcher

# Containment matches need at least this many characters on the short side,
# otherwise "r" or "go" would match half the catalog.
_MIN_CONTAINMENT_LENGTH = 3

_SKILL_ALIASES: dict[str, str] = {
    "js": "javascript",
    "python3": "python",
    "py": "python",
    "postgres": "postgresql",
    "ms excel": "excel",
    "microsoft excel": "excel",
    "spreadsheets": "excel",
    "adobe photoshop": "photoshop",
    "adobe illustrator": "illustrator",
    "powerbi": "power bi",
    "ml": "machine learning",
    "ux": "user experience",
    "ui": "user interface",
    "public speaking": "presentation",
    "presenting": "presentation",
    "people management": "leadership",
    # Questionnaire option values.
    "programming": "software development",
    "design-tools": "design tools",
    "data-analysis": "data analysis",
    "marketing-tools": "digital marketing",
    "financial-analysis": "financial analysis",
    "project-management": "project management",
}

# Skills that reliably imply others (transferable skills).
_SKILL_IMPLICATIONS: dict[str, set[str]] = {
    "software development": {"programming", "debugging", "problem solving"},
    "data analysis": {"excel", "data visualization", "statistics"},
    "design tools": {"figma", "photoshop", "illustrator", "visual design"},
    "digital marketing": {"social media", "content creation", "seo"},
    "financial analysis": {"excel", "financial modeling", "accounting"},
    "project management": {"organization", "planning", "leadership"},
    "coaching": {"teaching", "mentoring", "presentation"},
    "sales": {"negotiation", "customer relations", "persuasion"},
    "communication": {"writing", "presentation"},
    "machine learning": {"python", "statistics"},
    "react": {"javascript", "html", "css"},
    "figma": {"prototyping", "wireframing"},
}


def normalize_skill(skill: str) -> str:
    """Normalize a skill string for comparison.

    Performs lowercasing, whitespace normalization, and trims common
    surrounding punctuation while preserving meaningful characters
    like "+", "#", and "." (e.g. "C++", "C#", "Node.js").
    """
    value = skill.strip().lower()
    value = re.sub(r"\([^)]*\)", "", value)
    value = re.sub(r"\s+", " ", value)
    return value.strip(" ,;")


def _singular(value: str) -> str:
    if len(value) > 3 and value.endswith("ies"):
        return value[:-3] + "y"
    if len(value) > 3 and value.endswith("s") and not value.endswith("ss"):
        return value[:-1]
    return value


def canonicalize_skill(skill: str) -> str:
    """Normalize, resolve aliases and fold simple plurals."""
    normalized = normalize_skill(skill)
    if normalized in _SKILL_ALIASES:
        return _SKILL_ALIASES[normalized]
    if normalized in _SKILL_IMPLICATIONS:
        return normalized
    singular = _singular(normalized)
    return _SKILL_ALIASES.get(singular, singular)


def _contains_term(haystack: str, needle: str) -> bool:
    if len(needle) < _MIN_CONTAINMENT_LENGTH:
        return False
    pattern = rf"(?<![a-z0-9]){re.escape(needle)}(?![a-z0-9])"
    return re.search(pattern, haystack) is not None


def terms_overlap(left: str, right: str) -> bool:
    """Return True if one term appears as a whole word in the other."""
    if left == right:
        return True
    if len(left) <= len(right):
        return _contains_term(right, left)
    return _contains_term(left, right)


def skills_match(
    skill1: str, skill2: str, fuzzy: bool = True, threshold: float = 0.85
) -> bool:
    """Return True if two skills are considered a match."""
    canonical1 = canonicalize_skill(skill1)
    canonical2 = canonicalize_skill(skill2)

    if not canonical1 or not canonical2:
        return False
    if terms_overlap(canonical1, canonical2):
        return True

    if not fuzzy:
        return False

    if threshold <= 0.0:
        return True
    if threshold > 1.0:
        return False

    similarity = SequenceMatcher(None, canonical1, canonical2).ratio()
    return similarity >= threshold


def find_matching_skills(
    required: list[str],
    available: list[str],
    fuzzy: bool = True,
    threshold: float = 0.85,
) -> tuple[list[str], list[str]]:
    """Return the subset of required skills that match, and those missing."""
    matched: list[str] = []
    missing: list[str] = []

    for requirement in required:
        if any(
            skills_match(requirement, skill, fuzzy=fuzzy, threshold=threshold)
            for skill in available
        ):
            matched.append(requirement)
        else:
            missing.append(requirement)

    return matched, missing


def expand_skills(skills: Iterable[str]) -> list[str]:
    """Return a canonical + inferred list of skills for matching.

    Broad skills imply the fundamentals they are built on (e.g.
    "data analysis" implies "excel"), so transferable skills count.
    """
    canonical = {canonicalize_skill(s) for s in skills if str(s).strip()}
    expanded = set(canonical)
    stack = list(canonical)

    while stack:
        current = stack.pop()
        for implied in _SKILL_IMPLICATIONS.get(current, set()):
            implied_canon = canonicalize_skill(implied)
            if implied_canon not in expanded:
                expanded.add(implied_canon)
                stack.append(implied_canon)

    return sorted(expanded)


def dedupe_terms(terms: Iterable[str]) -> list[str]:
    """Drop blank and case-insensitive duplicate terms, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for term in terms:
        key = normalize_skill(str(term))
        if key and key not in seen:
            seen.add(key)
            result.append(str(term).strip())
    return result


def _normalize_term(term: str) -> str:
    return normalize_skill(term).replace("-", " ")


def term_matches_any(term: str, candidates: Iterable[str]) -> str | None:
    """Return the first candidate that overlaps with the term, if any.

    Hyphens count as spaces, so "problem-solving" matches "problem solving".
    """
    normalized = _normalize_term(term)
    if not normalized:
        return None
    for candidate in candidates:
        if terms_overlap(normalized, _normalize_term(candidate)):
            return candidate
    return None
