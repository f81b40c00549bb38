"""Career matching engine.

Public API:
    - CareerMatchingService: score and rank careers for a profile
    - match_careers: convenience wrapper returning ranked matches
    - MatchingConfig: weights, thresholds and filters
"""

from career_compass.matching.config import (
    MatchingConfig,
    get_matching_config,
    reset_matching_config,
)
from career_compass.matching.models import (
    CareerMatch,
    MatchDetails,
    MatchReport,
    SubScores,
)
from career_compass.matching.service import (
    CareerMatchingService,
    infer_archetype,
    match_careers,
)

__all__ = [
    "CareerMatch",
    "CareerMatchingService",
    "MatchDetails",
    "MatchReport",
    "MatchingConfig",
    "SubScores",
    "get_matching_config",
    "infer_archetype",
    "match_careers",
    "reset_matching_config",
]
