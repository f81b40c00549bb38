"""Real-time career matching.

Public API:
    - RealtimeCareerMatcher: gated, cached recalculation over live answers
    - LiveCareerUpdate: per-career score movement
    - RealtimeConfig: signal threshold, top-N and change settings
"""

from career_compass.realtime.config import (
    RealtimeConfig,
    get_realtime_config,
    reset_realtime_config,
)
from career_compass.realtime.models import LiveCareerUpdate, calculate_trend
from career_compass.realtime.service import RealtimeCareerMatcher

__all__ = [
    "LiveCareerUpdate",
    "RealtimeCareerMatcher",
    "RealtimeConfig",
    "calculate_trend",
    "get_realtime_config",
    "reset_realtime_config",
]
