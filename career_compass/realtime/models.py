"""Data models for live match updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Trend = Literal["rising", "falling", "stable", "new"]

# Score movement across the last three recalculations that counts as a trend.
TREND_WINDOW = 3
TREND_DELTA = 5.0


def calculate_trend(history: list[float]) -> Trend:
    """Classify a career's recent score movement."""
    if len(history) < 2:
        return "new"
    if len(history) < TREND_WINDOW:
        return "stable"
    recent = history[-TREND_WINDOW:]
    delta = recent[-1] - recent[0]
    if delta > TREND_DELTA:
        return "rising"
    if delta < -TREND_DELTA:
        return "falling"
    return "stable"


@dataclass(frozen=True)
class LiveCareerUpdate:
    """How one career's score moved in a recalculation."""

    career_id: str
    title: str
    old_score: float | None
    new_score: float
    trend: Trend
    is_significant: bool
    message: str = ""

    @property
    def change(self) -> float:
        if self.old_score is None:
            return 0.0
        return self.new_score - self.old_score


def describe_update(title: str, old_score: float | None, new_score: float) -> str:
    """Short human-readable summary of a score movement."""
    if old_score is None:
        return f"{title}: {round(new_score)}%"
    change = new_score - old_score
    if change > 10:
        return f"{title} jumped to {round(new_score)}%"
    if change > 5:
        return f"{title} rose to {round(new_score)}%"
    if change < -10:
        return f"{title} fit decreased to {round(new_score)}%"
    if change < -5:
        return f"{title} dropped slightly to {round(new_score)}%"
    return f"{title}: {round(new_score)}%"
