"""Domain models for derived metrics."""

from dataclasses import dataclass
from enum import Enum


class WeightTrend(Enum):
    """Direction of recent weight changes."""

    DECREASING = "decreasing"
    INCREASING = "increasing"
    STABLE = "stable"


@dataclass(frozen=True)
class WeightChangeStats:
    """Summary of all logged weights."""

    change: float
    is_loss: bool
    percentage: float
    average: float
    min: float
    max: float
    total_entries: int
    streak: int


@dataclass(frozen=True)
class DailyProgress:
    """Intake progress against the day's target."""

    date: str
    target: int
    consumed: int
    remaining: int
    progress: float
    percentage: int
    is_over_target: bool
    is_fasting: bool


@dataclass(frozen=True)
class WeeklySummary:
    """Deficit and fat-loss figures for one Monday-start week."""

    week_start: str
    deficit: int
    fat_loss_kg: float
