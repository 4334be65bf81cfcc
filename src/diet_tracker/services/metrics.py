"""Derived metrics computed from the store's current state."""

import math
from dataclasses import dataclass
from datetime import date

from diet_tracker.dates import (
    DAYS_PER_WEEK,
    DateLike,
    add_days,
    current_week_start,
    days_between,
    to_date_key,
)
from diet_tracker.domain.metrics import (
    DailyProgress,
    WeeklySummary,
    WeightChangeStats,
    WeightTrend,
)
from diet_tracker.domain.models import Gender, UserProfile, WeightEntry
from diet_tracker.services.store import DietStore

KCAL_PER_KG_FAT = 7700
TREND_THRESHOLD_KG = 0.1
MIN_ENTRIES_FOR_STATS = 2
MIN_ENTRIES_FOR_TREND = 3


def calculate_bmr(profile: UserProfile) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate."""
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.gender is Gender.MALE:
        return base + 5
    return base - 161


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class MetricsService:
    """Computes TDEE, deficits and weight statistics from the store."""

    store: DietStore

    def calculate_tdee(self) -> int | None:
        """Return the rounded TDEE, or None when no profile is saved."""
        profile = self.store.user_profile
        if profile is None:
            return None
        bmr = calculate_bmr(profile)
        return _round_half_up(bmr * profile.activity_level.multiplier)

    def weekly_deficit(self, week_start: DateLike) -> float:
        """Return TDEE over seven days minus intake logged in that span.

        Days without a record count as zero intake. Returns 0 without a TDEE.
        """
        tdee = self.calculate_tdee()
        if not tdee:
            return 0
        start_key = to_date_key(week_start)
        end_key = add_days(start_key, DAYS_PER_WEEK - 1)
        consumed = sum(
            record.consumed
            for record in self.store.daily_records
            if start_key <= record.date <= end_key
        )
        return tdee * DAYS_PER_WEEK - consumed

    def estimated_fat_loss(self, week_start: DateLike) -> float:
        """Return the week's deficit converted to kilograms of fat."""
        return self.weekly_deficit(week_start) / KCAL_PER_KG_FAT

    def weight_change_stats(
        self, today: date | None = None
    ) -> WeightChangeStats | None:
        """Return statistics over all weights, or None with fewer than two."""
        entries = self.store.sorted_weight_entries()
        if len(entries) < MIN_ENTRIES_FOR_STATS:
            return None
        first, last = entries[0], entries[-1]
        change = last.weight - first.weight
        weights = [entry.weight for entry in entries]
        return WeightChangeStats(
            change=change,
            is_loss=change < 0,
            percentage=change / first.weight * 100,
            average=sum(weights) / len(weights),
            min=min(weights),
            max=max(weights),
            total_entries=len(entries),
            streak=_streak(entries, today or date.today()),
        )

    def weight_streak(self, today: date | None = None) -> int:
        """Return the number of consecutive days logged, ending today."""
        return _streak(self.store.sorted_weight_entries(), today or date.today())

    def weight_trend(self, recent_n: int = 5) -> WeightTrend | None:
        """Classify the mean day-to-day change over the latest entries.

        Returns None with fewer than three entries or a window under two.
        """
        entries = self.store.sorted_weight_entries()
        if len(entries) < MIN_ENTRIES_FOR_TREND or recent_n < MIN_ENTRIES_FOR_STATS:
            return None
        weights = [entry.weight for entry in entries[-recent_n:]]
        steps = [later - earlier for earlier, later in zip(weights, weights[1:])]
        mean_step = sum(steps) / len(steps)
        if mean_step < -TREND_THRESHOLD_KG:
            return WeightTrend.DECREASING
        if mean_step > TREND_THRESHOLD_KG:
            return WeightTrend.INCREASING
        return WeightTrend.STABLE

    def recent_weights(self, limit: int = 14) -> list[WeightEntry]:
        """Return the latest ``limit`` entries, oldest first."""
        if limit <= 0:
            return []
        return self.store.sorted_weight_entries()[-limit:]

    def daily_progress(self, day: DateLike) -> DailyProgress:
        """Return intake progress for a day, using the default target if unset."""
        key = to_date_key(day)
        record = self.store.get_daily_record(key)
        target = self.store.default_target
        if record and record.target:
            target = record.target
        consumed = record.consumed if record else 0
        progress = min(consumed / target, 1.0) if target > 0 else 1.0
        return DailyProgress(
            date=key,
            target=target,
            consumed=consumed,
            remaining=target - consumed,
            progress=progress,
            percentage=_round_half_up(progress * 100),
            is_over_target=consumed > target,
            is_fasting=bool(record and record.is_fasting),
        )

    def weekly_history(
        self, weeks: int = 4, today: date | None = None
    ) -> list[WeeklySummary]:
        """Return summaries of the last ``weeks`` weeks, oldest first."""
        this_week = current_week_start(today)
        summaries: list[WeeklySummary] = []
        for index in reversed(range(weeks)):
            start = add_days(this_week, -DAYS_PER_WEEK * index)
            deficit = self.weekly_deficit(start)
            fat_loss = deficit / KCAL_PER_KG_FAT
            summaries.append(
                WeeklySummary(
                    week_start=start,
                    deficit=_round_half_up(deficit),
                    fat_loss_kg=_round_half_up(fat_loss * 1000) / 1000,
                )
            )
        return summaries


def _streak(entries: list[WeightEntry], today: date) -> int:
    streak = 0
    for index, entry in enumerate(reversed(entries)):
        if days_between(entry.date, today) != index:
            break
        streak += 1
    return streak
