"""Weekly pattern planning flows."""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date

from diet_tracker.dates import DateLike, add_days, current_week_start
from diet_tracker.domain.models import (
    DailyCalorieRecord,
    Weekday,
    WeeklyPattern,
    is_fasting_target,
)
from diet_tracker.errors import NotFoundError
from diet_tracker.services.store import DietStore
from diet_tracker.services.validation import validate_pattern_name, validate_target

FIVE_TWO_FASTING_DAYS = (Weekday.MONDAY, Weekday.THURSDAY)

_logger = logging.getLogger(__name__)


def _generate_pattern_id() -> str:
    return str(time.time_ns())


@dataclass
class PlannerService:
    """Creates weekly patterns and writes targets onto the calendar."""

    store: DietStore

    def create_pattern(
        self, name: str | None, days: Mapping[Weekday, object]
    ) -> WeeklyPattern:
        """Validate and save a new pattern.

        Weekdays missing from ``days`` get the default target.
        """
        pattern_name = validate_pattern_name(name)
        targets = {
            weekday: (
                validate_target(days[weekday])
                if weekday in days
                else self.store.default_target
            )
            for weekday in Weekday
        }
        pattern = WeeklyPattern(
            id=_generate_pattern_id(), name=pattern_name, days=targets
        )
        self.store.add_weekly_pattern(pattern)
        _logger.info("Weekly pattern %s saved", pattern.id)
        return pattern

    def get_pattern(self, pattern_id: str) -> WeeklyPattern:
        """Return a pattern by id, raising NotFoundError when it is unknown."""
        pattern = self.store.get_weekly_pattern(pattern_id)
        if pattern is None:
            raise NotFoundError(f"Weekly pattern {pattern_id} not found")
        return pattern

    def delete_pattern(self, pattern_id: str) -> None:
        """Delete a pattern; unknown ids are ignored."""
        self.store.delete_weekly_pattern(pattern_id)

    def apply_pattern_to_current_week(
        self, pattern_id: str, today: date | None = None
    ) -> list[DailyCalorieRecord]:
        """Apply a pattern from this week's Monday.

        Resets logged intake to zero for the whole week; confirm with the user
        before calling.
        """
        return self.store.apply_weekly_pattern(pattern_id, current_week_start(today))

    def set_day_target(self, day: DateLike, target: object) -> DailyCalorieRecord:
        """Set one day's target, keeping any intake already logged."""
        value = validate_target(target)
        existing = self.store.get_daily_record(day)
        if existing is not None:
            return self.store.upsert_daily_record(
                day, value, existing.consumed, existing.is_fasting
            )
        return self.store.upsert_daily_record(
            day, value, 0, is_fasting_target(value, self.store.fasting_threshold)
        )

    def apply_uniform_week(
        self, target: int | None = None, today: date | None = None
    ) -> list[DailyCalorieRecord]:
        """Give every day of the current week the same target and zero intake."""
        value = self.store.default_target if target is None else target
        return self._fill_week(today, lambda _weekday: (value, False))

    def apply_five_two_week(
        self,
        fasting_target: int = 1000,
        regular_target: int = 2500,
        today: date | None = None,
    ) -> list[DailyCalorieRecord]:
        """Mark Monday and Thursday as fasting days, resetting the week's intake."""

        def plan(weekday: Weekday) -> tuple[int, bool]:
            if weekday in FIVE_TWO_FASTING_DAYS:
                return fasting_target, True
            return regular_target, False

        return self._fill_week(today, plan)

    def _fill_week(
        self, today: date | None, plan: Callable[[Weekday], tuple[int, bool]]
    ) -> list[DailyCalorieRecord]:
        start = current_week_start(today)
        records = []
        for offset, weekday in enumerate(Weekday):
            target, fasting = plan(weekday)
            records.append(
                self.store.upsert_daily_record(
                    add_days(start, offset), target, 0, fasting
                )
            )
        return records
