"""Calorie, weight and profile logging flows."""

import logging
from dataclasses import dataclass

from diet_tracker.dates import DateLike, today_key, to_date_key
from diet_tracker.domain.models import DailyCalorieRecord, UserProfile, WeightEntry
from diet_tracker.services.store import DietStore
from diet_tracker.services.validation import (
    validate_calorie_amount,
    validate_profile,
    validate_weight_input,
)

_logger = logging.getLogger(__name__)


@dataclass
class TrackingService:
    """Validates user input and records it in the store."""

    store: DietStore

    def save_profile(
        self,
        *,
        age: object,
        height: object,
        weight: object,
        gender: object,
        activity_level: object,
    ) -> UserProfile:
        """Validate and save the user profile."""
        profile = validate_profile(
            age=age,
            height=height,
            weight=weight,
            gender=gender,
            activity_level=activity_level,
        )
        self.store.set_user_profile(profile)
        return profile

    def current_profile(self) -> UserProfile:
        """Return the saved profile or the defaults shown before the first save."""
        return self.store.user_profile or UserProfile.default()

    def log_calories(
        self, amount: object, day: DateLike | None = None
    ) -> DailyCalorieRecord:
        """Add an intake amount to a day's consumed total."""
        calories = validate_calorie_amount(amount)
        key = to_date_key(day) if day is not None else today_key()
        existing = self.store.get_daily_record(key)
        if existing is None:
            return self.store.upsert_daily_record(
                key, self.store.default_target, calories
            )
        return self.store.upsert_daily_record(
            key, existing.target, existing.consumed + calories, existing.is_fasting
        )

    def log_weight(self, weight: object, day: DateLike | None = None) -> WeightEntry:
        """Record the weight for a day, replacing an earlier value for that day."""
        value = validate_weight_input(weight)
        key = to_date_key(day) if day is not None else today_key()
        entry = self.store.upsert_weight_entry(key, value)
        _logger.debug("Weight logged for %s", key)
        return entry
