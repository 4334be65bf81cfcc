"""Domain models for the diet tracker."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_DAILY_TARGET = 2000
FASTING_THRESHOLD = 1000


class Weekday(Enum):
    """Days of a Monday-first week, valued by their lowercase English name."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """Return the weekday for a ``date.weekday()`` index (Monday is 0)."""
        return list(cls)[index]

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Gender(Enum):
    """Selects the Mifflin-St Jeor constant."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity levels with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @property
    def multiplier(self) -> float:
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class ColorScheme(Enum):
    """Display theme preference kept alongside the tracking data."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


@dataclass(frozen=True)
class UserProfile:
    """Body metrics used for the TDEE estimate."""

    age: int
    height: float
    weight: float
    gender: Gender
    activity_level: ActivityLevel

    @classmethod
    def default(cls) -> "UserProfile":
        """Return the values shown before a profile has been saved."""
        return cls(
            age=30,
            height=170,
            weight=70,
            gender=Gender.MALE,
            activity_level=ActivityLevel.MODERATE,
        )


@dataclass(frozen=True)
class DailyCalorieRecord:
    """Calorie target and intake for a single day."""

    date: str
    target: int
    consumed: int
    is_fasting: bool = False


@dataclass(frozen=True)
class WeightEntry:
    """Body weight logged for a single day."""

    date: str
    weight: float


@dataclass(frozen=True)
class WeeklyPattern:
    """Reusable per-weekday calorie targets."""

    id: str
    name: str
    days: Mapping[Weekday, int] = field(default_factory=dict)

    def target_for(
        self, weekday: Weekday, default: int = DEFAULT_DAILY_TARGET
    ) -> int:
        """Return the target for a weekday, falling back to ``default``."""
        return self.days.get(weekday, default)


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable copy of everything the store holds."""

    color_scheme: ColorScheme = ColorScheme.SYSTEM
    user_profile: UserProfile | None = None
    daily_calories: tuple[DailyCalorieRecord, ...] = ()
    weight_entries: tuple[WeightEntry, ...] = ()
    weekly_patterns: tuple[WeeklyPattern, ...] = ()


def is_fasting_target(target: int, threshold: int = FASTING_THRESHOLD) -> bool:
    """Return True when a target counts as a fasting day."""
    return target <= threshold
