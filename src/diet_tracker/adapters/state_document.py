"""Pydantic schema for the persisted store document."""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from diet_tracker.domain.models import (
    ActivityLevel,
    ColorScheme,
    DailyCalorieRecord,
    Gender,
    StoreSnapshot,
    UserProfile,
    Weekday,
    WeeklyPattern,
    WeightEntry,
)
from diet_tracker.errors import PersistenceError

_WEEKDAYS_BY_NAME = {weekday.value: weekday for weekday in Weekday}

_logger = logging.getLogger(__name__)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class StoredProfile(_Document):
    """Persisted user profile."""

    age: int
    height: float
    weight: float
    gender: Gender
    activity_level: ActivityLevel = Field(alias="activityLevel")


class StoredDailyCalories(_Document):
    """Persisted daily calorie record."""

    date: str
    target: int
    consumed: int
    is_fasting: bool = Field(default=False, alias="isFasting")


class StoredWeightEntry(_Document):
    """Persisted weight entry."""

    date: str
    weight: float


class StoredWeeklyPattern(_Document):
    """Persisted weekly pattern keyed by lowercase weekday names."""

    id: str
    name: str
    days: dict[str, int] = Field(default_factory=dict)


class StoredState(_Document):
    """Whole store document saved under a single storage key."""

    color_scheme: ColorScheme = Field(default=ColorScheme.SYSTEM, alias="colorScheme")
    user_profile: StoredProfile | None = Field(default=None, alias="userProfile")
    daily_calories: list[StoredDailyCalories] = Field(
        default_factory=list, alias="dailyCalories"
    )
    weight_entries: list[StoredWeightEntry] = Field(
        default_factory=list, alias="weightEntries"
    )
    weekly_patterns: list[StoredWeeklyPattern] = Field(
        default_factory=list, alias="weeklyPatterns"
    )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "StoredState":
        """Build the document for a store snapshot."""
        profile = snapshot.user_profile
        return cls(
            color_scheme=snapshot.color_scheme,
            user_profile=(
                StoredProfile(
                    age=profile.age,
                    height=profile.height,
                    weight=profile.weight,
                    gender=profile.gender,
                    activity_level=profile.activity_level,
                )
                if profile
                else None
            ),
            daily_calories=[
                StoredDailyCalories(
                    date=record.date,
                    target=record.target,
                    consumed=record.consumed,
                    is_fasting=record.is_fasting,
                )
                for record in snapshot.daily_calories
            ],
            weight_entries=[
                StoredWeightEntry(date=entry.date, weight=entry.weight)
                for entry in snapshot.weight_entries
            ],
            weekly_patterns=[
                StoredWeeklyPattern(
                    id=pattern.id,
                    name=pattern.name,
                    days={
                        weekday.value: target
                        for weekday, target in pattern.days.items()
                    },
                )
                for pattern in snapshot.weekly_patterns
            ],
        )

    def to_snapshot(self) -> StoreSnapshot:
        """Convert the document into domain objects."""
        profile = self.user_profile
        return StoreSnapshot(
            color_scheme=self.color_scheme,
            user_profile=(
                UserProfile(
                    age=profile.age,
                    height=profile.height,
                    weight=profile.weight,
                    gender=profile.gender,
                    activity_level=profile.activity_level,
                )
                if profile
                else None
            ),
            daily_calories=tuple(
                DailyCalorieRecord(
                    date=row.date,
                    target=row.target,
                    consumed=row.consumed,
                    is_fasting=row.is_fasting,
                )
                for row in self.daily_calories
            ),
            weight_entries=tuple(
                WeightEntry(date=row.date, weight=row.weight)
                for row in self.weight_entries
            ),
            weekly_patterns=tuple(
                WeeklyPattern(id=row.id, name=row.name, days=_parse_days(row.days))
                for row in self.weekly_patterns
            ),
        )


_RowT = TypeVar("_RowT", bound=_Document)

_COLOR_SCHEME = TypeAdapter(ColorScheme)
_PROFILE = TypeAdapter(StoredProfile | None)


def encode_state(snapshot: StoreSnapshot) -> str:
    """Serialize a snapshot into the persisted JSON document."""
    return StoredState.from_snapshot(snapshot).model_dump_json(by_alias=True)


def decode_state(raw: str) -> StoreSnapshot:
    """Parse a persisted JSON document.

    Documents written inside a ``{"state": {...}, "version": n}`` envelope are
    unwrapped first. A bad top-level field falls back to its initial value and
    a bad row is dropped from its collection; only a document that is not a
    JSON object is rejected.
    """
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise PersistenceError("Stored document is not readable") from exc
    if isinstance(payload, dict) and isinstance(payload.get("state"), dict):
        payload = payload["state"]
    if not isinstance(payload, dict):
        raise PersistenceError("Stored document is not a JSON object")
    state = StoredState(
        color_scheme=_read_field(
            payload, "colorScheme", _COLOR_SCHEME, ColorScheme.SYSTEM
        ),
        user_profile=_read_field(payload, "userProfile", _PROFILE, None),
        daily_calories=_read_rows(payload, "dailyCalories", StoredDailyCalories),
        weight_entries=_read_rows(payload, "weightEntries", StoredWeightEntry),
        weekly_patterns=_read_rows(payload, "weeklyPatterns", StoredWeeklyPattern),
    )
    return state.to_snapshot()


def _read_field(
    payload: dict[str, Any], key: str, adapter: TypeAdapter[Any], default: Any
) -> Any:
    if key not in payload:
        return default
    try:
        return adapter.validate_python(payload[key])
    except PydanticValidationError as exc:
        _logger.warning("Ignoring invalid %s in stored state: %s", key, exc)
        return default


def _read_rows(
    payload: dict[str, Any], key: str, model: type[_RowT]
) -> list[_RowT]:
    items = payload.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        _logger.warning("Ignoring %s in stored state: not a list", key)
        return []
    rows: list[_RowT] = []
    for index, item in enumerate(items):
        try:
            rows.append(model.model_validate(item))
        except PydanticValidationError as exc:
            _logger.warning("Dropping %s[%d] from stored state: %s", key, index, exc)
    return rows


def _parse_days(raw: dict[str, int]) -> dict[Weekday, int]:
    days: dict[Weekday, int] = {}
    for name, target in raw.items():
        weekday = _WEEKDAYS_BY_NAME.get(name.lower())
        if weekday is not None:
            days[weekday] = target
    return days
