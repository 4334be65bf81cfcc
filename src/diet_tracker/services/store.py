"""Persisted store for profile, calorie records, weights and weekly patterns."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Protocol

from diet_tracker.adapters.state_document import decode_state, encode_state
from diet_tracker.dates import DateLike, add_days, to_date_key, weekday_of
from diet_tracker.domain.models import (
    DEFAULT_DAILY_TARGET,
    FASTING_THRESHOLD,
    ColorScheme,
    DailyCalorieRecord,
    StoreSnapshot,
    UserProfile,
    Weekday,
    WeeklyPattern,
    WeightEntry,
    is_fasting_target,
)
from diet_tracker.errors import PersistenceError

DEFAULT_STORAGE_KEY = "calorie-store"
PATTERN_LENGTH_DAYS = 7

_logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Durable string storage addressed by key."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, if any."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""


@dataclass
class DietStore:
    """Single source of truth for all tracked data.

    Reads are served from memory. Every mutation replaces the in-memory state
    and queues a rewrite of the whole document on a background writer thread;
    callers never wait for it unless they call :meth:`flush`. Storage failures
    are logged and never reach the caller.
    """

    storage: KeyValueStorage
    storage_key: str = DEFAULT_STORAGE_KEY
    default_target: int = DEFAULT_DAILY_TARGET
    fasting_threshold: int = FASTING_THRESHOLD
    _state: StoreSnapshot = field(default_factory=StoreSnapshot, init=False)
    _executor: ThreadPoolExecutor | None = field(default=None, init=False)
    _pending: Future | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="diet-store-writer"
        )

    # Lifecycle

    def load(self) -> StoreSnapshot:
        """Replace the in-memory state with the persisted document."""
        try:
            raw = self.storage.get_item(self.storage_key)
        except Exception:
            _logger.exception("Failed to read stored state, starting empty")
            raw = None
        if raw is None:
            self._state = StoreSnapshot()
            return self._state
        try:
            self._state = decode_state(raw)
        except PersistenceError as exc:
            _logger.warning("Ignoring unreadable stored state: %s", exc.__cause__)
            self._state = StoreSnapshot()
        return self._state

    def flush(self, timeout: float | None = None) -> None:
        """Block until every queued write has been attempted."""
        pending = self._pending
        if pending is not None:
            pending.result(timeout=timeout)

    def close(self) -> None:
        """Flush pending writes and stop the writer thread."""
        self.flush()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def snapshot(self) -> StoreSnapshot:
        """Return the current state."""
        return self._state

    # Settings

    @property
    def color_scheme(self) -> ColorScheme:
        return self._state.color_scheme

    def set_color_scheme(self, scheme: ColorScheme) -> None:
        """Persist the display theme preference."""
        self._commit(replace(self._state, color_scheme=scheme))

    # Profile

    @property
    def user_profile(self) -> UserProfile | None:
        return self._state.user_profile

    def set_user_profile(self, profile: UserProfile) -> None:
        """Replace the profile. Bounds are checked by the caller."""
        self._commit(replace(self._state, user_profile=profile))

    # Daily calories

    @property
    def daily_records(self) -> tuple[DailyCalorieRecord, ...]:
        return self._state.daily_calories

    def get_daily_record(self, day: DateLike) -> DailyCalorieRecord | None:
        """Return the record for a day, if any."""
        return _find_record(self._state.daily_calories, to_date_key(day))

    def upsert_daily_record(
        self, day: DateLike, target: int, consumed: int, is_fasting: bool = False
    ) -> DailyCalorieRecord:
        """Create the day's record or overwrite all of its fields."""
        record = DailyCalorieRecord(
            date=to_date_key(day),
            target=target,
            consumed=consumed,
            is_fasting=is_fasting,
        )
        records = _put_record(self._state.daily_calories, record)
        self._commit(replace(self._state, daily_calories=records))
        return record

    def update_daily_record(
        self,
        day: DateLike,
        *,
        target: int | None = None,
        consumed: int | None = None,
        is_fasting: bool | None = None,
    ) -> DailyCalorieRecord | None:
        """Merge the given fields into an existing record.

        Returns ``None`` without touching the store when the day has no record.
        """
        key = to_date_key(day)
        existing = _find_record(self._state.daily_calories, key)
        if existing is None:
            _logger.debug("No daily record for %s, update skipped", key)
            return None
        changes: dict[str, object] = {}
        if target is not None:
            changes["target"] = target
        if consumed is not None:
            changes["consumed"] = consumed
        if is_fasting is not None:
            changes["is_fasting"] = is_fasting
        record = replace(existing, **changes)
        records = _put_record(self._state.daily_calories, record)
        self._commit(replace(self._state, daily_calories=records))
        return record

    # Weight

    @property
    def weight_entries(self) -> tuple[WeightEntry, ...]:
        """Weight entries in the order they were first logged."""
        return self._state.weight_entries

    def sorted_weight_entries(self) -> list[WeightEntry]:
        """Weight entries ordered by date, oldest first."""
        return sorted(self._state.weight_entries, key=lambda entry: entry.date)

    def upsert_weight_entry(self, day: DateLike, weight: float) -> WeightEntry:
        """Log the weight for a day, replacing any earlier value for that day."""
        entry = WeightEntry(date=to_date_key(day), weight=weight)
        entries = list(self._state.weight_entries)
        for index, existing in enumerate(entries):
            if existing.date == entry.date:
                entries[index] = entry
                break
        else:
            entries.append(entry)
        self._commit(replace(self._state, weight_entries=tuple(entries)))
        return entry

    def get_latest_weight(self) -> float | None:
        """Return the weight of the most recent date, not the last one logged."""
        entries = self._state.weight_entries
        if not entries:
            return None
        return max(entries, key=lambda entry: entry.date).weight

    # Weekly patterns

    @property
    def weekly_patterns(self) -> tuple[WeeklyPattern, ...]:
        return self._state.weekly_patterns

    def get_weekly_pattern(self, pattern_id: str) -> WeeklyPattern | None:
        """Return a pattern by id, if present."""
        for pattern in self._state.weekly_patterns:
            if pattern.id == pattern_id:
                return pattern
        return None

    def add_weekly_pattern(self, pattern: WeeklyPattern) -> None:
        """Store a pattern, replacing one with the same id."""
        patterns = [p for p in self._state.weekly_patterns if p.id != pattern.id]
        patterns.append(replace(pattern, days=dict(pattern.days)))
        self._commit(replace(self._state, weekly_patterns=tuple(patterns)))

    def update_weekly_pattern(
        self,
        pattern_id: str,
        *,
        name: str | None = None,
        days: dict[Weekday, int] | None = None,
    ) -> WeeklyPattern | None:
        """Merge the given fields into a pattern; no-op when the id is unknown."""
        existing = self.get_weekly_pattern(pattern_id)
        if existing is None:
            _logger.debug("No weekly pattern %s, update skipped", pattern_id)
            return None
        updated = replace(
            existing,
            name=existing.name if name is None else name,
            days=existing.days if days is None else dict(days),
        )
        patterns = tuple(
            updated if p.id == pattern_id else p for p in self._state.weekly_patterns
        )
        self._commit(replace(self._state, weekly_patterns=patterns))
        return updated

    def delete_weekly_pattern(self, pattern_id: str) -> None:
        """Remove a pattern; no-op when the id is unknown."""
        patterns = tuple(
            p for p in self._state.weekly_patterns if p.id != pattern_id
        )
        if len(patterns) == len(self._state.weekly_patterns):
            _logger.debug("No weekly pattern %s, delete skipped", pattern_id)
            return
        self._commit(replace(self._state, weekly_patterns=patterns))

    def apply_weekly_pattern(
        self, pattern_id: str, start_date: DateLike
    ) -> list[DailyCalorieRecord]:
        """Write a pattern's targets onto seven days starting at ``start_date``.

        Destructive: each of the seven records gets ``consumed = 0``, discarding
        any intake already logged for those days. Callers must confirm with the
        user first. Unknown pattern ids are ignored and return an empty list.
        """
        pattern = self.get_weekly_pattern(pattern_id)
        if pattern is None:
            _logger.debug("No weekly pattern %s, apply skipped", pattern_id)
            return []
        start_key = to_date_key(start_date)
        applied: list[DailyCalorieRecord] = []
        records = self._state.daily_calories
        for offset in range(PATTERN_LENGTH_DAYS):
            day = add_days(start_key, offset)
            target = pattern.target_for(weekday_of(day), self.default_target)
            record = DailyCalorieRecord(
                date=day,
                target=target,
                consumed=0,
                is_fasting=is_fasting_target(target, self.fasting_threshold),
            )
            records = _put_record(records, record)
            applied.append(record)
        self._commit(replace(self._state, daily_calories=records))
        return applied

    # Persistence

    def _commit(self, state: StoreSnapshot) -> None:
        self._state = state
        payload = encode_state(state)
        if self._executor is None:
            self._write(payload)
            return
        self._pending = self._executor.submit(self._write, payload)

    def _write(self, payload: str) -> None:
        try:
            self.storage.set_item(self.storage_key, payload)
        except Exception:
            _logger.exception("Failed to persist store state")


def _find_record(
    records: tuple[DailyCalorieRecord, ...], key: str
) -> DailyCalorieRecord | None:
    for record in records:
        if record.date == key:
            return record
    return None


def _put_record(
    records: tuple[DailyCalorieRecord, ...], record: DailyCalorieRecord
) -> tuple[DailyCalorieRecord, ...]:
    """Replace the record for the same date in place, or append it."""
    updated = list(records)
    for index, existing in enumerate(updated):
        if existing.date == record.date:
            updated[index] = record
            return tuple(updated)
    updated.append(record)
    return tuple(updated)
