"""Tests for the planner service."""

from datetime import date

import pytest

from diet_tracker.domain.models import Weekday
from diet_tracker.errors import NotFoundError, ValidationError
from diet_tracker.services.planner import PlannerService
from diet_tracker.services.store import DietStore

TODAY = date(2024, 1, 3)


def test_create_pattern_fills_missing_days(
    store: DietStore, planner: PlannerService
) -> None:
    pattern = planner.create_pattern(
        "Weekend treats", {Weekday.SATURDAY: "2500", Weekday.MONDAY: 1000}
    )

    assert pattern.id
    assert pattern.days[Weekday.MONDAY] == 1000
    assert pattern.days[Weekday.SATURDAY] == 2500
    assert pattern.days[Weekday.TUESDAY] == 2000
    assert set(pattern.days) == set(Weekday)
    assert store.get_weekly_pattern(pattern.id) == pattern


def test_create_pattern_rejects_blank_name(
    store: DietStore, planner: PlannerService
) -> None:
    with pytest.raises(ValidationError):
        planner.create_pattern("  ", {})

    assert store.weekly_patterns == ()


def test_create_pattern_rejects_bad_target(planner: PlannerService) -> None:
    with pytest.raises(ValidationError):
        planner.create_pattern("Bad", {Weekday.MONDAY: "lots"})


def test_apply_pattern_to_current_week(
    store: DietStore, planner: PlannerService
) -> None:
    pattern = planner.create_pattern("Fast Monday", {Weekday.MONDAY: 800})
    store.upsert_daily_record("2024-01-02", 2000, 1200)

    applied = planner.apply_pattern_to_current_week(pattern.id, today=TODAY)

    assert applied[0].date == "2024-01-01"
    assert applied[0].is_fasting
    record = store.get_daily_record("2024-01-02")
    assert record is not None
    assert record.consumed == 0


def test_delete_pattern(store: DietStore, planner: PlannerService) -> None:
    pattern = planner.create_pattern("Temp", {})

    planner.delete_pattern(pattern.id)
    planner.delete_pattern(pattern.id)

    assert store.weekly_patterns == ()


def test_set_day_target_keeps_consumed(
    store: DietStore, planner: PlannerService
) -> None:
    store.upsert_daily_record("2024-01-02", 2000, 1200)

    record = planner.set_day_target("2024-01-02", 1800)

    assert record.target == 1800
    assert record.consumed == 1200


def test_set_day_target_creates_fasting_record(planner: PlannerService) -> None:
    record = planner.set_day_target("2024-01-02", 900)

    assert record.consumed == 0
    assert record.is_fasting


def test_apply_uniform_week(store: DietStore, planner: PlannerService) -> None:
    records = planner.apply_uniform_week(today=TODAY)

    assert records[0].date == "2024-01-01"
    assert records[-1].date == "2024-01-07"
    assert {r.target for r in records} == {2000}
    assert not any(r.is_fasting for r in records)


def test_apply_five_two_week(planner: PlannerService) -> None:
    records = planner.apply_five_two_week(today=TODAY)

    fasting = [r.date for r in records if r.is_fasting]
    assert fasting == ["2024-01-01", "2024-01-04"]
    assert records[0].target == 1000
    assert records[1].target == 2500


def test_get_pattern_raises_for_unknown_id(planner: PlannerService) -> None:
    pattern = planner.create_pattern("Known", {})

    assert planner.get_pattern(pattern.id) == pattern
    with pytest.raises(NotFoundError):
        planner.get_pattern("missing")
