"""Tests for the persisted document schema."""

import json

import pytest

from diet_tracker.adapters.state_document import decode_state, encode_state
from diet_tracker.domain.models import (
    ActivityLevel,
    ColorScheme,
    Gender,
    StoreSnapshot,
    Weekday,
)
from diet_tracker.errors import PersistenceError

LEGACY_DOCUMENT = {
    "state": {
        "colorScheme": "dark",
        "userProfile": {
            "age": 34,
            "height": 180,
            "weight": 82,
            "activityLevel": "very_active",
            "gender": "female",
        },
        "dailyCalories": [
            {"date": "2024-01-01", "target": 1000, "consumed": 0, "isFasting": True}
        ],
        "weightEntries": [{"date": "2024-01-01", "weight": 82.4}],
        "weeklyPatterns": [
            {
                "id": "1704067200000",
                "name": "5:2",
                "days": {"monday": 1000, "Thursday": 1000, "funday": 3000},
            }
        ],
    },
    "version": 0,
}


def test_decode_unwraps_envelope_and_maps_fields() -> None:
    snapshot = decode_state(json.dumps(LEGACY_DOCUMENT))

    assert snapshot.color_scheme is ColorScheme.DARK
    assert snapshot.user_profile is not None
    assert snapshot.user_profile.gender is Gender.FEMALE
    assert snapshot.user_profile.activity_level is ActivityLevel.VERY_ACTIVE
    assert snapshot.daily_calories[0].is_fasting
    assert snapshot.weight_entries[0].weight == 82.4
    assert snapshot.weekly_patterns[0].days == {
        Weekday.MONDAY: 1000,
        Weekday.THURSDAY: 1000,
    }


def test_missing_fields_take_initial_values() -> None:
    snapshot = decode_state(json.dumps({"unknown": 1}))

    assert snapshot == StoreSnapshot()


def test_encode_uses_camel_case_keys() -> None:
    snapshot = decode_state(json.dumps(LEGACY_DOCUMENT))

    document = json.loads(encode_state(snapshot))

    assert set(document) == {
        "colorScheme",
        "userProfile",
        "dailyCalories",
        "weightEntries",
        "weeklyPatterns",
    }
    assert document["userProfile"]["activityLevel"] == "very_active"
    assert document["dailyCalories"][0]["isFasting"] is True
    assert document["weeklyPatterns"][0]["days"] == {
        "monday": 1000,
        "thursday": 1000,
    }


@pytest.mark.parametrize("raw", ["", "null", "[]", "{not json", '"text"'])
def test_unreadable_documents_raise(raw: str) -> None:
    with pytest.raises(PersistenceError):
        decode_state(raw)


def test_bad_weight_row_drops_only_that_row() -> None:
    document = {
        "dailyCalories": [{"date": "2024-01-01", "target": 2000, "consumed": 1500}],
        "weightEntries": [
            {"date": "2024-01-01", "weight": 80.0},
            {"date": "2024-01-02", "weight": None},
            {"date": "2024-01-03", "weight": 79.5},
        ],
    }

    snapshot = decode_state(json.dumps(document))

    assert [record.date for record in snapshot.daily_calories] == ["2024-01-01"]
    assert [entry.weight for entry in snapshot.weight_entries] == [80.0, 79.5]


def test_bad_top_level_fields_take_initial_values() -> None:
    document = {
        "colorScheme": "sepia",
        "userProfile": {"age": 30, "activityLevel": "couch"},
        "weeklyPatterns": "oops",
        "weightEntries": [{"date": "2024-01-01", "weight": 80.0}],
    }

    snapshot = decode_state(json.dumps(document))

    assert snapshot.color_scheme is ColorScheme.SYSTEM
    assert snapshot.user_profile is None
    assert snapshot.weekly_patterns == ()
    assert snapshot.weight_entries[0].weight == 80.0
