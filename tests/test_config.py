"""Tests for settings helpers."""

import logging
from pathlib import Path

import pytest

from diet_tracker.config import Settings, parse_log_level


def test_settings_read_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "custom.json"))
    monkeypatch.setenv("DEFAULT_DAILY_TARGET", "1800")

    settings = Settings()

    assert settings.storage_path == tmp_path / "custom.json"
    assert settings.default_daily_target == 1800
    assert settings.storage_key == "calorie-store"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, logging.INFO),
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("10", 10),
        ("nonsense", logging.INFO),
    ],
)
def test_parse_log_level(raw: str | None, expected: int) -> None:
    assert parse_log_level(raw) == expected
