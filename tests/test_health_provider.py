"""Tests for the stub health provider."""

from datetime import datetime

from diet_tracker.adapters.stub_health_provider import StubHealthProvider


def test_stub_returns_fixed_sample_values() -> None:
    stamp = datetime(2024, 1, 1, 8, 30)
    provider = StubHealthProvider(clock=lambda: stamp)

    snapshot = provider.get_health_snapshot()

    assert snapshot.weight == 70.5
    assert snapshot.calories == 1850
    assert snapshot.steps == 8420
    assert snapshot.active_energy == 450
    assert snapshot.basal_energy == 1400
    assert snapshot.last_updated == stamp
