"""Supplementary health data shown alongside tracked metrics."""

from typing import Protocol

from diet_tracker.domain.health import HealthSnapshot


class HealthDataProvider(Protocol):
    """Interface for device health readings."""

    def get_health_snapshot(self) -> HealthSnapshot:
        """Return the latest readings; every field may be missing."""
