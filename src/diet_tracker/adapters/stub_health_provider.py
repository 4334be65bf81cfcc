"""Stub health-data provider returning fixed sample readings."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from diet_tracker.domain.health import HealthSnapshot
from diet_tracker.services.health import HealthDataProvider


@dataclass
class StubHealthProvider(HealthDataProvider):
    """Returns static placeholder values without touching any device."""

    clock: Callable[[], datetime] = field(default=datetime.now)

    def get_health_snapshot(self) -> HealthSnapshot:
        """Return the fixed sample snapshot stamped with the current time."""
        return HealthSnapshot(
            weight=70.5,
            calories=1850,
            steps=8420,
            active_energy=450,
            basal_energy=1400,
            last_updated=self.clock(),
        )
