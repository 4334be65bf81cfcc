"""Models for supplementary health data."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HealthSnapshot:
    """Optional device health readings shown next to the tracked data."""

    weight: float | None = None
    calories: int | None = None
    steps: int | None = None
    active_energy: int | None = None
    basal_energy: int | None = None
    last_updated: datetime | None = None
