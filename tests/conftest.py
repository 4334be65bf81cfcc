"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from diet_tracker.config import Settings
from diet_tracker.domain.models import ActivityLevel, Gender, UserProfile
from diet_tracker.errors import PersistenceError
from diet_tracker.services.metrics import MetricsService
from diet_tracker.services.planner import PlannerService
from diet_tracker.services.store import DietStore, KeyValueStorage
from diet_tracker.services.tracking import TrackingService


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory key-value storage for tests."""

    items: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes.append(key)


@dataclass
class FailingStorage(KeyValueStorage):
    """Storage whose reads and writes always fail."""

    attempts: int = 0

    def get_item(self, key: str) -> str | None:
        raise PersistenceError("read failed")

    def set_item(self, key: str, value: str) -> None:
        self.attempts += 1
        raise PersistenceError("write failed")


def make_profile(
    age: int = 30,
    height: float = 170,
    weight: float = 70,
    gender: Gender = Gender.MALE,
    activity_level: ActivityLevel = ActivityLevel.MODERATE,
) -> UserProfile:
    return UserProfile(
        age=age,
        height=height,
        weight=weight,
        gender=gender,
        activity_level=activity_level,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage_path=tmp_path / "storage.json")


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage) -> Iterator[DietStore]:
    diet_store = DietStore(storage)
    diet_store.load()
    yield diet_store
    diet_store.close()


@pytest.fixture
def metrics(store: DietStore) -> MetricsService:
    return MetricsService(store)


@pytest.fixture
def tracking(store: DietStore) -> TrackingService:
    return TrackingService(store)


@pytest.fixture
def planner(store: DietStore) -> PlannerService:
    return PlannerService(store)
