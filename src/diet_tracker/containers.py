"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from diet_tracker.adapters.file_storage import FileKeyValueStorage
from diet_tracker.adapters.stub_health_provider import StubHealthProvider
from diet_tracker.app_logging import configure_logging
from diet_tracker.config import Settings, parse_log_level
from diet_tracker.services.health import HealthDataProvider
from diet_tracker.services.metrics import MetricsService
from diet_tracker.services.planner import PlannerService
from diet_tracker.services.store import DietStore, KeyValueStorage
from diet_tracker.services.tracking import TrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: DietStore
    metrics_service: MetricsService
    tracking_service: TrackingService
    planner_service: PlannerService
    health_provider: HealthDataProvider
    close_resources: Callable[[], None]


def build_container(
    settings: Settings | None = None, storage: KeyValueStorage | None = None
) -> AppContainer:
    """Create the default dependency container with a loaded store."""
    resolved_settings = settings or Settings()
    configure_logging(parse_log_level(resolved_settings.log_level))
    resolved_storage = storage or FileKeyValueStorage(resolved_settings.storage_path)
    store = DietStore(
        storage=resolved_storage,
        storage_key=resolved_settings.storage_key,
        default_target=resolved_settings.default_daily_target,
        fasting_threshold=resolved_settings.fasting_threshold,
    )
    store.load()

    def close_resources() -> None:
        store.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        metrics_service=MetricsService(store),
        tracking_service=TrackingService(store),
        planner_service=PlannerService(store),
        health_provider=StubHealthProvider(),
        close_resources=close_resources,
    )
