"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.sqlite_intake_repository import SqliteIntakeRepository
from calorie_tracker.adapters.supabase_intake_repository import (
    SupabaseIntakeRepository,
)
from calorie_tracker.config import Settings, resolve_storage_backend
from calorie_tracker.services.chart import ChartProjection
from calorie_tracker.services.intakes import IntakeService
from calorie_tracker.services.ledger import IntakeLedger, IntakeRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ledger: IntakeLedger
    chart: ChartProjection
    intake_service: IntakeService
    close_resources: Callable[[], Awaitable[None]]


def build_repository(settings: Settings) -> IntakeRepository:
    """Create the intake repository for the configured backend."""
    backend = resolve_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseIntakeRepository(client)
    return SqliteIntakeRepository.open(settings.database_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repository = build_repository(resolved_settings)
    ledger = IntakeLedger(repository)
    chart = ChartProjection()
    chart.bind(ledger)
    intake_service = IntakeService(
        ledger=ledger,
        timezone_name=resolved_settings.display_timezone,
    )

    async def close_resources() -> None:
        if isinstance(repository, SqliteIntakeRepository):
            repository.close()

    return AppContainer(
        settings=resolved_settings,
        ledger=ledger,
        chart=chart,
        intake_service=intake_service,
        close_resources=close_resources,
    )
