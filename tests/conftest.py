"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.intake import IntakeRecord
from calorie_tracker.services.chart import ChartProjection
from calorie_tracker.services.intakes import IntakeService
from calorie_tracker.services.ledger import IntakeLedger, IntakeRepository


@dataclass
class InMemoryIntakeRepository(IntakeRepository):
    """In-memory intake repository for tests."""

    records: list[IntakeRecord] = field(default_factory=list)

    def add_intake(self, calories: int, logged_at: datetime) -> IntakeRecord:
        record = IntakeRecord(
            id=len(self.records) + 1, calories=calories, logged_at=logged_at
        )
        self.records.append(record)
        return record

    def list_intakes(self) -> list[IntakeRecord]:
        return sorted(self.records, key=lambda record: (record.logged_at, record.id))


@dataclass
class FailingIntakeRepository(IntakeRepository):
    """Repository whose storage is unavailable."""

    fail_reads: bool = False

    def add_intake(self, calories: int, logged_at: datetime) -> IntakeRecord:
        raise OSError("disk I/O error")

    def list_intakes(self) -> list[IntakeRecord]:
        if self.fail_reads:
            raise OSError("disk I/O error")
        return []


@dataclass
class FlakyReadIntakeRepository(InMemoryIntakeRepository):
    """Stores writes but fails the next `failing_reads` list calls."""

    failing_reads: int = 0

    def list_intakes(self) -> list[IntakeRecord]:
        if self.failing_reads > 0:
            self.failing_reads -= 1
            raise OSError("database is locked")
        return super().list_intakes()


@dataclass
class SteppingClock:
    """Clock advancing one minute per call."""

    current: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, 15, 0, tzinfo=UTC)
    )
    step: timedelta = timedelta(minutes=1)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_backend="sqlite",
        database_path=tmp_path / "intakes.db",
        display_timezone="UTC",
    )


@pytest.fixture
def intake_repository() -> InMemoryIntakeRepository:
    return InMemoryIntakeRepository()


@pytest.fixture
def ledger(intake_repository: InMemoryIntakeRepository) -> IntakeLedger:
    return IntakeLedger(intake_repository, clock=SteppingClock())


@pytest.fixture
def container(settings: Settings, ledger: IntakeLedger) -> AppContainer:
    chart = ChartProjection()
    chart.bind(ledger)
    intake_service = IntakeService(
        ledger=ledger, timezone_name=settings.display_timezone
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        ledger=ledger,
        chart=chart,
        intake_service=intake_service,
        close_resources=close_resources,
    )
