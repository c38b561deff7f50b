"""Persistent, observable ledger of calorie intakes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from calorie_tracker.domain.intake import IntakeRecord

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[], None]


class IntakeStorageError(RuntimeError):
    """Raised when the intake store cannot be read or written."""


class IntakeRepository(Protocol):
    """Persistence interface for intake records."""

    def add_intake(self, calories: int, logged_at: datetime) -> IntakeRecord:
        """Durably store an intake and return the stored record."""

    def list_intakes(self) -> list[IntakeRecord]:
        """Return all intakes ordered by logged_at, oldest first."""


def now_utc() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False)
class Subscription:
    """Handle returned by IntakeLedger.subscribe."""

    ledger: "IntakeLedger"
    handler: ChangeHandler
    active: bool = True

    def cancel(self) -> None:
        """Stop delivering change notifications to the handler."""
        if not self.active:
            return
        self.active = False
        self.ledger._subscriptions.remove(self)


@dataclass
class IntakeLedger:
    """Append-only intake store that notifies subscribers after each add."""

    repository: IntakeRepository
    clock: Callable[[], datetime] = now_utc
    _subscriptions: list[Subscription] = field(
        default_factory=list, init=False, repr=False
    )

    def add(self, calories: int) -> IntakeRecord:
        """Persist a new intake stamped with the current time and notify."""
        logged_at = self.clock()
        try:
            record = self.repository.add_intake(calories, logged_at)
        except Exception as exc:
            logger.exception("Failed to store intake of %s calories", calories)
            raise IntakeStorageError("Failed to store intake") from exc
        logger.info("Logged intake of %s calories", record.calories)
        self._publish()
        return record

    def all_records_ascending(self) -> list[IntakeRecord]:
        """Return a fresh snapshot of every intake, oldest first."""
        try:
            return list(self.repository.list_intakes())
        except Exception as exc:
            logger.exception("Failed to read intakes")
            raise IntakeStorageError("Failed to read intakes") from exc

    def subscribe(self, handler: ChangeHandler) -> Subscription:
        """Register a handler called once per successful add.

        Handlers subscribed while a notification is being delivered start
        receiving notifications with the next add.
        """
        subscription = Subscription(ledger=self, handler=handler)
        self._subscriptions.append(subscription)
        return subscription

    def _publish(self) -> None:
        # Runs after the commit; every active handler sees this change.
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.handler()
            except Exception:
                logger.exception("Intake change handler failed")
