"""Supabase-backed intake repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.intake import IntakeRecord
from calorie_tracker.services.ledger import IntakeRepository


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for intake persistence."""

    client: Client

    def add_intake(self, calories: int, logged_at: datetime) -> IntakeRecord:
        """Insert an intake row and return it."""
        response = (
            self.client.table("daily_intakes")
            .insert(
                {
                    "calories": calories,
                    "logged_at": logged_at.astimezone(UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create intake in Supabase")
        return _parse_row(response.data[0])

    def list_intakes(self) -> list[IntakeRecord]:
        """Return all intakes, oldest first."""
        response = (
            self.client.table("daily_intakes")
            .select("id, calories, logged_at")
            .order("logged_at", desc=False)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> IntakeRecord:
    logged_at_raw = row.get("logged_at")
    if not isinstance(logged_at_raw, str) or not logged_at_raw:
        raise ValueError(f"Intake row {row.get('id')!r} has no logged_at")
    logged_at = datetime.fromisoformat(logged_at_raw)
    row_id = row.get("id")
    return IntakeRecord(
        id=int(row_id) if row_id is not None else None,
        calories=int(row.get("calories", 0)),
        logged_at=logged_at,
    )
