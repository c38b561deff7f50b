"""Input parsing and list rendering for intake entries."""

import re
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from calorie_tracker.domain.intake import IntakeRecord, IntakeRow
from calorie_tracker.services.ledger import IntakeLedger

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
NOON = 12


def parse_calories(text: str | None) -> int:
    """Parse user-entered calories, treating anything non-numeric as 0."""
    if text is None or not _INTEGER_PATTERN.fullmatch(text):
        return 0
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return 0
    return value


def format_short_datetime(value: datetime, tz: ZoneInfo) -> str:
    """Format a timestamp as a short date and time, e.g. '10/19/26, 4:03 PM'."""
    local = value.astimezone(tz)
    hour = local.hour % NOON or NOON
    suffix = "AM" if local.hour < NOON else "PM"
    return (
        f"{local.month}/{local.day}/{local:%y}, "
        f"{hour}:{local:%M} {suffix}"
    )


def format_row(record: IntakeRecord, tz: ZoneInfo) -> IntakeRow:
    """Build the display row for a single intake."""
    return IntakeRow(
        record=record,
        calories_text=f"Calories: {record.calories}",
        logged_at_text=format_short_datetime(record.logged_at, tz),
    )


@dataclass
class IntakeService:
    """Front door for adding intakes from raw text and listing them."""

    ledger: IntakeLedger
    timezone_name: str = "UTC"

    def submit(self, text: str | None) -> IntakeRecord:
        """Parse raw input and add it to the ledger."""
        return self.ledger.add(parse_calories(text))

    def zone(self) -> ZoneInfo:
        """Return the timezone used for display."""
        return ZoneInfo(self.timezone_name)

    def list_rows(self) -> list[IntakeRow]:
        """Return display rows for every intake, oldest first."""
        tz = self.zone()
        return [format_row(record, tz) for record in self.ledger.all_records_ascending()]
