"""Tests for intake input parsing and list rendering."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from calorie_tracker.services.intakes import (
    IntakeService,
    format_short_datetime,
    parse_calories,
)
from calorie_tracker.services.ledger import IntakeLedger, IntakeStorageError
from tests.conftest import FailingIntakeRepository


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("500", 500),
        ("+25", 25),
        ("-40", -40),
        ("0", 0),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (" 500", 0),
        ("12.5", 0),
        ("1_000", 0),
        ("99999999999999999999", 0),
    ],
)
def test_parse_calories(text: str | None, expected: int) -> None:
    assert parse_calories(text) == expected


def test_submit_non_numeric_text_logs_zero(ledger: IntakeLedger) -> None:
    service = IntakeService(ledger)

    record = service.submit("abc")

    assert record.calories == 0
    assert [r.calories for r in ledger.all_records_ascending()] == [0]


def test_submit_reports_storage_failure() -> None:
    service = IntakeService(IntakeLedger(FailingIntakeRepository()))

    with pytest.raises(IntakeStorageError):
        service.submit("300")


def test_format_short_datetime() -> None:
    value = datetime(2026, 10, 19, 16, 3, tzinfo=UTC)

    assert format_short_datetime(value, ZoneInfo("UTC")) == "10/19/26, 4:03 PM"
    assert format_short_datetime(value, ZoneInfo("Asia/Tokyo")) == "10/20/26, 1:03 AM"


def test_format_short_datetime_midnight_and_noon() -> None:
    tz = ZoneInfo("UTC")

    assert format_short_datetime(datetime(2026, 1, 2, 0, 5, tzinfo=UTC), tz) == (
        "1/2/26, 12:05 AM"
    )
    assert format_short_datetime(datetime(2026, 1, 2, 12, 0, tzinfo=UTC), tz) == (
        "1/2/26, 12:00 PM"
    )


def test_list_rows_formats_every_record(ledger: IntakeLedger) -> None:
    service = IntakeService(ledger, timezone_name="UTC")
    service.submit("500")
    service.submit("300")

    rows = service.list_rows()

    assert [row.calories_text for row in rows] == ["Calories: 500", "Calories: 300"]
    assert [row.record.calories for row in rows] == [500, 300]
    assert rows[0].logged_at_text == "10/19/26, 3:00 PM"
    assert rows[1].logged_at_text == "10/19/26, 3:01 PM"
