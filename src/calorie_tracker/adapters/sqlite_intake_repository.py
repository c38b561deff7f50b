"""SQLite-backed intake repository."""

import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from calorie_tracker.domain.intake import IntakeRecord
from calorie_tracker.services.ledger import IntakeRepository

_SCHEMA = """
CREATE TABLE IF NOT EXISTS daily_intakes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    calories INTEGER NOT NULL,
    logged_at TEXT NOT NULL
);
"""
_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_daily_intakes_logged_at "
    "ON daily_intakes(logged_at ASC, id ASC);"
)


def connect(db_path: Path) -> sqlite3.Connection:
    """Open a connection, creating parent directories and the schema."""
    if str(db_path) != ":memory:":
        db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    with conn:
        conn.execute(_SCHEMA)
        conn.execute(_INDEX)
    return conn


@dataclass
class SqliteIntakeRepository(IntakeRepository):
    """Embedded SQLite implementation for intake persistence."""

    conn: sqlite3.Connection

    @classmethod
    def open(cls, db_path: Path) -> "SqliteIntakeRepository":
        """Open (or create) the intake database at db_path."""
        return cls(connect(db_path))

    def add_intake(self, calories: int, logged_at: datetime) -> IntakeRecord:
        """Insert an intake row and commit before returning."""
        stored_at = logged_at.astimezone(UTC)
        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO daily_intakes (calories, logged_at) VALUES (?, ?)",
                (calories, stored_at.isoformat(timespec="microseconds")),
            )
        return IntakeRecord(id=cursor.lastrowid, calories=calories, logged_at=stored_at)

    def list_intakes(self) -> list[IntakeRecord]:
        """Return all intakes, oldest first."""
        rows = self.conn.execute(
            "SELECT id, calories, logged_at FROM daily_intakes "
            "ORDER BY logged_at ASC, id ASC"
        ).fetchall()
        return [_parse_row(row) for row in rows]

    def close(self) -> None:
        self.conn.close()


def _parse_row(row: sqlite3.Row) -> IntakeRecord:
    return IntakeRecord(
        id=int(row["id"]),
        calories=int(row["calories"]),
        logged_at=datetime.fromisoformat(row["logged_at"]),
    )
