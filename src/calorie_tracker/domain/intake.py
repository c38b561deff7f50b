"""Domain models for calorie intake logging."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class IntakeRecord:
    """A single logged calorie intake."""

    id: int | None
    calories: int
    logged_at: datetime


@dataclass(frozen=True)
class IntakeRow:
    """Display-ready intake row."""

    record: IntakeRecord
    calories_text: str
    logged_at_text: str


@dataclass(frozen=True)
class ChartSeries:
    """Plottable calorie values in chronological order."""

    values: list[float] = field(default_factory=list)
    area: bool = True
