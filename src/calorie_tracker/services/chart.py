"""Chart projection derived from the intake ledger."""

from dataclasses import dataclass, field

from calorie_tracker.domain.intake import ChartSeries
from calorie_tracker.services.ledger import IntakeLedger, Subscription


@dataclass
class ChartProjection:
    """Calorie series recomputed in full whenever the ledger changes."""

    series: list[float] = field(default_factory=list)
    stale: bool = False

    def rebuild(self, ledger: IntakeLedger) -> list[float]:
        """Replace the series with the ledger's calories in chronological order."""
        self.stale = True
        records = ledger.all_records_ascending()
        self.series = [float(record.calories) for record in records]
        self.stale = False
        return self.series

    def refresh_if_stale(self, ledger: IntakeLedger) -> list[float]:
        """Retry a rebuild that failed during an earlier notification."""
        if self.stale:
            return self.rebuild(ledger)
        return self.series

    def bind(self, ledger: IntakeLedger) -> Subscription:
        """Build the initial series and keep it current on every change."""
        self.rebuild(ledger)
        return ledger.subscribe(lambda: self.rebuild(ledger))

    def chart_series(self) -> ChartSeries:
        """Return the current series as an area chart."""
        return ChartSeries(values=list(self.series), area=True)
