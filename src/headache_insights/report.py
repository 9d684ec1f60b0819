"""Dashboard report generation."""

from dataclasses import dataclass, field
from datetime import date

import structlog

from .aggregator import AggregateSnapshot, Aggregator, month_bounds
from .insights import compose_assessed_insights
from .models import DayEntry, InsightCard, RiskAssessment
from .records import HealthRecords
from .risk import assess_medication_overuse_risk
from .severity import day_severity, total_duration_min
from .types import JSONObject

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MedicationAlert:
    """Advisories attached to one logged dose."""

    day: date
    name: str
    category: str
    warnings: tuple[str, ...]

    def to_dict(self) -> JSONObject:
        return {
            "date": self.day.isoformat(),
            "name": self.name,
            "category": self.category,
            "warnings": list(self.warnings),
        }


def _calendar_day_dict(entry: DayEntry) -> JSONObject:
    return {
        **entry.to_dict(),
        "severity": day_severity(entry).value,
        "total_duration_min": total_duration_min(entry),
    }


def medication_alerts(records: HealthRecords, today: date) -> list[MedicationAlert]:
    """Per-dose advisories for doses logged this month up to ``today``."""
    start, _ = month_bounds(today)
    alerts = [
        MedicationAlert(
            day=record.day,
            name=record.name,
            category=record.category,
            warnings=tuple(record.warnings),
        )
        for record in records.medications
        if start <= record.day <= today and record.warnings
    ]
    return sorted(alerts, key=lambda a: a.day)


@dataclass(frozen=True)
class DashboardReport:
    """Aggregates, MOH risk and insight feed for one dashboard load."""

    snapshot: AggregateSnapshot
    risk: RiskAssessment | None
    insights: list[InsightCard]
    medication_alerts: list[MedicationAlert] = field(default_factory=list)

    @property
    def today(self) -> date:
        return self.snapshot.today

    def to_dict(self) -> JSONObject:
        """Convert to dictionary for serialization."""
        snapshot = self.snapshot
        return {
            "today": snapshot.today.isoformat(),
            "weekly": snapshot.weekly.to_dict(),
            "monthly": snapshot.monthly.to_dict(),
            "migraine": snapshot.migraine.to_dict(),
            "recap": snapshot.recap.to_dict(),
            "risk": self.risk.to_dict() if self.risk else None,
            "insights": [card.to_dict() for card in self.insights],
            "medication_alerts": [alert.to_dict() for alert in self.medication_alerts],
            "calendar": [_calendar_day_dict(entry) for entry in snapshot.calendar.values()],
        }


class DashboardReportGenerator:
    """Runs the aggregator, risk classifier and insight composer."""

    def generate(self, records: HealthRecords, today: date) -> DashboardReport:
        """Generate the dashboard report for ``today``.

        The MOH assessment is made once and shared by the report and the
        insight feed.

        Args:
            records: Raw journal entries.
            today: Reference date for every window.

        Returns:
            DashboardReport for presentation.
        """
        logger.info("generating_dashboard_report", today=today.isoformat(), records=len(records))

        snapshot = Aggregator(records).snapshot(today)
        risk = assess_medication_overuse_risk(snapshot.calendar, snapshot.monthly, today)
        insights = compose_assessed_insights(
            snapshot.weekly,
            snapshot.monthly,
            snapshot.migraine,
            risk,
        )
        alerts = medication_alerts(records, today)

        logger.info(
            "dashboard_report_generated",
            risk_level=risk.level.value if risk else None,
            insight_count=len(insights),
            medication_alerts=len(alerts),
        )
        return DashboardReport(
            snapshot=snapshot, risk=risk, insights=insights, medication_alerts=alerts
        )
