"""Plain-text formatting for dashboard reports."""

from .models import InsightCard, RiskAssessment, RiskLevel
from .report import DashboardReport, MedicationAlert
from .severity import pain_level_label

_SEVERITY_MARKERS = {
    "critical": "[!!]",
    "warning": "[!]",
    "caution": "[~]",
    "info": "[i]",
    "success": "[+]",
}


class DashboardTextFormatter:
    """Formats a dashboard report as markdown-style text."""

    def format(self, report: DashboardReport) -> str:
        """Format the complete dashboard report.

        Args:
            report: Generated dashboard report.

        Returns:
            Formatted report string.
        """
        sections = [f"*Headache Dashboard*\n{report.today.strftime('%b %d, %Y')}"]
        sections.append(self._format_quick_stats(report))
        if report.risk is not None and report.risk.level != RiskLevel.NONE:
            sections.append(self._format_risk(report.risk))
        sections.append(self._format_insights(report.insights))
        if report.medication_alerts:
            sections.append(self._format_medication_alerts(report.medication_alerts))
        sections.append(self._format_recap(report))
        return "\n\n".join(sections)

    def _format_quick_stats(self, report: DashboardReport) -> str:
        """Format the weekly quick statistics section."""
        weekly = report.snapshot.weekly
        lines = ["*This Week*", f"Headaches: {weekly.total_headaches}"]
        if weekly.avg_sleep_hours is not None:
            lines.append(f"Sleep: {weekly.avg_sleep_hours:.1f}h avg")
        if weekly.avg_sleep_quality is not None:
            lines.append(f"Sleep quality: {weekly.avg_sleep_quality:.1f}/10")
        if weekly.avg_stress_level is not None:
            lines.append(f"Stress: {weekly.avg_stress_level:.1f}/10")
        return "\n".join(lines)

    def _format_risk(self, risk: RiskAssessment) -> str:
        lines = [
            f"*Medication Overuse Risk: {risk.level.value.upper()}*",
            f"Longest streak: {risk.consecutive_days} days | Medication days this month: {risk.monthly_days}",
        ]
        return "\n".join(lines)

    def _format_insights(self, insights: list[InsightCard]) -> str:
        if not insights:
            return "*Insights*\nNo insights yet. Keep logging to see patterns."

        lines = ["*Insights*"]
        for i, card in enumerate(insights, 1):
            marker = _SEVERITY_MARKERS[card.severity.value]
            lines.append(f"{i}. {marker} {card.message}")
            if card.action:
                lines.append(f"   -> {card.action}")
        return "\n".join(lines)

    def _format_medication_alerts(self, alerts: list[MedicationAlert]) -> str:
        lines = ["*Medication Notes*"]
        for alert in alerts:
            lines.append(f"{alert.day.strftime('%b %d')} {alert.name or alert.category}:")
            lines.extend(f"  - {warning}" for warning in alert.warnings)
        return "\n".join(lines)

    def _format_recap(self, report: DashboardReport) -> str:
        """Format the monthly overview section."""
        recap = report.snapshot.recap
        intensity = recap.intensity
        pain_label = pain_level_label(round(recap.avg_pain_level))
        return "\n".join(
            [
                "*Monthly Overview*",
                f"Total headaches: {recap.total_headaches}",
                f"Headache-free days: {recap.headache_free_days}",
                f"Avg pain level: {recap.avg_pain_level} ({pain_label})",
                f"Medications taken: {recap.medications_taken}",
                (
                    f"Mild (1-3): {intensity.get('mild', 0)} | "
                    f"Moderate (4-6): {intensity.get('moderate', 0)} | "
                    f"Severe (7-10): {intensity.get('severe', 0)}"
                ),
            ]
        )
