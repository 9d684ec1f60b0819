"""Prioritized insight cards for the headache dashboard."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

import structlog

from .models import (
    CalendarMap,
    CardSeverity,
    CompletenessReport,
    DataCompletenessCard,
    DataType,
    InsightCard,
    MigrainePatternCard,
    MigraineStats,
    MohWarningCard,
    MonthlyStats,
    NoHeadachesCard,
    ReinforcementCard,
    RiskAssessment,
    RiskLevel,
    SleepRecommendationCard,
    StressRecommendationCard,
    WarningType,
    WeeklyStats,
    WeeklySummaryCard,
    has_data,
)
from .risk import MODERATE_MONTHLY_DAYS, assess_medication_overuse_risk

logger = structlog.get_logger(__name__)

MIGRAINE_SEVERITY_MARGIN = 2
POOR_SLEEP_QUALITY = 6
HIGH_STRESS_LEVEL = 7
MIN_SLEEP_HOURS = 7
ELEVATED_STRESS_LEVEL = 6
GOOD_SLEEP_QUALITY = 7
LOW_STRESS_LEVEL = 5

# Display order for the missing-data card
_DATA_TYPE_ORDER = (DataType.SLEEP, DataType.STRESS, DataType.MEDICATIONS)

_DATA_TYPE_REASONS = {
    DataType.SLEEP: "sleep (poor or short sleep is a common trigger)",
    DataType.STRESS: "stress (helps spot stress-related headache patterns)",
    DataType.MEDICATIONS: "medications (needed to watch for medication overuse)",
}

_WARNING_SEVERITY = {
    WarningType.CRITICAL: CardSeverity.CRITICAL,
    WarningType.WARNING: CardSeverity.WARNING,
    WarningType.CAUTION: CardSeverity.CAUTION,
}


def analyze_completeness(
    weekly_stats: WeeklyStats, monthly_stats: MonthlyStats | None
) -> CompletenessReport:
    """Work out which data types are missing.

    Medications only count as missing when headaches are being logged without
    any medication response.
    """
    missing: set[DataType] = set()
    if not has_data(weekly_stats.avg_sleep_hours):
        missing.add(DataType.SLEEP)
    if not has_data(weekly_stats.avg_stress_level):
        missing.add(DataType.STRESS)
    if (
        monthly_stats is not None
        and weekly_stats.total_headaches > 0
        and monthly_stats.medication_days == 0
    ):
        missing.add(DataType.MEDICATIONS)
    return CompletenessReport(missing=frozenset(missing))


@dataclass(frozen=True)
class InsightContext:
    """Inputs shared by every insight rule."""

    weekly: WeeklyStats
    monthly: MonthlyStats | None
    migraine: MigraineStats | None
    risk: RiskAssessment | None
    completeness: CompletenessReport


@dataclass
class InsightRule:
    """A single rule producing zero or more insight cards."""

    name: str
    condition: Callable[[InsightContext], bool]
    generate: Callable[[InsightContext], list[InsightCard]]
    priority: int = 50  # Higher = shown first


def _moh_cards(ctx: InsightContext) -> list[InsightCard]:
    return [
        MohWarningCard(
            severity=_WARNING_SEVERITY[warning.type],
            message=warning.message,
            action=warning.action,
            risk_level=ctx.risk.level,
        )
        for warning in ctx.risk.warnings
    ]


def _migraine_card(ctx: InsightContext) -> list[InsightCard]:
    stats = ctx.migraine
    migraine_pain = stats.avg_migraine_pain_level or 0.0
    regular_pain = stats.avg_regular_pain_level or 0.0
    more_severe = migraine_pain > regular_pain + MIGRAINE_SEVERITY_MARGIN

    message = (
        f"This month you logged {stats.total_migraines} "
        f"migraine{'s' if stats.total_migraines != 1 else ''} and "
        f"{stats.total_regular_headaches} regular "
        f"headache{'s' if stats.total_regular_headaches != 1 else ''}."
    )
    if more_severe:
        message += (
            f" Your migraines are significantly more severe "
            f"(avg pain {migraine_pain:.1f}/10 vs {regular_pain:.1f}/10)."
        )
    return [
        MigrainePatternCard(
            message=message,
            total_migraines=stats.total_migraines,
            total_regular_headaches=stats.total_regular_headaches,
            migraines_more_severe=more_severe,
        )
    ]


def _weekly_card(ctx: InsightContext) -> list[InsightCard]:
    weekly = ctx.weekly
    if weekly.total_headaches == 0:
        return [
            NoHeadachesCard(
                message=(
                    "Excellent week! No headaches recorded. "
                    "Keep up the good work with your healthy habits!"
                )
            )
        ]

    poor_sleep = (
        has_data(weekly.avg_sleep_quality) and weekly.avg_sleep_quality < POOR_SLEEP_QUALITY
    )
    high_stress = (
        has_data(weekly.avg_stress_level) and weekly.avg_stress_level > HIGH_STRESS_LEVEL
    )
    count = weekly.total_headaches
    message = f"You've had {count} headache{'s' if count > 1 else ''} this week."
    if poor_sleep:
        message += " Poor sleep quality may be contributing to headaches."
    if high_stress:
        message += " High stress levels could be triggering headaches."
    return [
        WeeklySummaryCard(
            message=message,
            total_headaches=count,
            poor_sleep_quality=poor_sleep,
            high_stress=high_stress,
        )
    ]


def _completeness_card(ctx: InsightContext) -> list[InsightCard]:
    missing = [t for t in _DATA_TYPE_ORDER if t in ctx.completeness.missing]
    reasons = "; ".join(_DATA_TYPE_REASONS[t] for t in missing)
    return [
        DataCompletenessCard(
            message=f"Some data is missing this week: {reasons}.",
            missing=ctx.completeness.missing,
            action="Log these entries to unlock more accurate insights.",
        )
    ]


def _sleep_card(ctx: InsightContext) -> list[InsightCard]:
    hours = ctx.weekly.avg_sleep_hours
    return [
        SleepRecommendationCard(
            message=f"You're averaging {hours:.1f} hours of sleep.",
            avg_sleep_hours=hours,
            action="Aim for 7-9 hours for optimal health.",
        )
    ]


def _stress_card(ctx: InsightContext) -> list[InsightCard]:
    level = ctx.weekly.avg_stress_level
    return [
        StressRecommendationCard(
            message=f"Your stress levels are elevated (avg: {level:.1f}/10).",
            avg_stress_level=level,
            action="Try stress reduction techniques like meditation or exercise.",
        )
    ]


def _reinforcement_card(ctx: InsightContext) -> list[InsightCard]:
    weekly = ctx.weekly
    if (
        has_data(weekly.avg_sleep_quality)
        and has_data(weekly.avg_stress_level)
        and weekly.avg_sleep_quality >= GOOD_SLEEP_QUALITY
        and weekly.avg_stress_level <= LOW_STRESS_LEVEL
    ):
        variant = "excellent"
        message = (
            "Your sleep and stress management are excellent! "
            "This creates ideal conditions for headache prevention."
        )
    elif ctx.completeness.is_complete:
        variant = "focus"
        message = (
            "Focus on improving sleep quality and reducing stress "
            "for better headache management."
        )
    else:
        variant = "keep_tracking"
        message = (
            "Good job tracking your headaches! "
            "Add sleep and stress entries for better insights."
        )

    medication_healthy = (
        ctx.monthly is not None and ctx.monthly.medication_days < MODERATE_MONTHLY_DAYS
    )
    if medication_healthy:
        message += " Your medication usage looks healthy."

    return [
        ReinforcementCard(
            message=message,
            variant=variant,
            medication_usage_healthy=medication_healthy,
        )
    ]


def _build_rules() -> list[InsightRule]:
    """Build the insight rules, one per dashboard section."""
    return [
        InsightRule(
            name="moh_warnings",
            priority=100,
            condition=lambda c: c.risk is not None and len(c.risk.warnings) > 0,
            generate=_moh_cards,
        ),
        InsightRule(
            name="migraine_pattern",
            priority=90,
            condition=lambda c: c.migraine is not None and c.migraine.total_migraines > 0,
            generate=_migraine_card,
        ),
        InsightRule(
            name="weekly_activity",
            priority=80,
            condition=lambda c: True,
            generate=_weekly_card,
        ),
        InsightRule(
            name="data_completeness",
            priority=70,
            condition=lambda c: not c.completeness.is_complete,
            generate=_completeness_card,
        ),
        InsightRule(
            name="sleep_recommendation",
            priority=60,
            condition=lambda c: (
                has_data(c.weekly.avg_sleep_hours) and c.weekly.avg_sleep_hours < MIN_SLEEP_HOURS
            ),
            generate=_sleep_card,
        ),
        InsightRule(
            name="stress_recommendation",
            priority=50,
            condition=lambda c: (
                has_data(c.weekly.avg_stress_level)
                and c.weekly.avg_stress_level > ELEVATED_STRESS_LEVEL
            ),
            generate=_stress_card,
        ),
        InsightRule(
            name="reinforcement",
            priority=10,
            condition=lambda c: c.risk is None or c.risk.level == RiskLevel.NONE,
            generate=_reinforcement_card,
        ),
    ]


class InsightComposer:
    """Evaluates insight rules in priority order."""

    def __init__(self) -> None:
        self._rules = sorted(_build_rules(), key=lambda r: r.priority, reverse=True)

    def compose(self, ctx: InsightContext) -> list[InsightCard]:
        """Return the cards of every matching rule, highest priority first."""
        cards: list[InsightCard] = []
        for rule in self._rules:
            if rule.condition(ctx):
                generated = rule.generate(ctx)
                cards.extend(generated)
                logger.debug("insight_rule_matched", rule=rule.name, cards=len(generated))
        return cards


_composer = InsightComposer()


def compose_insights(
    weekly_stats: WeeklyStats,
    monthly_stats: MonthlyStats | None,
    migraine_stats: MigraineStats | None,
    calendar: CalendarMap | None,
    today: date,
) -> list[InsightCard]:
    """Build the ordered insight feed for the dashboard.

    Args:
        weekly_stats: Trailing-week aggregates.
        monthly_stats: Current-month medication and headache day counts.
        migraine_stats: Current-month migraine breakdown.
        calendar: Day-keyed entries used for the MOH streak scan.
        today: Reference date for the MOH lookback window.

    Returns:
        Insight cards, highest priority first.
    """
    risk = assess_medication_overuse_risk(calendar, monthly_stats, today)
    return compose_assessed_insights(weekly_stats, monthly_stats, migraine_stats, risk)


def compose_assessed_insights(
    weekly_stats: WeeklyStats,
    monthly_stats: MonthlyStats | None,
    migraine_stats: MigraineStats | None,
    risk: RiskAssessment | None,
) -> list[InsightCard]:
    """Build the insight feed from an MOH assessment the caller already made."""
    ctx = InsightContext(
        weekly=weekly_stats,
        monthly=monthly_stats,
        migraine=migraine_stats,
        risk=risk,
        completeness=analyze_completeness(weekly_stats, monthly_stats),
    )
    return _composer.compose(ctx)
