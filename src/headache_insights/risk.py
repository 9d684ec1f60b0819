"""Medication-overuse headache (MOH) risk classification."""

from datetime import date, timedelta

import structlog

from .models import CalendarMap, MohWarning, MonthlyStats, RiskAssessment, RiskLevel, WarningType

logger = structlog.get_logger(__name__)

MOH_LOOKBACK_DAYS = 30
CRITICAL_CONSECUTIVE_DAYS = 10
HIGH_CONSECUTIVE_DAYS = 4
HIGH_MONTHLY_DAYS = 15  # strictly more than this
MODERATE_MONTHLY_DAYS = 10


def longest_medication_streak(
    calendar: CalendarMap, today: date, lookback_days: int = MOH_LOOKBACK_DAYS
) -> int:
    """Longest run of consecutive medication days in the lookback window.

    The window ends at ``today`` (inclusive). The whole window is scanned, so
    a streak that ended weeks ago still counts.
    """
    consecutive = 0
    longest = 0
    for offset in range(lookback_days):
        entry = calendar.get(today - timedelta(days=offset))
        if entry is not None and entry.has_medication:
            consecutive += 1
            longest = max(longest, consecutive)
        else:
            consecutive = 0
    return longest


def assess_medication_overuse_risk(
    calendar: CalendarMap | None,
    monthly_stats: MonthlyStats | None,
    today: date,
) -> RiskAssessment | None:
    """Classify MOH risk from recent medication days.

    Args:
        calendar: Day-keyed entries covering at least the last 30 days.
        monthly_stats: Medication day counts for the current month.
        today: Reference date the lookback window ends on.

    Returns:
        RiskAssessment, or None when either input is missing.
    """
    if calendar is None or monthly_stats is None:
        return None

    max_consecutive = longest_medication_streak(calendar, today)
    monthly_days = monthly_stats.medication_days
    warnings: list[MohWarning] = []

    if max_consecutive >= CRITICAL_CONSECUTIVE_DAYS:
        level = RiskLevel.CRITICAL
        warnings.append(
            MohWarning(
                type=WarningType.CRITICAL,
                message=(
                    f"You've taken medication {max_consecutive} days in a row. "
                    "This pattern carries a high risk of medication-overuse headache."
                ),
                action="Talk to your healthcare provider about alternative treatment options.",
            )
        )
    elif max_consecutive >= HIGH_CONSECUTIVE_DAYS or monthly_days > HIGH_MONTHLY_DAYS:
        level = RiskLevel.HIGH
        if max_consecutive >= HIGH_CONSECUTIVE_DAYS:
            warnings.append(
                MohWarning(
                    type=WarningType.WARNING,
                    message=(
                        f"Medication taken {max_consecutive} consecutive days. "
                        "Frequent back-to-back use can lead to rebound headaches."
                    ),
                    action="Try to limit acute medication to 2-3 days per week.",
                )
            )
        if monthly_days > HIGH_MONTHLY_DAYS:
            warnings.append(
                MohWarning(
                    type=WarningType.WARNING,
                    message=(
                        f"Medication used on {monthly_days} days this month. "
                        "More than 15 days per month increases the risk of "
                        "medication-overuse headache."
                    ),
                    action="Discuss a prevention plan with your healthcare provider.",
                )
            )
    elif monthly_days >= MODERATE_MONTHLY_DAYS:
        level = RiskLevel.MODERATE
        warnings.append(
            MohWarning(
                type=WarningType.CAUTION,
                message=(
                    f"Medication used on {monthly_days} days this month. "
                    "You're approaching the frequency where overuse headaches become more likely."
                ),
                action="Monitor how often you take medication and consider non-drug strategies.",
            )
        )
    else:
        level = RiskLevel.NONE

    logger.debug(
        "moh_risk_assessed",
        risk_level=level.value,
        consecutive_days=max_consecutive,
        monthly_days=monthly_days,
    )

    return RiskAssessment(
        level=level,
        consecutive_days=max_consecutive,
        monthly_days=monthly_days,
        warnings=tuple(warnings),
    )
