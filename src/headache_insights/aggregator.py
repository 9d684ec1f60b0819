"""Aggregation of raw entries into dashboard statistics.

This module handles:
- Grouping headaches and medications into a day-keyed calendar
- Trailing-week sleep, stress and headache aggregates
- Current-month medication and migraine statistics
- The monthly recap shown under the calendar
"""

import statistics
from calendar import monthrange
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta

import structlog

from .medications import MedicationClass
from .models import (
    CalendarMap,
    DayEntry,
    HeadacheEvent,
    MedicationEvent,
    MigraineStats,
    MonthlyStats,
    WeeklyStats,
)
from .records import HealthRecords
from .risk import MOH_LOOKBACK_DAYS
from .severity import intensity_breakdown
from .types import JSONObject

logger = structlog.get_logger(__name__)

WEEK_DAYS = 7


def _in_window(day: date, start: date, end: date) -> bool:
    return start <= day <= end


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return statistics.mean(values)


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of the month containing ``today``."""
    last_day = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def build_calendar(records: HealthRecords, start: date, end: date) -> CalendarMap:
    """Group headaches and medications by day.

    Only days with at least one headache or medication get an entry.
    """
    headaches: dict[date, list[HeadacheEvent]] = defaultdict(list)
    medications: dict[date, list[MedicationEvent]] = defaultdict(list)

    for record in records.headaches:
        if _in_window(record.day, start, end):
            headaches[record.day].append(
                HeadacheEvent(
                    pain_level=record.pain_level,
                    duration_min=record.duration_min,
                    is_migraine=record.is_migraine,
                )
            )

    for record in records.medications:
        if _in_window(record.day, start, end):
            medications[record.day].append(
                MedicationEvent(name=record.name, category=record.category)
            )

    return {
        day: DayEntry(
            day=day,
            headaches=tuple(headaches.get(day, ())),
            medications=tuple(medications.get(day, ())),
        )
        for day in sorted(set(headaches) | set(medications))
    }


def weekly_stats(records: HealthRecords, today: date) -> WeeklyStats:
    """Aggregate the seven days ending on ``today``."""
    start = today - timedelta(days=WEEK_DAYS - 1)

    sleep = [r for r in records.sleep if _in_window(r.day, start, today)]
    stress = [r for r in records.stress if _in_window(r.day, start, today)]

    return WeeklyStats(
        total_headaches=sum(1 for r in records.headaches if _in_window(r.day, start, today)),
        avg_sleep_hours=_mean([r.hours_slept for r in sleep]),
        avg_sleep_quality=_mean([r.sleep_quality for r in sleep if r.sleep_quality is not None]),
        avg_stress_level=_mean([r.stress_level for r in stress]),
    )


def monthly_stats(records: HealthRecords, today: date) -> MonthlyStats:
    """Distinct-day counts from the first of the month up to ``today``."""
    start, _ = month_bounds(today)

    headache_days = {r.day for r in records.headaches if _in_window(r.day, start, today)}
    otc_days: set[date] = set()
    migraine_med_days: set[date] = set()
    for record in records.medications:
        if not _in_window(record.day, start, today):
            continue
        if record.medication_class == MedicationClass.OTC:
            otc_days.add(record.day)
        elif record.medication_class == MedicationClass.MIGRAINE:
            migraine_med_days.add(record.day)

    return MonthlyStats(
        days_with_headaches=len(headache_days),
        days_with_otc=len(otc_days),
        days_with_migraine_meds=len(migraine_med_days),
    )


def migraine_stats(records: HealthRecords, today: date) -> MigraineStats:
    """Split the month's headaches into migraines and regular headaches."""
    start, _ = month_bounds(today)
    in_month = [r for r in records.headaches if _in_window(r.day, start, today)]
    migraines = [r for r in in_month if r.is_migraine]
    regular = [r for r in in_month if not r.is_migraine]

    return MigraineStats(
        total_migraines=len(migraines),
        total_regular_headaches=len(regular),
        days_with_migraines=len({r.day for r in migraines}),
        avg_migraine_pain_level=_mean([r.pain_level for r in migraines]),
        avg_regular_pain_level=_mean([r.pain_level for r in regular]),
    )


@dataclass(frozen=True)
class MonthlyRecap:
    """Month overview figures."""

    total_headaches: int
    headache_free_days: int
    avg_pain_level: float
    medications_taken: int
    intensity: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> JSONObject:
        return {
            "total_headaches": self.total_headaches,
            "headache_free_days": self.headache_free_days,
            "avg_pain_level": self.avg_pain_level,
            "medications_taken": self.medications_taken,
            "intensity": dict(self.intensity),
        }


def monthly_recap(records: HealthRecords, today: date) -> MonthlyRecap:
    """Summarize the whole calendar month containing ``today``."""
    start, end = month_bounds(today)
    month = build_calendar(records, start, end)

    all_headaches = [h for entry in month.values() for h in entry.headaches]
    headache_days = sum(1 for entry in month.values() if entry.has_headache)
    avg_pain = 0.0
    if all_headaches:
        avg_pain = round(sum(h.pain_level or 0 for h in all_headaches) / len(all_headaches), 1)

    return MonthlyRecap(
        total_headaches=len(all_headaches),
        headache_free_days=(end - start).days + 1 - headache_days,
        avg_pain_level=avg_pain,
        medications_taken=sum(len(entry.medications) for entry in month.values()),
        intensity=intensity_breakdown(month),
    )


@dataclass(frozen=True)
class AggregateSnapshot:
    """Everything the insight engine needs for one dashboard load."""

    today: date
    calendar: CalendarMap
    weekly: WeeklyStats
    monthly: MonthlyStats
    migraine: MigraineStats
    recap: MonthlyRecap


class Aggregator:
    """Computes dashboard statistics from raw entries."""

    def __init__(self, records: HealthRecords) -> None:
        self._records = records

    def snapshot(self, today: date) -> AggregateSnapshot:
        """Aggregate all statistics relative to ``today``.

        The calendar covers the MOH lookback window and the current month.
        """
        month_start, _ = month_bounds(today)
        calendar_start = min(today - timedelta(days=MOH_LOOKBACK_DAYS - 1), month_start)
        calendar = build_calendar(self._records, calendar_start, today)

        snapshot = AggregateSnapshot(
            today=today,
            calendar=calendar,
            weekly=weekly_stats(self._records, today),
            monthly=monthly_stats(self._records, today),
            migraine=migraine_stats(self._records, today),
            recap=monthly_recap(self._records, today),
        )
        logger.info(
            "aggregate_snapshot_built",
            today=today.isoformat(),
            calendar_days=len(calendar),
            weekly_headaches=snapshot.weekly.total_headaches,
        )
        return snapshot
