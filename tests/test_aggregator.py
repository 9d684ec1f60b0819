"""Tests for statistics aggregation."""

from datetime import date

import pytest

from headache_insights.aggregator import (
    Aggregator,
    build_calendar,
    migraine_stats,
    month_bounds,
    monthly_recap,
    monthly_stats,
    weekly_stats,
)
from headache_insights.records import (
    HealthRecords,
    HeadacheRecord,
    MedicationRecord,
    SleepRecord,
    StressRecord,
)


class TestMonthBounds:
    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2024, 1, 20), (date(2024, 1, 1), date(2024, 1, 31))),
            (date(2024, 2, 29), (date(2024, 2, 1), date(2024, 2, 29))),
            (date(2023, 2, 1), (date(2023, 2, 1), date(2023, 2, 28))),
        ],
    )
    def test_bounds(self, today, expected):
        assert month_bounds(today) == expected


class TestBuildCalendar:
    """Tests for day-keyed grouping."""

    def test_only_logged_days_have_entries(self, sample_records):
        calendar = build_calendar(sample_records, date(2024, 1, 1), date(2024, 1, 31))

        assert sorted(calendar) == [
            date(2024, 1, 5),
            date(2024, 1, 10),
            date(2024, 1, 18),
            date(2024, 1, 20),
        ]

    def test_groups_multiple_medications(self, sample_records):
        calendar = build_calendar(sample_records, date(2024, 1, 18), date(2024, 1, 18))
        entry = calendar[date(2024, 1, 18)]

        assert len(entry.headaches) == 1
        assert [m.category for m in entry.medications] == ["NSAIDs", "Acetaminophen"]

    def test_preventive_only_day_is_medication_day(self, sample_records):
        calendar = build_calendar(sample_records, date(2024, 1, 5), date(2024, 1, 5))
        entry = calendar[date(2024, 1, 5)]

        assert entry.has_medication
        assert not entry.has_headache

    def test_migraine_flag_carried(self, sample_records):
        calendar = build_calendar(sample_records, date(2024, 1, 20), date(2024, 1, 20))
        assert calendar[date(2024, 1, 20)].headaches[0].is_migraine

    def test_empty_records(self):
        assert build_calendar(HealthRecords(), date(2024, 1, 1), date(2024, 1, 31)) == {}


class TestWeeklyStats:
    """Tests for the trailing seven-day aggregates."""

    def test_sample(self, sample_records, today):
        stats = weekly_stats(sample_records, today)

        assert stats.total_headaches == 2
        assert stats.avg_sleep_hours == pytest.approx(7.0)
        assert stats.avg_sleep_quality == pytest.approx(6.0)
        assert stats.avg_stress_level == pytest.approx(7.0)

    def test_window_is_seven_days(self, today):
        records = HealthRecords(
            headaches=[
                HeadacheRecord(day=date(2024, 1, 14), pain_level=3),
                HeadacheRecord(day=date(2024, 1, 13), pain_level=3),
            ]
        )
        assert weekly_stats(records, today).total_headaches == 1

    def test_no_samples_gives_none(self, today):
        stats = weekly_stats(HealthRecords(), today)

        assert stats.total_headaches == 0
        assert stats.avg_sleep_hours is None
        assert stats.avg_sleep_quality is None
        assert stats.avg_stress_level is None

    def test_sleep_quality_optional(self, today):
        records = HealthRecords(
            sleep=[
                SleepRecord(day=today, hours_slept=6.0),
                SleepRecord(day=today, hours_slept=8.0, sleep_quality=4),
            ],
            stress=[StressRecord(day=today, stress_level=3)],
        )
        stats = weekly_stats(records, today)

        assert stats.avg_sleep_hours == pytest.approx(7.0)
        assert stats.avg_sleep_quality == pytest.approx(4.0)
        assert stats.avg_stress_level == pytest.approx(3.0)


class TestMonthlyStats:
    """Tests for current-month distinct-day counts."""

    def test_sample(self, sample_records, today):
        stats = monthly_stats(sample_records, today)

        assert stats.days_with_headaches == 3
        assert stats.days_with_otc == 1
        assert stats.days_with_migraine_meds == 2
        assert stats.medication_days == 3

    def test_day_with_both_kinds_counts_twice(self, today):
        records = HealthRecords(
            medications=[
                MedicationRecord(day=today, category="NSAIDs"),
                MedicationRecord(day=today, category="Triptans"),
                MedicationRecord(day=today, category="Triptans"),
            ]
        )
        stats = monthly_stats(records, today)

        assert stats.days_with_otc == 1
        assert stats.days_with_migraine_meds == 1
        assert stats.medication_days == 2

    def test_ignores_previous_month_and_future(self, today):
        records = HealthRecords(
            medications=[
                MedicationRecord(day=date(2023, 12, 31), category="NSAIDs"),
                MedicationRecord(day=date(2024, 1, 21), category="NSAIDs"),
            ]
        )
        assert monthly_stats(records, today).days_with_otc == 0


class TestMigraineStats:
    def test_sample(self, sample_records, today):
        stats = migraine_stats(sample_records, today)

        assert stats.total_migraines == 2
        assert stats.total_regular_headaches == 1
        assert stats.days_with_migraines == 2
        assert stats.avg_migraine_pain_level == pytest.approx(7.0)
        assert stats.avg_regular_pain_level == pytest.approx(4.0)

    def test_no_headaches(self, today):
        stats = migraine_stats(HealthRecords(), today)

        assert stats.total_migraines == 0
        assert stats.avg_migraine_pain_level is None
        assert stats.avg_regular_pain_level is None


class TestMonthlyRecap:
    def test_sample(self, sample_records, today):
        recap = monthly_recap(sample_records, today)

        assert recap.total_headaches == 3
        assert recap.headache_free_days == 28
        assert recap.avg_pain_level == 6.0
        assert recap.medications_taken == 5
        assert recap.intensity == {"mild": 0, "moderate": 2, "severe": 1}

    def test_rounds_average(self, today):
        records = HealthRecords(
            headaches=[
                HeadacheRecord(day=date(2024, 1, 2), pain_level=3),
                HeadacheRecord(day=date(2024, 1, 2), pain_level=4),
                HeadacheRecord(day=date(2024, 1, 3), pain_level=4),
            ]
        )
        recap = monthly_recap(records, today)

        assert recap.avg_pain_level == 3.7
        assert recap.headache_free_days == 29

    def test_empty_month(self, today):
        recap = monthly_recap(HealthRecords(), today)

        assert recap.total_headaches == 0
        assert recap.headache_free_days == 31
        assert recap.avg_pain_level == 0.0
        assert recap.to_dict()["intensity"] == {"mild": 0, "moderate": 0, "severe": 0}


class TestAggregator:
    def test_snapshot(self, sample_records, today):
        snapshot = Aggregator(sample_records).snapshot(today)

        assert snapshot.today == today
        assert sorted(snapshot.calendar) == [
            date(2023, 12, 28),
            date(2024, 1, 5),
            date(2024, 1, 10),
            date(2024, 1, 18),
            date(2024, 1, 20),
        ]
        assert len(snapshot.calendar[date(2024, 1, 18)].medications) == 2
        assert snapshot.weekly.total_headaches == 2
        assert snapshot.monthly.days_with_headaches == 3
        assert snapshot.migraine.total_migraines == 2
        assert snapshot.recap.total_headaches == 3

    def test_calendar_covers_month_start_late_in_month(self):
        records = HealthRecords(
            medications=[MedicationRecord(day=date(2024, 1, 1), category="NSAIDs")]
        )
        snapshot = Aggregator(records).snapshot(date(2024, 1, 31))
        assert date(2024, 1, 1) in snapshot.calendar
