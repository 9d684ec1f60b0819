"""Pytest configuration and fixtures."""

from datetime import date, timedelta
from pathlib import Path
import sys

import pytest
import structlog

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from headache_insights.models import DayEntry, HeadacheEvent, MedicationEvent  # noqa: E402


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def today():
    """Fixed reference date for every window."""
    return date(2024, 1, 20)


@pytest.fixture
def calendar_factory(today):
    """Build a calendar from day offsets relative to ``today``.

    ``medication_offsets`` days get one medication, ``headache_offsets`` days
    get one headache with pain level 5.
    """

    def _build(medication_offsets=(), headache_offsets=()):
        calendar = {}
        for offset in set(medication_offsets) | set(headache_offsets):
            day = today - timedelta(days=offset)
            calendar[day] = DayEntry(
                day=day,
                headaches=(HeadacheEvent(pain_level=5),) if offset in headache_offsets else (),
                medications=(
                    (MedicationEvent(name="Ibuprofen (Advil)", category="NSAIDs"),)
                    if offset in medication_offsets
                    else ()
                ),
            )
        return calendar

    return _build


@pytest.fixture
def sample_export():
    """Sample journal export around 2024-01-20."""
    return {
        "headaches": [
            {"date": "2024-01-20", "pain_level": 6, "duration_min": 240, "type": "migraine"},
            {"date": "2024-01-18", "pain_level": 4, "duration_min": 90, "type": "tension"},
            {"date": "2024-01-10", "pain_level": 8, "duration_min": 600, "type": "migraine"},
            {"date": "2023-12-28", "pain_level": 3, "duration_min": 30, "type": "tension"},
        ],
        "medications": [
            {
                "date": "2024-01-20",
                "medication_type": "Triptans",
                "medication_name": "Sumatriptan (Imitrex)",
                "taken_for": "active-headache",
                "effectiveness": 8,
                "side_effects": ["Nausea"],
            },
            {
                "date": "2024-01-18",
                "medication_type": "NSAIDs",
                "medication_name": "Ibuprofen (Advil)",
                "taken_for": "active-headache",
            },
            {
                "date": "2024-01-18",
                "medication_type": "Acetaminophen",
                "medication_name": "Acetaminophen (Tylenol)",
            },
            {
                "date": "2024-01-10",
                "medication_type": "Triptans",
                "medication_name": "Rizatriptan (Maxalt)",
            },
            {
                "date": "2024-01-05",
                "medication_type": "Preventive - Daily",
                "medication_name": "Topiramate (Topamax)",
            },
            {
                "date": "2023-12-28",
                "medication_type": "NSAIDs",
                "medication_name": "Naproxen (Aleve)",
            },
        ],
        "sleep": [
            {"date": "2024-01-19", "hours_slept": 6.0, "sleep_quality": 5},
            {"date": "2024-01-20", "hours_slept": 8.0, "sleep_quality": 7},
            {"date": "2024-01-12", "hours_slept": 5.0, "sleep_quality": 3},
        ],
        "stress": [
            {"date": "2024-01-19", "stress_level": 6},
            {"date": "2024-01-17", "stress_level": 8},
            {"date": "2024-01-01", "stress_level": 2},
        ],
    }


@pytest.fixture
def sample_records(sample_export):
    """Sample export parsed into health records."""
    from headache_insights.loader import parse_records

    return parse_records(sample_export)
