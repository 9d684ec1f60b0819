"""Pain level and day severity buckets."""

from enum import Enum

from .models import CalendarMap, DayEntry

# Inclusive pain ranges used for the monthly intensity breakdown
INTENSITY_RANGES: dict[str, tuple[int, int]] = {
    "mild": (1, 3),
    "moderate": (4, 6),
    "severe": (7, 10),
}


class Severity(str, Enum):
    """Headache severity of a calendar day."""

    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


def day_severity(entry: DayEntry | None) -> Severity:
    """Bucket a day by the average pain of its headaches."""
    if entry is None or not entry.has_headache:
        return Severity.NONE
    avg_pain = entry.avg_pain_level or 0.0
    if avg_pain <= 3:
        return Severity.MILD
    if avg_pain <= 6:
        return Severity.MODERATE
    return Severity.SEVERE


def pain_level_label(level: int) -> str:
    """Human label for a 0-10 pain score."""
    if level == 0:
        return "No Pain"
    if level <= 3:
        return "Mild"
    if level <= 6:
        return "Moderate"
    if level <= 8:
        return "Severe"
    return "Extreme"


def total_duration_min(entry: DayEntry | None) -> int:
    if entry is None:
        return 0
    return sum(h.duration_min or 0 for h in entry.headaches)


def intensity_breakdown(calendar: CalendarMap) -> dict[str, int]:
    """Count headache events per intensity range.

    Events with pain 0 fall outside every range and are not counted.
    """
    counts = {name: 0 for name in INTENSITY_RANGES}
    for entry in calendar.values():
        for headache in entry.headaches:
            for name, (low, high) in INTENSITY_RANGES.items():
                if low <= headache.pain_level <= high:
                    counts[name] += 1
                    break
    return counts
