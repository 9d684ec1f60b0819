"""Raw logged entries consumed by the aggregator."""

from dataclasses import dataclass, field
from datetime import date

from .medications import MedicationClass, check_medication_warnings, classify_medication

MIGRAINE_TYPE = "migraine"


@dataclass(frozen=True)
class HeadacheRecord:
    """Logged headache."""

    day: date
    pain_level: int = 0
    duration_min: int = 0
    headache_type: str = ""
    location: str = ""

    @property
    def is_migraine(self) -> bool:
        return self.headache_type == MIGRAINE_TYPE


@dataclass(frozen=True)
class MedicationRecord:
    """Logged medication dose."""

    day: date
    category: str = ""
    name: str = ""
    taken_for: str = ""
    effectiveness: int | None = None
    side_effects: tuple[str, ...] = ()

    @property
    def medication_class(self) -> MedicationClass:
        return classify_medication(self.category)

    @property
    def warnings(self) -> list[str]:
        """Overuse and side-effect advisories for this dose."""
        return check_medication_warnings(
            self.category,
            self.name,
            taken_for=self.taken_for,
            effectiveness=self.effectiveness,
            side_effects=self.side_effects,
        )


@dataclass(frozen=True)
class SleepRecord:
    """Logged night of sleep, attributed to the wake-up day."""

    day: date
    hours_slept: float
    sleep_quality: int | None = None


@dataclass(frozen=True)
class StressRecord:
    """Logged stress check-in."""

    day: date
    stress_level: int


@dataclass
class HealthRecords:
    """All raw entries for one user."""

    headaches: list[HeadacheRecord] = field(default_factory=list)
    medications: list[MedicationRecord] = field(default_factory=list)
    sleep: list[SleepRecord] = field(default_factory=list)
    stress: list[StressRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.headaches) + len(self.medications) + len(self.sleep) + len(self.stress)
