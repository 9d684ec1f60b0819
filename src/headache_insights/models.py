"""Data models for headache statistics, MOH risk and insight cards."""

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Literal, TypeAlias

from .types import JSONObject


def has_data(value: float | None) -> bool:
    """Return True when an average carries a real sample.

    ``None`` is the explicit "no data" value. ``0`` is accepted as the same
    sentinel because upstream exports report missing averages that way.
    """
    return value is not None and value > 0


@dataclass(frozen=True)
class HeadacheEvent:
    """Single logged headache."""

    pain_level: int = 0
    duration_min: int = 0
    is_migraine: bool = False


@dataclass(frozen=True)
class MedicationEvent:
    """Single logged medication dose."""

    name: str = ""
    category: str = ""


@dataclass(frozen=True)
class DayEntry:
    """One calendar day's headaches and medications."""

    day: date
    headaches: tuple[HeadacheEvent, ...] = ()
    medications: tuple[MedicationEvent, ...] = ()

    @property
    def has_headache(self) -> bool:
        return len(self.headaches) > 0

    @property
    def has_medication(self) -> bool:
        return len(self.medications) > 0

    @property
    def avg_pain_level(self) -> float | None:
        """Average pain over the day's headaches, None without headaches."""
        if not self.headaches:
            return None
        return sum(h.pain_level or 0 for h in self.headaches) / len(self.headaches)

    def to_dict(self) -> JSONObject:
        return {
            "date": self.day.isoformat(),
            "headaches": [asdict(h) for h in self.headaches],
            "medications": [asdict(m) for m in self.medications],
        }


# Keyed by local calendar day. A missing key means nothing was logged.
CalendarMap: TypeAlias = dict[date, DayEntry]


@dataclass(frozen=True)
class WeeklyStats:
    """Aggregates over the trailing seven days."""

    total_headaches: int = 0
    avg_sleep_hours: float | None = None
    avg_sleep_quality: float | None = None
    avg_stress_level: float | None = None

    def to_dict(self) -> JSONObject:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyStats:
    """Distinct-day counts over the current calendar month."""

    days_with_headaches: int = 0
    days_with_otc: int = 0
    days_with_migraine_meds: int = 0

    @property
    def medication_days(self) -> int:
        """OTC days plus migraine-medication days.

        A day with both kinds of medication is counted twice.
        """
        return self.days_with_otc + self.days_with_migraine_meds

    def to_dict(self) -> JSONObject:
        return {**asdict(self), "medication_days": self.medication_days}


@dataclass(frozen=True)
class MigraineStats:
    """Migraine versus regular headache counts for the current month."""

    total_migraines: int = 0
    total_regular_headaches: int = 0
    days_with_migraines: int = 0
    avg_migraine_pain_level: float | None = None
    avg_regular_pain_level: float | None = None

    def to_dict(self) -> JSONObject:
        return asdict(self)


class RiskLevel(str, Enum):
    """Medication-overuse headache risk classification."""

    NONE = "none"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class WarningType(str, Enum):
    """Severity of a single MOH warning."""

    CRITICAL = "critical"
    WARNING = "warning"
    CAUTION = "caution"


@dataclass(frozen=True)
class MohWarning:
    """Warning emitted by the MOH classifier."""

    type: WarningType
    message: str
    action: str

    def to_dict(self) -> JSONObject:
        return {"type": self.type.value, "message": self.message, "action": self.action}


@dataclass(frozen=True)
class RiskAssessment:
    """Result of the medication-overuse risk classification."""

    level: RiskLevel
    consecutive_days: int
    monthly_days: int
    warnings: tuple[MohWarning, ...] = ()

    def to_dict(self) -> JSONObject:
        return {
            "level": self.level.value,
            "consecutive_days": self.consecutive_days,
            "monthly_days": self.monthly_days,
            "warnings": [w.to_dict() for w in self.warnings],
        }


class DataType(str, Enum):
    """Trackable data types checked for completeness."""

    SLEEP = "sleep"
    STRESS = "stress"
    MEDICATIONS = "medications"


@dataclass(frozen=True)
class CompletenessReport:
    """Which data types are missing from the current window."""

    missing: frozenset[DataType] = frozenset()

    @property
    def is_complete(self) -> bool:
        return not self.missing


class CardSeverity(str, Enum):
    """Display severity of an insight card."""

    CRITICAL = "critical"
    WARNING = "warning"
    CAUTION = "caution"
    INFO = "info"
    SUCCESS = "success"


def _card_dict_factory(items: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in items:
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (frozenset, tuple)):
            value = sorted(v.value if isinstance(v, Enum) else v for v in value)
        result[key] = value
    return result


class _Card:
    """Serialization shared by all insight card variants."""

    def to_dict(self) -> JSONObject:
        return asdict(self, dict_factory=_card_dict_factory)  # type: ignore[call-overload]


@dataclass(frozen=True)
class MohWarningCard(_Card):
    """Medication-overuse warning surfaced as an insight."""

    severity: CardSeverity
    message: str
    action: str
    risk_level: RiskLevel
    kind: Literal["moh_warning"] = field(default="moh_warning", init=False)


@dataclass(frozen=True)
class MigrainePatternCard(_Card):
    """Migraine versus regular headache observation."""

    message: str
    total_migraines: int
    total_regular_headaches: int
    migraines_more_severe: bool = False
    severity: CardSeverity = CardSeverity.INFO
    action: str | None = None
    kind: Literal["migraine_pattern"] = field(default="migraine_pattern", init=False)


@dataclass(frozen=True)
class NoHeadachesCard(_Card):
    """Positive card for a headache-free week."""

    message: str
    severity: CardSeverity = CardSeverity.SUCCESS
    action: str | None = None
    kind: Literal["no_headaches"] = field(default="no_headaches", init=False)


@dataclass(frozen=True)
class WeeklySummaryCard(_Card):
    """Weekly headache count with optional sleep and stress clauses."""

    message: str
    total_headaches: int
    poor_sleep_quality: bool = False
    high_stress: bool = False
    severity: CardSeverity = CardSeverity.INFO
    action: str | None = None
    kind: Literal["weekly_summary"] = field(default="weekly_summary", init=False)


@dataclass(frozen=True)
class DataCompletenessCard(_Card):
    """Prompt to log the data types that are missing."""

    message: str
    missing: frozenset[DataType]
    severity: CardSeverity = CardSeverity.INFO
    action: str | None = None
    kind: Literal["data_completeness"] = field(default="data_completeness", init=False)


@dataclass(frozen=True)
class SleepRecommendationCard(_Card):
    """Short-sleep recommendation."""

    message: str
    avg_sleep_hours: float
    action: str
    severity: CardSeverity = CardSeverity.CAUTION
    kind: Literal["sleep_recommendation"] = field(default="sleep_recommendation", init=False)


@dataclass(frozen=True)
class StressRecommendationCard(_Card):
    """Elevated-stress recommendation."""

    message: str
    avg_stress_level: float
    action: str
    severity: CardSeverity = CardSeverity.CAUTION
    kind: Literal["stress_recommendation"] = field(default="stress_recommendation", init=False)


ReinforcementVariant: TypeAlias = Literal["excellent", "focus", "keep_tracking"]


@dataclass(frozen=True)
class ReinforcementCard(_Card):
    """Closing positive-reinforcement card."""

    message: str
    variant: ReinforcementVariant
    medication_usage_healthy: bool = False
    severity: CardSeverity = CardSeverity.SUCCESS
    action: str | None = None
    kind: Literal["reinforcement"] = field(default="reinforcement", init=False)


InsightCard: TypeAlias = (
    MohWarningCard
    | MigrainePatternCard
    | NoHeadachesCard
    | WeeklySummaryCard
    | DataCompletenessCard
    | SleepRecommendationCard
    | StressRecommendationCard
    | ReinforcementCard
)
