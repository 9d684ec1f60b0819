"""Medication categories and per-dose overuse warnings."""

from enum import Enum

OTC_CATEGORIES = frozenset({"NSAIDs", "Acetaminophen"})
MIGRAINE_CATEGORIES = frozenset({"Triptans", "Ergot Derivatives", "CGRP Antagonists"})
PREVENTIVE_CATEGORIES = frozenset({"Preventive - Daily", "CGRP Preventive", "Botox/Injections"})

ACTIVE_HEADACHE = "active-headache"


class MedicationClass(str, Enum):
    """How a medication category counts toward overuse tracking."""

    OTC = "otc"
    MIGRAINE = "migraine"
    PREVENTIVE = "preventive"
    OTHER = "other"


def classify_medication(category: str) -> MedicationClass:
    """Map a medication category name onto its tracking class."""
    if category in OTC_CATEGORIES:
        return MedicationClass.OTC
    if category in MIGRAINE_CATEGORIES:
        return MedicationClass.MIGRAINE
    if category in PREVENTIVE_CATEGORIES:
        return MedicationClass.PREVENTIVE
    return MedicationClass.OTHER


def check_medication_warnings(
    category: str,
    name: str,
    taken_for: str = "",
    effectiveness: int | None = None,
    side_effects: tuple[str, ...] = (),
) -> list[str]:
    """Return advisory messages for a single logged dose.

    Args:
        category: Medication category, e.g. "NSAIDs" or "Triptans".
        name: Medication name as logged.
        taken_for: Reason the dose was taken.
        effectiveness: Self-rated effectiveness from 0 to 10.
        side_effects: Reported side effects.

    Returns:
        Zero or more warning messages, in a stable order.
    """
    warnings: list[str] = []

    if category == "NSAIDs" and taken_for == ACTIVE_HEADACHE:
        warnings.append(
            "NSAIDs can cause medication overuse headaches if used more than "
            "15 days per month. Track your usage carefully."
        )

    if category == "Triptans" and taken_for == ACTIVE_HEADACHE:
        warnings.append(
            "Triptans can cause medication overuse headaches if used more than "
            "10 days per month. Monitor frequency of use."
        )

    lowered = name.lower()
    if "combination" in lowered or "caffeine" in lowered:
        warnings.append(
            "Combination medications with caffeine may increase risk of "
            "medication overuse headaches."
        )

    real_side_effects = [s for s in side_effects if s != "None"]
    if effectiveness is not None and effectiveness >= 8 and len(real_side_effects) > 2:
        warnings.append(
            "Consider discussing side effects with your healthcare provider, "
            "even if medication is effective."
        )

    return warnings
