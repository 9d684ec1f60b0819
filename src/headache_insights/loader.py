"""Loading journal entries from a JSON export."""

import json
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
import structlog

from .errors import RecordLoadError
from .records import HealthRecords, HeadacheRecord, MedicationRecord, SleepRecord, StressRecord
from .schema_validation import SCHEMAS, get_record_validator

logger = structlog.get_logger(__name__)


def _parse_day(value: Any) -> date:
    return pd.Timestamp(value).date()


def _optional_int(value: Any) -> int | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return int(float(value))


def _headache(item: dict[str, Any]) -> HeadacheRecord:
    return HeadacheRecord(
        day=_parse_day(item["date"]),
        pain_level=_optional_int(item.get("pain_level")) or 0,
        duration_min=_optional_int(item.get("duration_min")) or 0,
        headache_type=str(item.get("type") or ""),
        location=str(item.get("location") or ""),
    )


def _medication(item: dict[str, Any]) -> MedicationRecord:
    side_effects = item.get("side_effects") or ()
    if isinstance(side_effects, str):
        side_effects = (side_effects,)
    return MedicationRecord(
        day=_parse_day(item["date"]),
        category=str(item["medication_type"]),
        name=str(item.get("medication_name") or ""),
        taken_for=str(item.get("taken_for") or ""),
        effectiveness=_optional_int(item.get("effectiveness")),
        side_effects=tuple(str(s) for s in side_effects),
    )


def _sleep(item: dict[str, Any]) -> SleepRecord:
    return SleepRecord(
        day=_parse_day(item["date"]),
        hours_slept=float(item["hours_slept"]),
        sleep_quality=_optional_int(item.get("sleep_quality")),
    )


def _stress(item: dict[str, Any]) -> StressRecord:
    return StressRecord(day=_parse_day(item["date"]), stress_level=int(float(item["stress_level"])))


_BUILDERS = {
    "headaches": _headache,
    "medications": _medication,
    "sleep": _sleep,
    "stress": _stress,
}


def parse_records(data: Any) -> HealthRecords:
    """Validate an export payload and convert it into records.

    Invalid entries are skipped and logged; structural problems with the
    payload itself raise RecordLoadError.
    """
    if not isinstance(data, dict):
        raise RecordLoadError(f"Export must be a JSON object, got {type(data).__name__}")

    validator = get_record_validator()
    records = HealthRecords()

    for kind in SCHEMAS:
        items = data.get(kind, [])
        if not isinstance(items, list):
            raise RecordLoadError(f"'{kind}' must be a list, got {type(items).__name__}")

        valid, failures = validator.validate_items(kind, items)
        if failures:
            logger.warning(
                "records_skipped",
                kind=kind,
                skipped=len(failures),
                errors=[(f.error.splitlines() or [""])[0] for f in failures[:5]],
            )

        target = getattr(records, kind)
        builder = _BUILDERS[kind]
        target.extend(builder(item) for item in valid)

    logger.info(
        "records_loaded",
        headaches=len(records.headaches),
        medications=len(records.medications),
        sleep=len(records.sleep),
        stress=len(records.stress),
    )
    return records


def load_records(path: str | Path) -> HealthRecords:
    """Load health records from a JSON export file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Entry export not found: {path}") from None
    except json.JSONDecodeError as e:
        raise RecordLoadError(f"Invalid JSON in entry export: {e}") from e
    except UnicodeDecodeError as e:
        raise RecordLoadError(f"Entry export is not valid UTF-8: {e}") from e

    return parse_records(data)
