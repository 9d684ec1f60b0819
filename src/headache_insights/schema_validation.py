"""Schema validation for exported journal entries using Pandera."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd
import pandera as pa

_HEADACHE_SCHEMA = pa.DataFrameSchema(
    {
        "date": pa.Column(pa.DateTime, nullable=False, coerce=True),
        "pain_level": pa.Column(
            float, pa.Check.in_range(0, 10), nullable=True, required=False, coerce=True
        ),
        "duration_min": pa.Column(
            float, pa.Check.ge(0), nullable=True, required=False, coerce=True
        ),
        "type": pa.Column(str, nullable=True, required=False, coerce=True),
        "location": pa.Column(str, nullable=True, required=False, coerce=True),
    },
    coerce=True,
    strict=False,
)

_MEDICATION_SCHEMA = pa.DataFrameSchema(
    {
        "date": pa.Column(pa.DateTime, nullable=False, coerce=True),
        "medication_type": pa.Column(str, nullable=False, coerce=True),
        "medication_name": pa.Column(str, nullable=True, required=False, coerce=True),
        "taken_for": pa.Column(str, nullable=True, required=False, coerce=True),
        "effectiveness": pa.Column(
            float, pa.Check.in_range(0, 10), nullable=True, required=False, coerce=True
        ),
    },
    coerce=True,
    strict=False,
)

_SLEEP_SCHEMA = pa.DataFrameSchema(
    {
        "date": pa.Column(pa.DateTime, nullable=False, coerce=True),
        "hours_slept": pa.Column(float, pa.Check.in_range(0, 24), nullable=False, coerce=True),
        "sleep_quality": pa.Column(
            float, pa.Check.in_range(0, 10), nullable=True, required=False, coerce=True
        ),
    },
    coerce=True,
    strict=False,
)

_STRESS_SCHEMA = pa.DataFrameSchema(
    {
        "date": pa.Column(pa.DateTime, nullable=False, coerce=True),
        "stress_level": pa.Column(int, pa.Check.in_range(0, 10), nullable=False, coerce=True),
    },
    coerce=True,
    strict=False,
)

SCHEMAS: dict[str, pa.DataFrameSchema] = {
    "headaches": _HEADACHE_SCHEMA,
    "medications": _MEDICATION_SCHEMA,
    "sleep": _SLEEP_SCHEMA,
    "stress": _STRESS_SCHEMA,
}


@dataclass(frozen=True)
class ValidationFailure:
    """Represents a schema validation failure for a journal entry."""

    item: dict[str, Any]
    schema: str
    error: str


class RecordSchemaValidator:
    """Validate exported entries before they are turned into records."""

    def validate_items(
        self, kind: str, items: list[Any]
    ) -> tuple[list[dict[str, Any]], list[ValidationFailure]]:
        """Validate items and separate valid from invalid entries.

        Args:
            kind: Section name, one of ``SCHEMAS``.
            items: Raw entry dictionaries from that section.

        Returns:
            Tuple of (valid_items, failures).
        """
        schema = SCHEMAS[kind]
        valid: list[dict[str, Any]] = []
        failures: list[ValidationFailure] = []

        for item in items:
            if not isinstance(item, dict):
                failures.append(
                    ValidationFailure(
                        item={"value": item},
                        schema=kind,
                        error="entry is not a dictionary",
                    )
                )
                continue

            try:
                schema.validate(pd.DataFrame([item]), lazy=True)
            except (pa.errors.SchemaError, pa.errors.SchemaErrors) as exc:
                failures.append(ValidationFailure(item=item, schema=kind, error=str(exc)))
                continue

            valid.append(item)

        return valid, failures


_validator: RecordSchemaValidator | None = None


def get_record_validator() -> RecordSchemaValidator:
    """Get a singleton schema validator."""
    global _validator
    if _validator is None:
        _validator = RecordSchemaValidator()
    return _validator
