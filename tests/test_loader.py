"""Tests for loading journal exports."""

import json
from datetime import date

import pytest

from headache_insights.errors import HeadacheInsightsError, RecordLoadError
from headache_insights.loader import load_records, parse_records


class TestParseRecords:
    """Tests for payload conversion."""

    def test_sample(self, sample_records):
        assert len(sample_records.headaches) == 4
        assert len(sample_records.medications) == 6
        assert len(sample_records.sleep) == 3
        assert len(sample_records.stress) == 3
        assert len(sample_records) == 16

    def test_headache_fields(self, sample_records):
        first = sample_records.headaches[0]

        assert first.day == date(2024, 1, 20)
        assert first.pain_level == 6
        assert first.duration_min == 240
        assert first.is_migraine
        assert not sample_records.headaches[1].is_migraine

    def test_medication_fields(self, sample_records):
        triptan = sample_records.medications[0]

        assert triptan.category == "Triptans"
        assert triptan.name == "Sumatriptan (Imitrex)"
        assert triptan.taken_for == "active-headache"
        assert triptan.effectiveness == 8
        assert triptan.side_effects == ("Nausea",)

        bare = sample_records.medications[3]
        assert bare.taken_for == ""
        assert bare.effectiveness is None
        assert bare.side_effects == ()

    def test_sleep_quality_optional(self):
        records = parse_records({"sleep": [{"date": "2024-01-20", "hours_slept": 7}]})

        assert records.sleep[0].hours_slept == 7.0
        assert records.sleep[0].sleep_quality is None

    def test_missing_sections_are_empty(self):
        records = parse_records({"headaches": [{"date": "2024-01-20", "pain_level": 3}]})

        assert len(records.headaches) == 1
        assert records.medications == []
        assert records.sleep == []
        assert records.stress == []

    def test_invalid_entries_skipped(self):
        records = parse_records(
            {
                "stress": [
                    {"date": "2024-01-20", "stress_level": 4},
                    {"date": "2024-01-20", "stress_level": 40},
                    "junk",
                ]
            }
        )
        assert [r.stress_level for r in records.stress] == [4]

    @pytest.mark.parametrize(
        "entry",
        [
            {"date": "2024-01-20", "type": "migraine"},
            {"date": "2024-01-20", "type": "migraine", "pain_level": None},
        ],
    )
    def test_headache_without_pain_level_counts_as_zero(self, entry):
        """A headache logged without a pain score is kept with pain 0."""
        records = parse_records({"headaches": [entry]})

        assert len(records.headaches) == 1
        assert records.headaches[0].pain_level == 0
        assert records.headaches[0].is_migraine

    def test_datetime_strings_become_days(self):
        records = parse_records(
            {"headaches": [{"date": "2024-01-20T23:15:00", "pain_level": 3}]}
        )
        assert records.headaches[0].day == date(2024, 1, 20)

    def test_top_level_must_be_object(self):
        with pytest.raises(RecordLoadError, match="JSON object"):
            parse_records([{"date": "2024-01-20"}])

    def test_section_must_be_list(self):
        with pytest.raises(RecordLoadError, match="'sleep' must be a list"):
            parse_records({"sleep": {"date": "2024-01-20"}})


class TestLoadRecords:
    """Tests for reading export files."""

    def test_load_file(self, tmp_path, sample_export):
        path = tmp_path / "entries.json"
        path.write_text(json.dumps(sample_export))

        records = load_records(path)

        assert len(records) == 16

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text("{}")

        assert len(load_records(str(path))) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Entry export not found"):
            load_records(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text("{not json")

        with pytest.raises(RecordLoadError, match="Invalid JSON"):
            load_records(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_bytes(
            b'{"headaches": [{"date": "2024-01-20", "pain_level": 3, "location": "\xff"}]}'
        )

        with pytest.raises(RecordLoadError, match="not valid UTF-8"):
            load_records(path)

    def test_utf8_text_is_read_regardless_of_locale(self, tmp_path):
        location = "Stirn \u00fcber Auge"
        export = {"headaches": [{"date": "2024-01-20", "pain_level": 3, "location": location}]}
        path = tmp_path / "entries.json"
        path.write_text(json.dumps(export, ensure_ascii=False), encoding="utf-8")

        assert load_records(path).headaches[0].location == location

    def test_load_error_is_package_error(self):
        assert issubclass(RecordLoadError, HeadacheInsightsError)
