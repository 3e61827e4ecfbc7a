"""Tests for fauxchart.data.loader and fauxchart.schema."""
import pandas as pd
import pytest
from pydantic import ValidationError

from fauxchart.data.loader import ReferenceTableLoader, bundled_reference_path, load_reference_table
from fauxchart.errors import ReferenceDataError
from fauxchart.schema.base import REFERENCE_COLUMNS, ConditionGroup, ReferenceRow


def _write_table(path, records):
    pd.DataFrame(records).to_csv(path, index=False)
    return path


def _record(**overrides):
    record = {
        "column_appearing_in": "MAIN_CONDITION",
        "average_month_appearing": 1200.5,
        "standard_deviation_month_appearing": 30.0,
        "count_appearances": 10,
        "test_code": "I10",
    }
    record.update(overrides)
    return record


class TestReferenceRow:
    def test_valid(self):
        row = ReferenceRow(code="I10", group="OTHER_CONDITION_2", mean_bucket=1.0, spread_bucket=0.0, weight=0)
        assert row.group is ConditionGroup.OTHER_CONDITION_2
        assert row.weight == 0

    def test_negative_weight(self):
        with pytest.raises(ValidationError):
            ReferenceRow(code="I10", group="MAIN_CONDITION", mean_bucket=1.0, spread_bucket=0.0, weight=-1)

    def test_negative_spread(self):
        with pytest.raises(ValidationError):
            ReferenceRow(code="I10", group="MAIN_CONDITION", mean_bucket=1.0, spread_bucket=-0.5, weight=1)

    def test_unknown_group(self):
        with pytest.raises(ValidationError):
            ReferenceRow(code="I10", group="OTHER_CONDITION_9", mean_bucket=1.0, spread_bucket=0.0, weight=1)

    def test_frozen(self):
        row = ReferenceRow(code="I10", group="MAIN_CONDITION", mean_bucket=1.0, spread_bucket=0.0, weight=1)
        with pytest.raises(ValidationError):
            row.weight = 5


class TestReferenceTableLoader:
    def test_bundled_table(self):
        rows = load_reference_table()
        assert bundled_reference_path().exists()
        assert len(rows) > 0
        assert {row.group for row in rows} == set(ConditionGroup)

    def test_load_custom_table(self, tmp_path):
        path = _write_table(tmp_path / "ref.csv", [
            _record(),
            _record(column_appearing_in="OTHER_CONDITION_1", test_code="E11.9", count_appearances=0),
        ])
        rows = ReferenceTableLoader().load(path)
        assert [r.code for r in rows] == ["I10", "E11.9"]
        assert rows[0].mean_bucket == 1200.5
        assert rows[1].weight == 0
        assert rows[1].group is ConditionGroup.OTHER_CONDITION_1

    def test_codes_kept_as_text(self, tmp_path):
        path = _write_table(tmp_path / "ref.csv", [_record(test_code="0010")])
        assert load_reference_table(path)[0].code == "0010"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_reference_table(tmp_path / "nope.csv")

    def test_missing_column(self, tmp_path):
        record = _record()
        del record["count_appearances"]
        path = _write_table(tmp_path / "ref.csv", [record])
        with pytest.raises(ReferenceDataError, match="count_appearances"):
            load_reference_table(path)

    def test_negative_weight(self, tmp_path):
        path = _write_table(tmp_path / "ref.csv", [_record(), _record(count_appearances=-3)])
        with pytest.raises(ReferenceDataError, match="row 1"):
            load_reference_table(path)

    def test_blank_value(self, tmp_path):
        path = _write_table(tmp_path / "ref.csv", [_record(standard_deviation_month_appearing=None)])
        with pytest.raises(ReferenceDataError, match="empty"):
            load_reference_table(path)

    def test_invalid_group(self, tmp_path):
        path = _write_table(tmp_path / "ref.csv", [_record(column_appearing_in="SIDE_CONDITION")])
        with pytest.raises(ReferenceDataError):
            load_reference_table(path)

    def test_rows_from_frame(self):
        df = pd.DataFrame([_record()])
        rows = ReferenceTableLoader().rows_from_frame(df)
        assert rows[0].code == "I10"

    def test_rows_from_frame_missing_columns(self):
        df = pd.DataFrame([_record()]).drop(columns=[REFERENCE_COLUMNS["code"]])
        with pytest.raises(ReferenceDataError):
            ReferenceTableLoader().rows_from_frame(df)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "ref.csv"
        path.write_text("")
        with pytest.raises(ReferenceDataError, match="Cannot parse"):
            load_reference_table(path)

    def test_malformed_csv(self, tmp_path):
        path = tmp_path / "ref.csv"
        path.write_text(
            ",".join(REFERENCE_COLUMNS.values()) + "\n"
            "MAIN_CONDITION,1200,30,10,I10,extra,fields,here\n"
        )
        with pytest.raises(ReferenceDataError, match="Cannot parse"):
            load_reference_table(path)
