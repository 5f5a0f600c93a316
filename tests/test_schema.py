from __future__ import annotations

import pytest

from ace_dashboard.errors import DataSourceError, TableSchemaError
from ace_dashboard.io.schema import build_table, resolve_fields


def test_build_table_pads_and_truncates_rows() -> None:
    table = build_table("t", ["a", "b", "c"], [["1"], ["1", "2", "3", "4"]])

    assert table.frame.values.tolist() == [["1", "", ""], ["1", "2", "3"]]
    assert table.column_at(2).tolist() == ["", "3"]


def test_resolve_fields_by_position_and_label() -> None:
    table = build_table("t", ["日期", "身分", "日期"], [])

    positions = resolve_fields(table, {"identity": "身分", "date": 2, "college": 9}, ("identity", "date"))

    assert positions == {"identity": 1, "date": 2}


def test_resolve_fields_reports_missing_columns() -> None:
    table = build_table("t", ["身分"], [])

    with pytest.raises(TableSchemaError, match="date"):
        resolve_fields(table, {"identity": 0, "date": 24})
    with pytest.raises(TableSchemaError):
        resolve_fields(table, {"identity": "學院"})
    with pytest.raises(DataSourceError):
        resolve_fields(table, {"identity": 0}, ("level",))
