from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from ace_dashboard.errors import DataSourceError
from ace_dashboard.io.schema import Table, build_table

IDENTITY_SHEET = "身分數據"
STAFF_SHEET = "臺大教職員工數據庫"
STUDENT_SHEET = "臺大學生數據"
TEACHER_SHEET = "臺大教師數據"


def make_table(name: str, width: int, rows: list[dict[int, object]]) -> Table:
    headers = [f"col{index}" for index in range(width)]
    return build_table(name, headers, [[cells.get(index, "") for index in range(width)] for cells in rows])


class FakeTableProvider:
    def __init__(self, tables: dict[str, Table], failing: tuple[str, ...] = ()) -> None:
        self.tables = tables
        self.failing = set(failing)
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch_table(self, name: str) -> Table:
        with self._lock:
            self.calls.append(name)
        if name in self.failing:
            raise DataSourceError(f"sheet {name} unavailable")
        return self.tables[name]


@pytest.fixture
def roster_tables() -> dict[str, Table]:
    identity = make_table(
        IDENTITY_SHEET,
        25,
        [
            {0: "教師", 24: "Date(2023,7,15)"},
            {0: "臺大學生", 24: "2023-08-20"},
            {0: "博士後研究員", 24: 45184},
            {0: "校外人士", 24: "Date(2023,8,3)"},
            {0: "", 24: "Date(2023,8,4)"},
            {0: "教師", 24: "Date(2019,8,1)"},
            {0: "教師", 24: "not a date"},
        ],
    )
    staff = make_table(
        STAFF_SHEET,
        18,
        [
            {4: "專任教師", 17: "2023-08-09"},
            {4: "博士後研究員", 17: "2023-09-01"},
            {4: "行政人員", 17: "2023-09-01"},
        ],
    )
    student = make_table(
        STUDENT_SHEET,
        13,
        [
            {1: "學生", 2: "學士班", 7: "電機資訊學院", 12: "2023-08-02"},
            {1: "學生", 2: "碩士班", 7: "理學院", 12: "Date(2023,8,9)"},
            {1: "學生", 2: "博士班", 7: "醫學院", 12: "2023-09-30"},
            {1: "交換生", 2: "", 7: "", 12: "2023-08-15"},
        ],
    )
    teacher = make_table(
        TEACHER_SHEET,
        13,
        [
            {4: "電機資訊學院", 6: "教授 Professor", 12: "Date(2023,7,1)"},
            {4: "醫學院", 6: "臨床助理教授 Clinical Assistant Professor", 12: "2023-09-10"},
            {4: "管理學院", 6: "專案副教授 Project Associate Professor", 12: "2023-09-11"},
            {4: "", 6: "兼任講師 Adjunct Lecturer", 12: "2023-08-05"},
            {4: "文學院", 6: "助理教授 Assistant Professor", 12: "2021-01-01"},
        ],
    )
    return {
        "identity": identity,
        "staff": staff,
        "student": student,
        "teacher": teacher,
    }


@pytest.fixture
def fake_provider(roster_tables: dict[str, Table]) -> Callable[..., FakeTableProvider]:
    def _build(failing: tuple[str, ...] = ()) -> FakeTableProvider:
        return FakeTableProvider(
            {table.name: table for table in roster_tables.values()},
            failing=failing,
        )

    return _build


@pytest.fixture
def table_factory() -> Callable[[str, int, list[dict[int, object]]], Table]:
    return make_table


@pytest.fixture
def provider_class() -> type[FakeTableProvider]:
    return FakeTableProvider
