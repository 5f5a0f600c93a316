from __future__ import annotations

import pytest

from ace_dashboard.classifiers.college import OTHER_COLLEGE, classify_college
from ace_dashboard.classifiers.faculty import (
    ADJUNCT_TITLES,
    FULL_TIME_TITLES,
    rank_from_titles,
    teacher_rank,
    teacher_type,
)
from ace_dashboard.classifiers.identity import (
    classify_registrant,
    classify_staff,
    classify_student_identity,
    classify_total,
)
from ace_dashboard.classifiers.student import student_level


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("電機資訊學院", "電資學院"),
        ("醫學院附設醫院", "醫學院"),
        ("生物資源暨農學院", "生農學院"),
        ("公共衛生學院", "公衛學院"),
        ("共同教育中心", "共教學院"),
        ("生命科學院", "生科學院"),
        ("管理學院", "管理學院"),
        ("理學院", "理學院"),
        ("進修推廣部", "進修推廣學院"),
        ("重點科技研究學院", "重點科技學院"),
        ("Unknown School", OTHER_COLLEGE),
        ("", OTHER_COLLEGE),
        (None, OTHER_COLLEGE),
    ],
)
def test_classify_college(value: object, expected: str) -> None:
    assert classify_college(value) == expected


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("教授 Professor", "專任教師"),
        ("  講師 Lecturer ", "專任教師"),
        ("兼任講師 Adjunct Lecturer", "兼任教師"),
        ("專案教授 Project Professor", "專案教師"),
        ("臨床助理教授 Clinical Assistant Professor", "臨床教師"),
        ("名譽教授", None),
        ("", None),
        (None, None),
    ],
)
def test_teacher_type(title: object, expected: str | None) -> None:
    assert teacher_type(title) == expected


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("助理教授 Assistant Professor", "助理教授"),
        ("副教授 Associate Professor", "副教授"),
        ("Professor", "教授"),
        ("兼任助理教授 Adjunct Assistant Professor", "助理教授"),
        ("講師", "講師"),
        ("研究員", None),
        (None, None),
    ],
)
def test_teacher_rank_prefers_qualified_ranks(title: object, expected: str | None) -> None:
    assert teacher_rank(title) == expected


def test_rank_from_titles_is_exact_after_trimming() -> None:
    assert rank_from_titles(" 兼任副教授 Adjunct Associate Professor ", ADJUNCT_TITLES) == "副教授"
    assert rank_from_titles("兼任教授 Adjunct Professor", FULL_TIME_TITLES) is None
    assert rank_from_titles("", FULL_TIME_TITLES) is None


@pytest.mark.parametrize(
    ("identity", "level", "expected"),
    [
        ("學生", "學士班", "大學生"),
        ("學生", "碩士班", "研究生"),
        ("博士班", "", "博士生"),
        ("Undergraduate", None, "大學生"),
        ("交換生", "", None),
        ("", "", None),
    ],
)
def test_student_level(identity: object, level: object, expected: str | None) -> None:
    assert student_level(identity, level) == expected


def test_registrant_and_campus_identity() -> None:
    assert classify_registrant("教師") == "教師"
    assert classify_registrant("臺大學生") == "學生"
    assert classify_registrant("博士後研究員") == "研究員"
    assert classify_registrant("校外人士") == "其他"
    assert classify_registrant("") is None
    assert classify_registrant(None) is None

    assert classify_staff("專任教師") == "臺大教師"
    assert classify_staff("博士後研究員") == "研究員"
    assert classify_staff("職員") is None

    assert classify_student_identity("學生") == "臺大學生"
    assert classify_student_identity("教師") is None

    assert classify_total() == "總計"
    assert classify_total("anything", 1) == "總計"
