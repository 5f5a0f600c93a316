"""Registrant identity buckets for the enrollment overview charts."""

from __future__ import annotations

REGISTRANT_TEACHER = "教師"
REGISTRANT_STUDENT = "學生"
REGISTRANT_RESEARCHER = "研究員"
REGISTRANT_OTHER = "其他"
REGISTRANT_CATEGORIES: tuple[str, ...] = (
    REGISTRANT_TEACHER,
    REGISTRANT_STUDENT,
    REGISTRANT_RESEARCHER,
    REGISTRANT_OTHER,
)

CAMPUS_TEACHER = "臺大教師"
CAMPUS_STUDENT = "臺大學生"
CAMPUS_RESEARCHER = "研究員"
CAMPUS_CATEGORIES: tuple[str, ...] = (CAMPUS_TEACHER, CAMPUS_STUDENT, CAMPUS_RESEARCHER)

TOTAL = "總計"


def _present(value: object) -> bool:
    if value is None or value == "" or value is False or value == 0:
        return False
    return not (isinstance(value, float) and value != value)


def classify_registrant(identity: object) -> str | None:
    if not _present(identity):
        return None
    text = str(identity)
    for keyword in (REGISTRANT_TEACHER, REGISTRANT_STUDENT, REGISTRANT_RESEARCHER):
        if keyword in text:
            return keyword
    return REGISTRANT_OTHER


def classify_staff(identity: object) -> str | None:
    if not _present(identity):
        return None
    text = str(identity)
    if "教師" in text:
        return CAMPUS_TEACHER
    if "研究員" in text:
        return CAMPUS_RESEARCHER
    return None


def classify_student_identity(identity: object) -> str | None:
    if _present(identity) and "學生" in str(identity):
        return CAMPUS_STUDENT
    return None


def classify_total(*_values: object) -> str:
    return TOTAL
