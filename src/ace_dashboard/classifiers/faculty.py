"""Teacher employment type and academic rank heuristics.

Job titles arrive as bilingual strings such as ``"助理教授 Assistant Professor"``.
"""

from __future__ import annotations

FULL_TIME = "專任教師"
ADJUNCT = "兼任教師"
PROJECT = "專案教師"
CLINICAL = "臨床教師"
TEACHER_TYPES: tuple[str, ...] = (FULL_TIME, ADJUNCT, PROJECT, CLINICAL)

PROFESSOR = "教授"
ASSOCIATE_PROFESSOR = "副教授"
ASSISTANT_PROFESSOR = "助理教授"
LECTURER = "講師"
TEACHER_RANKS: tuple[str, ...] = (PROFESSOR, ASSOCIATE_PROFESSOR, ASSISTANT_PROFESSOR, LECTURER)

# Checked in order; the employment qualifier decides the type before the rank does.
TYPE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("臨床", "Clinical"), CLINICAL),
    (("專案", "Project"), PROJECT),
    (("兼任", "Adjunct"), ADJUNCT),
)

# "教授"/"Professor" is a substring of both assistant and associate titles,
# so the qualified ranks must be tested first.
RANK_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("助理教授", "Assistant Professor"), ASSISTANT_PROFESSOR),
    (("副教授", "Associate Professor"), ASSOCIATE_PROFESSOR),
    (("教授", "Professor"), PROFESSOR),
    (("講師", "Lecturer"), LECTURER),
)

FULL_TIME_TITLES: dict[str, str] = {
    "教授 Professor": PROFESSOR,
    "副教授 Associate Professor": ASSOCIATE_PROFESSOR,
    "助理教授 Assistant Professor": ASSISTANT_PROFESSOR,
    "講師 Lecturer": LECTURER,
}
ADJUNCT_TITLES: dict[str, str] = {
    "兼任教授 Adjunct Professor": PROFESSOR,
    "兼任副教授 Adjunct Associate Professor": ASSOCIATE_PROFESSOR,
    "兼任助理教授 Adjunct Assistant Professor": ASSISTANT_PROFESSOR,
    "兼任講師 Adjunct Lecturer": LECTURER,
}
CLINICAL_TITLES: dict[str, str] = {
    "臨床教授 Clinical Professor": PROFESSOR,
    "臨床副教授 Clinical Associate Professor": ASSOCIATE_PROFESSOR,
    "臨床助理教授 Clinical Assistant Professor": ASSISTANT_PROFESSOR,
    "臨床講師 Clinical Lecturer": LECTURER,
}
PROJECT_KEYWORDS: tuple[str, ...] = ("專案", "Project")


def _match_keywords(text: str, table: tuple[tuple[tuple[str, ...], str], ...]) -> str | None:
    for keywords, label in table:
        if any(keyword in text for keyword in keywords):
            return label
    return None


def teacher_type(job_title: object) -> str | None:
    if job_title is None or job_title == "":
        return None
    text = str(job_title)
    matched = _match_keywords(text, TYPE_KEYWORDS)
    if matched:
        return matched
    if text.strip() in FULL_TIME_TITLES:
        return FULL_TIME
    return None


def teacher_rank(job_title: object) -> str | None:
    if job_title is None or job_title == "":
        return None
    return _match_keywords(str(job_title), RANK_KEYWORDS)


def rank_from_titles(job_title: object, titles: dict[str, str]) -> str | None:
    """Exact lookup of a trimmed job title in one of the ``*_TITLES`` tables."""
    if job_title is None or job_title == "":
        return None
    return titles.get(str(job_title).strip())
