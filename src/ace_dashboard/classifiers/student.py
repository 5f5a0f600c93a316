from __future__ import annotations

UNDERGRADUATE = "大學生"
GRADUATE = "研究生"
DOCTORAL = "博士生"
STUDENT_LEVELS: tuple[str, ...] = (UNDERGRADUATE, GRADUATE, DOCTORAL)

# Highest degree first: "博士研究生" must not fall through to the graduate bucket.
LEVEL_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("博士", "PhD", "Doctoral"), DOCTORAL),
    (("碩士", "研究", "Master", "Graduate"), GRADUATE),
    (("大學", "學士", "Undergraduate", "Bachelor", "學生"), UNDERGRADUATE),
)


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    return str(value)


def student_level(identity: object, level: object) -> str | None:
    text = _text(identity) + _text(level)
    for keywords, label in LEVEL_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return label
    return None
