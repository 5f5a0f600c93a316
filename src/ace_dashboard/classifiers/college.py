from __future__ import annotations

OTHER_COLLEGE = "其他"

COLLEGE_CATEGORIES: tuple[str, ...] = (
    "醫學院",
    "生農學院",
    "工學院",
    "文學院",
    "理學院",
    "公衛學院",
    "共教學院",
    "社科學院",
    "電資學院",
    "創新學院",
    "生科學院",
    "法學院",
    "管理學院",
    "國際學院",
    "重點科技學院",
    "進修推廣學院",
    OTHER_COLLEGE,
)

# First match wins. Within a college the full name precedes its abbreviation,
# and a keyword must come before any shorter keyword it contains
# (e.g. "共同教育" before "共同", "管理學院" before "理學院").
COLLEGE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("醫學", "醫學院"),
    ("生物資源", "生農學院"),
    ("農學", "生農學院"),
    ("生農", "生農學院"),
    ("工學院", "工學院"),
    ("文學院", "文學院"),
    ("管理學院", "管理學院"),
    ("理學院", "理學院"),
    ("公共衛生", "公衛學院"),
    ("公衛", "公衛學院"),
    ("共同教育", "共教學院"),
    ("共同", "共教學院"),
    ("社會科學", "社科學院"),
    ("社科", "社科學院"),
    ("電機資訊", "電資學院"),
    ("電資", "電資學院"),
    ("創新設計", "創新學院"),
    ("創新", "創新學院"),
    ("生命科學", "生科學院"),
    ("生科", "生科學院"),
    ("法學院", "法學院"),
    ("國際學院", "國際學院"),
    ("國際", "國際學院"),
    ("重點科技", "重點科技學院"),
    ("進修推廣", "進修推廣學院"),
    ("推廣", "進修推廣學院"),
)


def classify_college(value: object) -> str:
    if value is None or value == "":
        return OTHER_COLLEGE
    text = str(value)
    for keyword, college in COLLEGE_KEYWORDS:
        if keyword in text:
            return college
    return OTHER_COLLEGE
