from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from ace_dashboard.charts.base import SourceRule
from ace_dashboard.charts.generators import (
    ChartConfig,
    ConfiguredChartGenerator,
    college_config,
    rank_config,
)
from ace_dashboard.classifiers.faculty import (
    ADJUNCT_TITLES,
    CLINICAL_TITLES,
    FULL_TIME_TITLES,
    PROJECT_KEYWORDS,
    TEACHER_TYPES,
    teacher_type,
)
from ace_dashboard.classifiers.identity import (
    CAMPUS_CATEGORIES,
    REGISTRANT_CATEGORIES,
    TOTAL,
    classify_registrant,
    classify_staff,
    classify_student_identity,
    classify_total,
)
from ace_dashboard.classifiers.student import STUDENT_LEVELS, student_level
from ace_dashboard.config import (
    IDENTITY_TABLE,
    STAFF_TABLE,
    STUDENT_TABLE,
    TEACHER_TABLE,
    TablesConfig,
)
from ace_dashboard.errors import InvalidChartId
from ace_dashboard.validation import is_valid_chart_id


class ChartKind(str, Enum):
    CHART0 = "chart0"
    CHART1 = "chart1"
    CHART2 = "chart2"
    CHART3 = "chart3"
    CHART4 = "chart4"
    CHART5 = "chart5"
    CHART6 = "chart6"
    CHART7 = "chart7"
    CHART8 = "chart8"
    CHART9 = "chart9"
    CHART10 = "chart10"
    CHART11 = "chart11"


CHART_CONFIGS: dict[ChartKind, ChartConfig] = {
    ChartKind.CHART0: ChartConfig(
        title="總報名人數",
        cumulative_title="總報名人數累計",
        categories=(TOTAL,),
        sources=(SourceRule(IDENTITY_TABLE, (), classify_total, date_field=None),),
        fixed_kind="line",
    ),
    ChartKind.CHART1: ChartConfig(
        title="校內外報名者分布",
        cumulative_title="校內外報名者累計分布",
        categories=REGISTRANT_CATEGORIES,
        sources=(SourceRule(IDENTITY_TABLE, ("identity",), classify_registrant),),
    ),
    ChartKind.CHART2: ChartConfig(
        title="台大報名者分布",
        cumulative_title="台大報名者累計分布",
        categories=CAMPUS_CATEGORIES,
        sources=(
            SourceRule(STAFF_TABLE, ("identity",), classify_staff),
            SourceRule(STUDENT_TABLE, ("identity",), classify_student_identity),
        ),
    ),
    ChartKind.CHART3: ChartConfig(
        title="教師所有職級分布",
        cumulative_title="教師所有職級累計分布",
        categories=TEACHER_TYPES,
        sources=(SourceRule(TEACHER_TABLE, ("job_title",), teacher_type),),
    ),
    ChartKind.CHART4: rank_config("專任教師", titles=FULL_TIME_TITLES),
    ChartKind.CHART5: rank_config("兼任教師", titles=ADJUNCT_TITLES),
    ChartKind.CHART6: rank_config("專案教師", keywords=PROJECT_KEYWORDS),
    ChartKind.CHART7: rank_config("臨床教師", titles=CLINICAL_TITLES),
    ChartKind.CHART8: ChartConfig(
        title="學生所有職級分布",
        cumulative_title="學生所有職級累計分布",
        categories=STUDENT_LEVELS,
        sources=(SourceRule(STUDENT_TABLE, ("identity", "level"), student_level),),
    ),
    ChartKind.CHART9: college_config("teacher"),
    ChartKind.CHART10: college_config("student"),
    ChartKind.CHART11: college_config("combined"),
}

_unconfigured = [kind.value for kind in ChartKind if kind not in CHART_CONFIGS]
if _unconfigured:  # pragma: no cover
    raise RuntimeError(f"charts without configuration: {', '.join(_unconfigured)}")


def chart_kind(chart_id: str | ChartKind) -> ChartKind:
    if isinstance(chart_id, ChartKind):
        return chart_id
    if not is_valid_chart_id(chart_id):
        raise InvalidChartId(chart_id)
    return ChartKind(chart_id)


def chart_config(chart_id: str | ChartKind) -> ChartConfig:
    return CHART_CONFIGS[chart_kind(chart_id)]


def build_generator(
    chart_id: str | ChartKind,
    window: Sequence[str],
    mode: str,
    tables_config: TablesConfig | None = None,
) -> ConfiguredChartGenerator:
    return ConfiguredChartGenerator(
        window=window,
        mode=mode,
        config=chart_config(chart_id),
        tables_config=tables_config,
    )
