from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from ace_dashboard.charts.base import ChartGenerator, ChartKindHint, ChartResult, SourceRule
from ace_dashboard.classifiers.college import COLLEGE_CATEGORIES, classify_college
from ace_dashboard.classifiers.faculty import TEACHER_RANKS, rank_from_titles, teacher_rank
from ace_dashboard.config import STUDENT_TABLE, TEACHER_TABLE, ColumnRef, TablesConfig
from ace_dashboard.errors import DataSourceError
from ace_dashboard.io.schema import Table

CollegeScope = Literal["teacher", "student", "combined"]

COLLEGE_SCOPE_NAMES = {
    "teacher": "教師學院",
    "student": "學生學院",
    "combined": "教師與學生學院",
}


@dataclass(frozen=True)
class ChartConfig:
    """Static description of one chart: what it reads, how it buckets, what it is called."""

    title: str
    cumulative_title: str
    categories: tuple[str, ...]
    sources: tuple[SourceRule, ...]
    tables: tuple[str, ...] = ()
    fixed_kind: ChartKindHint | None = None

    @property
    def required_tables(self) -> tuple[str, ...]:
        declared = self.tables or tuple(rule.table for rule in self.sources)
        return tuple(dict.fromkeys(declared))


def when_present(classify: Callable[[object], str | None]) -> Callable[[object], str | None]:
    """Treat blank cells as no-match instead of classifying them."""

    def _classify(value: object) -> str | None:
        if value is None or value == "" or (isinstance(value, float) and value != value):
            return None
        return classify(value)

    return _classify


def rank_by_titles(titles: Mapping[str, str]) -> Callable[[object], str | None]:
    lookup = dict(titles)
    return when_present(lambda value: rank_from_titles(value, lookup))


def rank_with_prefilter(keywords: Sequence[str]) -> Callable[[object], str | None]:
    def _classify(value: object) -> str | None:
        text = str(value).strip()
        if not any(keyword in text for keyword in keywords):
            return None
        return teacher_rank(text)

    return when_present(_classify)


def rank_config(
    teacher_type_label: str,
    *,
    titles: Mapping[str, str] | None = None,
    keywords: Sequence[str] = (),
) -> ChartConfig:
    if titles is not None:
        classify = rank_by_titles(titles)
    elif keywords:
        classify = rank_with_prefilter(keywords)
    else:
        raise ValueError("rank charts need an exact title table or prefilter keywords")
    return ChartConfig(
        title=f"{teacher_type_label}職級分布",
        cumulative_title=f"{teacher_type_label}職級累計分布",
        categories=TEACHER_RANKS,
        sources=(SourceRule(TEACHER_TABLE, ("job_title",), classify),),
    )


def college_config(scope: CollegeScope) -> ChartConfig:
    if scope not in COLLEGE_SCOPE_NAMES:
        raise ValueError(f"unknown college scope: {scope}")
    classify = when_present(classify_college)
    sources: list[SourceRule] = []
    if scope in ("teacher", "combined"):
        sources.append(SourceRule(TEACHER_TABLE, ("college",), classify))
    if scope in ("student", "combined"):
        sources.append(SourceRule(STUDENT_TABLE, ("college",), classify))
    name = COLLEGE_SCOPE_NAMES[scope]
    return ChartConfig(
        title=f"{name}分布",
        cumulative_title=f"{name}累計分布",
        categories=COLLEGE_CATEGORIES,
        sources=tuple(sources),
        # Every college breakdown loads both rosters.
        tables=(TEACHER_TABLE, STUDENT_TABLE),
    )


class ConfiguredChartGenerator(ChartGenerator):
    def __init__(
        self,
        window: Sequence[str],
        mode: str,
        config: ChartConfig,
        tables_config: TablesConfig | None = None,
    ) -> None:
        super().__init__(window, mode)
        self.config = config
        self.tables_config = tables_config or TablesConfig()

    def columns_for(self, table_role: str) -> Mapping[str, ColumnRef]:
        return self.tables_config.for_role(table_role).columns

    def chart_kind(self) -> ChartKindHint:
        return self.config.fixed_kind or super().chart_kind()

    def generate(self, tables: Mapping[str, Table]) -> ChartResult:
        missing = [role for role in self.config.required_tables if role not in tables]
        if missing:
            raise DataSourceError(f"missing backing tables: {', '.join(missing)}")

        counts = self.init_counts(self.config.categories)
        for rule in self.config.sources:
            self.count_source(counts, tables[rule.table], rule, self.columns_for(rule.table))
        return ChartResult(
            title=self.config.cumulative_title if self.cumulative else self.config.title,
            chart_kind=self.chart_kind(),
            labels=list(self.months),
            datasets=self.build_datasets(counts, self.config.categories),
        )
