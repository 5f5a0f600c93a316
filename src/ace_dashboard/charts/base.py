from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

import pandas as pd

from ace_dashboard.config import ColumnRef
from ace_dashboard.errors import InvalidAggregationMode
from ace_dashboard.io.schema import Table, resolve_fields
from ace_dashboard.preprocess.calendar import first_month_key, parse_month_key
from ace_dashboard.validation import is_valid_aggregation_mode

LOGGER = logging.getLogger(__name__)

AggregationMode = Literal["new", "cumulative"]
ChartKindHint = Literal["line", "pie", "bar"]


@dataclass(frozen=True)
class Dataset:
    label: str
    values: list[int]

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "values": list(self.values)}


@dataclass(frozen=True)
class ChartResult:
    title: str
    chart_kind: ChartKindHint
    labels: list[str]
    datasets: list[Dataset] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "chartKind": self.chart_kind,
            "labels": list(self.labels),
            "datasets": [dataset.to_dict() for dataset in self.datasets],
        }


@dataclass(frozen=True)
class SourceRule:
    """How one table feeds a chart.

    ``fields`` are the field roles handed positionally to ``classify``;
    a ``date_field`` of ``None`` takes the first date-bearing cell of each row.
    """

    table: str
    fields: tuple[str, ...]
    classify: Callable[..., str | None]
    date_field: str | None = "date"

    @property
    def roles(self) -> tuple[str, ...]:
        if self.date_field is None:
            return self.fields
        return (*self.fields, self.date_field)


class ChartGenerator:
    def __init__(self, window: Sequence[str], mode: str) -> None:
        if not is_valid_aggregation_mode(mode):
            raise InvalidAggregationMode(mode)
        self.months: list[str] = list(dict.fromkeys(window))
        self.month_set = frozenset(self.months)
        self.mode: AggregationMode = mode  # type: ignore[assignment]

    @property
    def cumulative(self) -> bool:
        return self.mode == "cumulative"

    def chart_kind(self) -> ChartKindHint:
        return "pie" if len(self.months) == 1 else "bar"

    def init_counts(self, categories: Sequence[str]) -> pd.DataFrame:
        return pd.DataFrame(
            0,
            index=pd.Index(self.months, name="month"),
            columns=pd.Index(list(categories), name="category"),
            dtype="int64",
        )

    def build_datasets(self, counts: pd.DataFrame, categories: Sequence[str]) -> list[Dataset]:
        series = counts.cumsum() if self.cumulative else counts
        datasets: list[Dataset] = []
        for category in categories:
            if category not in series.columns:
                continue
            values = [int(value) for value in series[category].tolist()]
            if any(values):
                datasets.append(Dataset(label=category, values=values))
        return datasets

    def _row_months(self, table: Table, rule: SourceRule, positions: Mapping[str, int]) -> pd.Series:
        # Misses must stay None, not NaN.
        if rule.date_field is None:
            keys = [first_month_key(row) for row in table.frame.itertuples(index=False, name=None)]
        else:
            keys = [parse_month_key(value) for value in table.column_at(positions[rule.date_field])]
        return pd.Series(keys, index=table.frame.index, dtype=object)

    def count_source(
        self,
        counts: pd.DataFrame,
        table: Table,
        rule: SourceRule,
        columns: Mapping[str, ColumnRef],
    ) -> int:
        """Add one table's in-window, classified rows to ``counts``; returns rows counted."""
        positions = resolve_fields(table, columns, rule.roles)
        months = self._row_months(table, rule, positions)
        in_window = months.isin(self.month_set).to_numpy(dtype=bool)
        selected = table.frame[in_window]

        field_values = [selected.iloc[:, positions[role]].tolist() for role in rule.fields]
        rows = zip(*field_values) if field_values else [()] * len(selected)
        observed = pd.DataFrame(
            {
                "month": months[in_window].tolist(),
                "category": [rule.classify(*values) for values in rows],
            },
            dtype=object,
        )
        observed = observed[observed["category"].isin(list(counts.columns))]
        LOGGER.debug(
            "table %s: %d rows, %d in window, %d classified",
            table.name,
            len(table),
            int(in_window.sum()),
            len(observed),
        )
        if observed.empty:
            return 0
        for (month, category), n in observed.groupby(["month", "category"]).size().items():
            counts.loc[month, category] += int(n)
        return len(observed)

    def generate(self, tables: Mapping[str, Table]) -> ChartResult:
        raise NotImplementedError
