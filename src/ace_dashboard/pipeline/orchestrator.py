from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime

from ace_dashboard.charts.base import ChartResult
from ace_dashboard.charts.registry import build_generator, chart_config, chart_kind
from ace_dashboard.config import IDENTITY_TABLE, AppConfig
from ace_dashboard.errors import InvalidAggregationMode
from ace_dashboard.io.read import TableProvider
from ace_dashboard.io.schema import Table, resolve_fields
from ace_dashboard.pipeline.time_selection import resolve_time_window
from ace_dashboard.preprocess.calendar import (
    min_available_month,
    month_to_semester,
    month_to_year,
    parse_month_key,
)
from ace_dashboard.validation import (
    is_valid_aggregation_mode,
    is_valid_chart_id,
    sanitize,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeOptions:
    months: list[str]
    semesters: list[str]
    years: list[str]

    def to_dict(self) -> dict[str, list[str]]:
        return {"months": list(self.months), "semesters": list(self.semesters), "years": list(self.years)}


class ChartOrchestrator:
    """Fetches the tables a chart needs and runs its generator.

    ``clock`` is read on every ``time_options`` call; pass a fixed clock to pin
    the retention horizon.
    """

    def __init__(
        self,
        provider: TableProvider,
        config: AppConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.provider = provider
        self.config = config or AppConfig()
        self.clock = clock or datetime.now

    def sheet_name(self, table_role: str) -> str:
        return self.config.tables.for_role(table_role).sheet

    def fetch_tables(self, table_roles: Sequence[str]) -> dict[str, Table]:
        roles = list(dict.fromkeys(table_roles))
        if not roles:
            return {}
        workers = min(self.config.fetch.max_workers, len(roles))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="table-fetch") as pool:
            futures = {
                role: pool.submit(self.provider.fetch_table, self.sheet_name(role)) for role in roles
            }
            # result() re-raises the first failure; no partial table set is returned.
            return {role: future.result() for role, future in futures.items()}

    def generate(self, chart_id: str, window: Sequence[str], mode: str) -> ChartResult:
        kind = chart_kind(chart_id)
        if not is_valid_aggregation_mode(mode):
            raise InvalidAggregationMode(mode)
        config = chart_config(kind)
        tables = self.fetch_tables(config.required_tables)
        generator = build_generator(kind, window, mode, tables_config=self.config.tables)
        result = generator.generate(tables)
        LOGGER.info(
            "%s (%s): %d months, %d datasets",
            kind.value,
            mode,
            len(result.labels),
            len(result.datasets),
        )
        return result

    def time_options(self) -> TimeOptions:
        table = self.provider.fetch_table(self.sheet_name(IDENTITY_TABLE))
        columns = self.config.tables.for_role(IDENTITY_TABLE).columns
        position = resolve_fields(table, columns, ("date",))["date"]
        found = {key for key in map(parse_month_key, table.column_at(position)) if isinstance(key, str)}

        horizon = min_available_month(self.clock(), self.config.time.retention_years)
        months = sorted(month for month in found if month >= horizon)
        return TimeOptions(
            months=months,
            semesters=sorted(
                {month_to_semester(month) for month in months},
                key=lambda key: tuple(int(part) for part in key.split("-")),
            ),
            years=sorted({month_to_year(month) for month in months}, key=int),
        )


class ChartService:
    """Boundary-facing entry points used by the CLI and any transport layer."""

    sanitize = staticmethod(sanitize)
    is_valid_chart_id = staticmethod(is_valid_chart_id)
    is_valid_aggregation_mode = staticmethod(is_valid_aggregation_mode)

    def __init__(self, orchestrator: ChartOrchestrator) -> None:
        self.orchestrator = orchestrator

    def list_time_options(self) -> TimeOptions:
        return self.orchestrator.time_options()

    def resolve_time_window(
        self,
        mode: str,
        selections: Iterable[str],
        available: Iterable[str] | None = None,
    ) -> list[str]:
        if available is None:
            available = self.list_time_options().months
        return resolve_time_window(mode, selections, available)

    def generate_chart(self, chart_id: str, window: Sequence[str], mode: str) -> ChartResult:
        return self.orchestrator.generate(chart_id, window, mode)
