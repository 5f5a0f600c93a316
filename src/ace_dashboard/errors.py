from __future__ import annotations


class AceDashboardError(Exception):
    """Base class for errors surfaced to callers of the chart engine."""


class InvalidInput(AceDashboardError, ValueError):
    """A caller-supplied value was rejected. Never retried."""


class InvalidChartId(InvalidInput):
    def __init__(self, chart_id: object) -> None:
        super().__init__(f"unknown chart identifier: {chart_id!r}")
        self.chart_id = chart_id


class InvalidAggregationMode(InvalidInput):
    def __init__(self, mode: object) -> None:
        super().__init__(f"unknown aggregation mode: {mode!r} (expected 'new' or 'cumulative')")
        self.mode = mode


class InvalidTimeMode(InvalidInput):
    def __init__(self, mode: object) -> None:
        super().__init__(f"unknown time mode: {mode!r} (expected 'month', 'semester' or 'year')")
        self.mode = mode


class EmptySelection(InvalidInput):
    def __init__(self, message: str = "time selection does not cover any available month") -> None:
        super().__init__(message)


class DataSourceError(AceDashboardError, RuntimeError):
    """A backing table could not be fetched or parsed."""


class TableSchemaError(DataSourceError):
    """A fetched table does not carry a column its schema requires."""
