from __future__ import annotations

from pathlib import Path
from typing import Protocol

import pandas as pd

from ace_dashboard.config import AppConfig
from ace_dashboard.errors import DataSourceError
from ace_dashboard.io.cache import CachedTableProvider
from ace_dashboard.io.schema import Table
from ace_dashboard.io.sheets import GoogleSheetsTableProvider


class TableProvider(Protocol):
    def fetch_table(self, name: str) -> Table: ...


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        return pd.read_csv(path, encoding="utf-8-sig", dtype=object, keep_default_na=False)
    raise ValueError(f"Unsupported table file type: {path.suffix}")


class LocalTableProvider:
    """Serves ``<name>.csv`` or ``<name>.parquet`` files from one directory."""

    SUFFIXES = (".parquet", ".csv")

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def fetch_table(self, name: str) -> Table:
        for suffix in self.SUFFIXES:
            path = self.data_dir / f"{name}{suffix}"
            if path.exists():
                try:
                    frame = load_table(path)
                except (OSError, ValueError) as exc:
                    raise DataSourceError(f"table '{name}': cannot read {path}") from exc
                return Table(name=name, frame=frame.astype(object))
        raise DataSourceError(f"table '{name}': no .csv or .parquet file in {self.data_dir}")


def build_table_provider(config: AppConfig) -> TableProvider:
    source = config.source
    provider: TableProvider
    if source.mode == "local":
        if not source.data_dir:
            raise ValueError("source.data_dir must be set when source.mode is 'local'")
        provider = LocalTableProvider(Path(source.data_dir))
    else:
        if not source.spreadsheet_id:
            raise ValueError("source.spreadsheet_id must be set when source.mode is 'sheets'")
        provider = GoogleSheetsTableProvider(
            spreadsheet_id=source.spreadsheet_id,
            timeout=source.request_timeout_seconds,
        )
    if config.cache.enabled:
        provider = CachedTableProvider(provider, ttl_seconds=config.cache.ttl_seconds)
    return provider
