from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

ColumnRef = int | str

IDENTITY_TABLE = "identity"
STAFF_TABLE = "staff"
STUDENT_TABLE = "student"
TEACHER_TABLE = "teacher"
TABLE_ROLES = (IDENTITY_TABLE, STAFF_TABLE, STUDENT_TABLE, TEACHER_TABLE)


class SourceConfig(BaseModel):
    mode: Literal["sheets", "local"] = "sheets"
    spreadsheet_id: str | None = None
    data_dir: str | None = None
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class CacheConfig(BaseModel):
    enabled: bool = True
    ttl_seconds: int = Field(default=3600, ge=0)


class TimeConfig(BaseModel):
    retention_years: int = Field(default=7, ge=0)


class FetchConfig(BaseModel):
    max_workers: int = Field(default=4, ge=1)


class TableConfig(BaseModel):
    sheet: str
    columns: dict[str, ColumnRef]


def _identity_table() -> TableConfig:
    return TableConfig(sheet="身分數據", columns={"identity": 0, "date": 24})


def _staff_table() -> TableConfig:
    return TableConfig(sheet="臺大教職員工數據庫", columns={"identity": 4, "date": 17})


def _student_table() -> TableConfig:
    return TableConfig(
        sheet="臺大學生數據",
        columns={"identity": 1, "level": 2, "college": 7, "date": 12},
    )


def _teacher_table() -> TableConfig:
    return TableConfig(
        sheet="臺大教師數據",
        columns={"college": 4, "job_title": 6, "date": 12},
    )


class TablesConfig(BaseModel):
    identity: TableConfig = Field(default_factory=_identity_table)
    staff: TableConfig = Field(default_factory=_staff_table)
    student: TableConfig = Field(default_factory=_student_table)
    teacher: TableConfig = Field(default_factory=_teacher_table)

    def for_role(self, role: str) -> TableConfig:
        if role not in TABLE_ROLES:
            raise KeyError(f"unknown table role: {role}")
        return getattr(self, role)


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: SourceConfig = Field(default_factory=SourceConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    time: TimeConfig = Field(default_factory=TimeConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    tables: TablesConfig = Field(default_factory=TablesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.source.data_dir = _resolve_optional_path(config.source.data_dir, base_dir)
    config.source.spreadsheet_id = (
        os.getenv("ACE_DASHBOARD_SPREADSHEET_ID") or config.source.spreadsheet_id
    )
    return config
