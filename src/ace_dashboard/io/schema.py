from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd

from ace_dashboard.config import ColumnRef
from ace_dashboard.errors import TableSchemaError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Table:
    """Rows of one backing sheet, columns in the order the provider supplied them."""

    name: str
    frame: pd.DataFrame

    @property
    def columns(self) -> list[str]:
        return [str(column) for column in self.frame.columns]

    def __len__(self) -> int:
        return len(self.frame)

    def column_at(self, position: int) -> pd.Series:
        return self.frame.iloc[:, position]


def build_table(name: str, headers: list[str], rows: list[list[object]]) -> Table:
    width = len(headers)
    padded = [list(row[:width]) + [""] * (width - len(row)) for row in rows]
    frame = pd.DataFrame(padded, columns=pd.Index(headers, dtype=object), dtype=object)
    return Table(name=name, frame=frame)


def _resolve_column(table: Table, role: str, ref: ColumnRef) -> int:
    if isinstance(ref, int):
        if 0 <= ref < len(table.frame.columns):
            return ref
        raise TableSchemaError(
            f"table '{table.name}' has {len(table.frame.columns)} columns; "
            f"field '{role}' expects position {ref}"
        )
    labels = table.columns
    if ref in labels:
        return labels.index(ref)
    raise TableSchemaError(f"table '{table.name}' has no column '{ref}' for field '{role}'")


def resolve_fields(
    table: Table,
    columns: Mapping[str, ColumnRef],
    roles: tuple[str, ...] | None = None,
) -> dict[str, int]:
    """Map field roles to column positions against the table's header row.

    Only ``roles`` are resolved when given, so a chart that reads two of a
    table's fields does not fail on a third that is missing.
    """
    wanted = roles if roles is not None else tuple(columns)
    positions: dict[str, int] = {}
    for role in wanted:
        if role not in columns:
            raise TableSchemaError(f"no column configured for field '{role}' of table '{table.name}'")
        try:
            positions[role] = _resolve_column(table, role, columns[role])
        except TableSchemaError:
            LOGGER.warning("schema mismatch for table %s field %s", table.name, role)
            raise
    return positions
