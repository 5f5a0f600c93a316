"""Table provider backed by the Google Sheets visualization ("gviz") endpoint."""

from __future__ import annotations

import json
import logging
import re
from typing import Any
from urllib.parse import quote

import requests

from ace_dashboard.errors import DataSourceError
from ace_dashboard.io.schema import Table, build_table

LOGGER = logging.getLogger(__name__)

GVIZ_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq?tqx=out:json&sheet={sheet}"
GVIZ_RESPONSE_RE = re.compile(r"google\.visualization\.Query\.setResponse\(([\s\S]*)\);?\s*$")


def _cell_value(cell: Any) -> Any:
    if not cell:
        return ""
    value = cell.get("v")
    if value is None:
        value = cell.get("f")
    return "" if value is None else value


def parse_gviz_response(text: str, sheet: str) -> Table:
    match = GVIZ_RESPONSE_RE.search(text)
    if not match:
        raise DataSourceError(f"sheet '{sheet}': response is not a gviz payload")
    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise DataSourceError(f"sheet '{sheet}': malformed gviz JSON") from exc

    if payload.get("status") == "error":
        errors = payload.get("errors") or [{}]
        message = errors[0].get("message") or "fetch failed"
        raise DataSourceError(f"sheet '{sheet}': {message}")

    table = payload.get("table") or {}
    headers = [str(col.get("label") or col.get("id") or "") for col in table.get("cols", [])]
    rows = [[_cell_value(cell) for cell in (row.get("c") or [])] for row in table.get("rows", [])]
    return build_table(sheet, headers, rows)


class GoogleSheetsTableProvider:
    def __init__(
        self,
        spreadsheet_id: str,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id must be set for the sheets table provider")
        self.spreadsheet_id = spreadsheet_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, name: str) -> str:
        return GVIZ_URL.format(spreadsheet_id=self.spreadsheet_id, sheet=quote(name, safe=""))

    def fetch_table(self, name: str) -> Table:
        LOGGER.info("fetching sheet %s", name)
        try:
            response = self.session.get(self.url_for(name), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.warning("sheet %s fetch failed: %s", name, exc)
            raise DataSourceError(f"sheet '{name}': {exc}") from exc
        table = parse_gviz_response(response.text, name)
        LOGGER.debug("sheet %s: %d rows x %d columns", name, len(table), len(table.columns))
        return table
