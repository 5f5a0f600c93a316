from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import typer

from ace_dashboard.charts.base import ChartResult
from ace_dashboard.charts.registry import CHART_CONFIGS
from ace_dashboard.config import DEFAULT_CONFIG_PATH, TABLE_ROLES, AppConfig, load_config
from ace_dashboard.errors import DataSourceError, InvalidInput
from ace_dashboard.io.read import build_table_provider
from ace_dashboard.io.write import write_json, write_table
from ace_dashboard.logging import configure_logging
from ace_dashboard.pipeline.orchestrator import ChartOrchestrator, ChartService
from ace_dashboard.validation import is_valid_aggregation_mode, is_valid_chart_id
from ace_dashboard.viz.charts import plot_chart_result

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _build_service(cfg: AppConfig) -> ChartService:
    try:
        provider = build_table_provider(cfg)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return ChartService(ChartOrchestrator(provider, cfg))


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _build_chart(
    config: Path,
    chart_id: str,
    time_mode: str,
    select: list[str],
    data_type: str,
) -> ChartResult:
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    if not is_valid_chart_id(chart_id):
        raise typer.BadParameter(f"unknown chart '{chart_id}'; expected chart0..chart11")
    if not is_valid_aggregation_mode(data_type):
        raise typer.BadParameter("--data-type must be 'new' or 'cumulative'")

    service = _build_service(cfg)
    try:
        window = service.resolve_time_window(time_mode, select)
        return service.generate_chart(chart_id, window, data_type)
    except InvalidInput as exc:
        raise typer.BadParameter(str(exc)) from exc
    except DataSourceError as exc:
        _fail(str(exc))


@app.command("charts")
def list_charts() -> None:
    """List chart identifiers and their titles."""
    for kind, chart_cfg in CHART_CONFIGS.items():
        typer.echo(f"{kind.value}\t{chart_cfg.title}\t[{', '.join(chart_cfg.required_tables)}]")


@app.command("time-options")
def time_options(
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Print available months, semesters and academic years as JSON."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    service = _build_service(cfg)
    try:
        options = service.list_time_options()
    except DataSourceError as exc:
        _fail(str(exc))
    typer.echo(json.dumps(options.to_dict(), ensure_ascii=False, indent=2))


@app.command()
def chart(
    chart_id: str = typer.Argument(..., help="Chart identifier, chart0..chart11."),
    time_mode: str = typer.Option("month", help="Selection granularity: month, semester or year."),
    select: list[str] = typer.Option(..., help="Month (YYYY-MM), semester (E-S) or year (E) keys."),
    data_type: str = typer.Option("new", help="Aggregation: new or cumulative."),
    out: Path | None = typer.Option(None, resolve_path=True, help="Write JSON here instead of stdout."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Generate one chart and emit its series as JSON."""
    result = _build_chart(config, chart_id, time_mode, select, data_type)
    if out is None:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return
    write_json(result.to_dict(), out)
    typer.echo(f"Chart written to: {out}")


@app.command()
def render(
    chart_id: str = typer.Argument(..., help="Chart identifier, chart0..chart11."),
    out: Path = typer.Option(..., resolve_path=True, help="PNG output path."),
    time_mode: str = typer.Option("month", help="Selection granularity: month, semester or year."),
    select: list[str] = typer.Option(..., help="Month (YYYY-MM), semester (E-S) or year (E) keys."),
    data_type: str = typer.Option("new", help="Aggregation: new or cumulative."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Generate one chart and draw it as a PNG."""
    result = _build_chart(config, chart_id, time_mode, select, data_type)
    path = plot_chart_result(result, out)
    typer.echo(f"Figure written to: {path}")


@app.command()
def snapshot(
    out: Path = typer.Option(Path("data"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Fetch every configured table and save it as CSV for source.mode=local."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    service = _build_service(cfg)
    orchestrator = service.orchestrator
    try:
        tables = orchestrator.fetch_tables(TABLE_ROLES)
    except DataSourceError as exc:
        _fail(str(exc))
    for role, table in tables.items():
        path = write_table(table.frame, out / f"{table.name}.csv")
        typer.echo(f"{role}: {len(table)} rows -> {path}")
