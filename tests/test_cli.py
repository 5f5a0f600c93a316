from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ace_dashboard.cli import app
from ace_dashboard.config import AppConfig
from ace_dashboard.pipeline.orchestrator import ChartOrchestrator, ChartService


@pytest.fixture
def cli_env(monkeypatch, tmp_path: Path, fake_provider):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("{}", encoding="utf-8")
    state: dict[str, object] = {"failing": ()}

    def _fake_service(_cfg: AppConfig) -> ChartService:
        provider = fake_provider(failing=state["failing"])
        state["provider"] = provider
        return ChartService(ChartOrchestrator(provider, AppConfig(), clock=lambda: datetime(2026, 10, 19)))

    monkeypatch.setattr("ace_dashboard.cli._build_service", _fake_service)
    monkeypatch.setattr("ace_dashboard.cli.configure_logging", lambda _level: None)
    state["config"] = str(config_path)
    return state


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("charts", "time-options", "chart", "render", "snapshot"):
        assert command in result.stdout


def test_charts_lists_every_chart() -> None:
    result = CliRunner().invoke(app, ["charts"])

    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 12
    assert lines[0].startswith("chart0\t總報名人數")
    assert "[teacher, student]" in lines[11]


def test_time_options_command(cli_env) -> None:
    result = CliRunner().invoke(app, ["time-options", "--config", cli_env["config"]])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "months": ["2023-08", "2023-09"],
        "semesters": ["112-1"],
        "years": ["112"],
    }


def test_chart_command_emits_json(cli_env) -> None:
    result = CliRunner().invoke(
        app,
        [
            "chart",
            "chart3",
            "--time-mode",
            "semester",
            "--select",
            "112-1",
            "--data-type",
            "cumulative",
            "--config",
            cli_env["config"],
        ],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["title"] == "教師所有職級累計分布"
    assert payload["chartKind"] == "bar"
    assert payload["labels"] == ["2023-08", "2023-09"]
    assert {"label": "專任教師", "values": [1, 1]} in payload["datasets"]


def test_chart_command_writes_file(cli_env, tmp_path: Path) -> None:
    out = tmp_path / "chart.json"
    result = CliRunner().invoke(
        app,
        ["chart", "chart0", "--select", "2023-09", "--out", str(out), "--config", cli_env["config"]],
    )

    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["chartKind"] == "line"


@pytest.mark.parametrize(
    "args",
    [
        ["chart", "chart12", "--select", "2023-08"],
        ["chart", "<chart1>", "--select", "2023-08"],
        ["chart", " chart1 ", "--select", "2023-08"],
        ["chart", "chart1", "--select", "2023-08", "--data-type", "total"],
        ["chart", "chart1", "--time-mode", "week", "--select", "2023-08"],
        ["chart", "chart1", "--select", "2020-01"],
    ],
)
def test_chart_command_rejects_bad_input(cli_env, args: list[str]) -> None:
    result = CliRunner().invoke(app, [*args, "--config", cli_env["config"]])

    assert result.exit_code == 2


def test_chart_command_reports_fetch_failures(cli_env) -> None:
    cli_env["failing"] = ("臺大教師數據",)
    result = CliRunner().invoke(
        app,
        ["chart", "chart3", "--select", "2023-08", "--config", cli_env["config"]],
    )

    assert result.exit_code == 1


def test_render_command_writes_png(cli_env, tmp_path: Path) -> None:
    out = tmp_path / "figures" / "chart9.png"
    result = CliRunner().invoke(
        app,
        ["render", "chart9", "--out", str(out), "--time-mode", "year", "--select", "112", "--config", cli_env["config"]],
    )

    assert result.exit_code == 0
    assert out.exists()


def test_snapshot_command_writes_every_table(cli_env, tmp_path: Path) -> None:
    out = tmp_path / "snapshot"
    result = CliRunner().invoke(app, ["snapshot", "--out", str(out), "--config", cli_env["config"]])

    assert result.exit_code == 0
    assert sorted(path.name for path in out.glob("*.csv")) == sorted(
        ["身分數據.csv", "臺大教職員工數據庫.csv", "臺大學生數據.csv", "臺大教師數據.csv"]
    )
