from __future__ import annotations

from pathlib import Path

import pytest

from ace_dashboard.charts.base import ChartResult, Dataset
from ace_dashboard.viz.charts import plot_chart_result


@pytest.mark.parametrize(
    ("kind", "labels"),
    [
        ("bar", ["2023-08", "2023-09", "2023-10"]),
        ("line", ["2023-08", "2023-09", "2023-10"]),
        ("pie", ["2023-08"]),
    ],
)
def test_plot_chart_result_writes_png(tmp_path: Path, kind: str, labels: list[str]) -> None:
    result = ChartResult(
        title="教師學院分布",
        chart_kind=kind,
        labels=labels,
        datasets=[
            Dataset("醫學院", [index + 1 for index in range(len(labels))]),
            Dataset("理學院", [2] * len(labels)),
        ],
    )
    output_path = tmp_path / f"{kind}.png"

    assert plot_chart_result(result, output_path) == output_path
    assert output_path.stat().st_size > 0


def test_plot_chart_result_handles_empty_series(tmp_path: Path) -> None:
    result = ChartResult(title="學生學院分布", chart_kind="pie", labels=["2030-01"], datasets=[])
    output_path = tmp_path / "nested" / "empty.png"

    plot_chart_result(result, output_path)

    assert output_path.exists()
