from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from ace_dashboard.charts.base import ChartResult
from ace_dashboard.viz.common import save_figure, use_cjk_fonts


def _plot_pie(result: ChartResult) -> None:
    values = [dataset.values[0] for dataset in result.datasets]
    labels = [dataset.label for dataset in result.datasets]
    plt.figure(figsize=(6, 6))
    if any(values):
        plt.pie(values, labels=labels, autopct="%1.0f%%", startangle=90, counterclock=False)
    plt.axis("equal")
    plt.title(f"{result.title} ({result.labels[0]})" if result.labels else result.title)


def _plot_line(result: ChartResult) -> None:
    plt.figure(figsize=(12, 4))
    for dataset in result.datasets:
        plt.plot(result.labels, dataset.values, marker="o", linewidth=1.5, label=dataset.label)
    plt.title(result.title)
    plt.xlabel("Month")
    plt.ylabel("Count")
    plt.xticks(rotation=45, ha="right")
    if result.datasets:
        plt.legend(loc="upper left")


def _plot_bar(result: ChartResult) -> None:
    _, ax = plt.subplots(figsize=(12, 4))
    positions = np.arange(len(result.labels))
    bottom = np.zeros(len(result.labels))
    for dataset in result.datasets:
        heights = np.asarray(dataset.values, dtype=float)
        ax.bar(positions, heights, bottom=bottom, label=dataset.label)
        bottom += heights
    ax.set_xticks(positions)
    ax.set_xticklabels(result.labels, rotation=45, ha="right")
    ax.set_title(result.title)
    ax.set_xlabel("Month")
    ax.set_ylabel("Count")
    if result.datasets:
        ax.legend(loc="upper left", fontsize="small", ncol=2)


def plot_chart_result(result: ChartResult, output_path: Path) -> Path:
    use_cjk_fonts()
    if result.chart_kind == "pie" and len(result.labels) == 1:
        _plot_pie(result)
    elif result.chart_kind == "line":
        _plot_line(result)
    else:
        _plot_bar(result)
    return save_figure(output_path)
