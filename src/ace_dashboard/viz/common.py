from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

# Category and title labels are Traditional Chinese; matplotlib falls back
# through this list to the first installed face.
CJK_FONT_FALLBACKS = [
    "Noto Sans CJK TC",
    "Noto Sans TC",
    "Microsoft JhengHei",
    "PingFang TC",
    "Heiti TC",
    "DejaVu Sans",
]


def use_cjk_fonts() -> None:
    plt.rcParams["font.sans-serif"] = CJK_FONT_FALLBACKS + [
        name for name in plt.rcParams["font.sans-serif"] if name not in CJK_FONT_FALLBACKS
    ]
    plt.rcParams["axes.unicode_minus"] = False


def save_figure(path: Path, dpi: int = 150) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=dpi)
    plt.close()
    return path
