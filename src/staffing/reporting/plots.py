from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

_STATUS_COLORS = {
    "full": "#34D399",
    "composition": "#F59E0B",
    "partial": "#FB923C",
    "none": "#EF4444",
}


def _save_and_show(fig: plt.Figure, filename: str, out_dir: Path) -> None:
    """Persist the plot under the output directory and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_coverage_chart(
    cfg: Any,
    frame: pd.DataFrame,
    enable_plot: bool = True,
) -> None:
    """Grouped bars of required vs filled positions per project."""
    if not enable_plot or frame.empty:
        return

    df = frame[frame["required"] > 0]
    if df.empty:
        return

    names = df["name"].astype(str).tolist()
    x = np.arange(len(names))
    width = 0.4

    fig, ax = plt.subplots(figsize=(max(6.0, 1.2 * len(names)), 4), dpi=150)
    ax.set_title("Worker coverage by project", pad=20)
    ax.bar(
        x - width / 2,
        df["required"],
        width=width,
        color="#CBD5E1",
        label="Required",
        edgecolor="none",
    )
    ax.bar(
        x + width / 2,
        df["filled"],
        width=width,
        color=[_STATUS_COLORS.get(s, "#94A3B8") for s in df["coverage_status"]],
        label="Filled",
        edgecolor="none",
    )

    ax.set_xticks(x, names, rotation=30, ha="right")
    ax.set_ylabel("Positions")
    ax.set_ymargin(0.1)
    ax.yaxis.get_major_locator().set_params(integer=True)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.legend(frameon=False, loc="upper right")
    fig.tight_layout()

    out_dir = Path(getattr(cfg, "OUTPUT_DIR", "outputs"))
    _save_and_show(fig, "coverage_by_project.png", out_dir)
