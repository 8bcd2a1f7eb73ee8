"""Figure helpers: faceted long-table plots, model diagnostics and fixed-size output."""
from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import pandas as pd
from scipy import stats

from zoopdata.config import FIG_DIR, FIG_DPI, FIG_FORMATS, FIG_PAGE, FIG_SMALL, SEASONS
from zoopdata.utils.logging import get_logger

log = get_logger(__name__)

SEASON_COLORS = dict(zip(SEASONS, ["#65a30d", "#f59e0b", "#b45309"]))


def save_figure(
    fig: plt.Figure,
    name: str,
    *,
    size: Tuple[float, float] = FIG_SMALL,
    formats: Iterable[str] = FIG_FORMATS,
    out_dir: Optional[Path] = None,
    dpi: int = FIG_DPI,
) -> list[Path]:
    """
    Write fig at a fixed physical size (inches), once per format.

    The output directory is created on demand. Returns the written paths.
    """
    out_dir = Path(out_dir or FIG_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.set_size_inches(*size)
    paths = []
    for ext in formats:
        path = out_dir / f"{name}.{ext}"
        fig.savefig(path, dpi=dpi)
        paths.append(path)
    log.info("Saved figure", name=name, size=list(size), files=[p.name for p in paths])
    return paths


def plot_long_facets(
    long_df: pd.DataFrame,
    *,
    x: str = "Station",
    value_col: str = "Value",
    ncols: int = 3,
    size: Tuple[float, float] = FIG_PAGE,
) -> plt.Figure:
    """One panel per Variable, titled with its fancy_label, points coloured by Season."""
    groups = list(long_df.groupby("Variable", observed=True, sort=True))
    if not groups:
        raise ValueError("plot_long_facets: long table has no rows")
    nrows = math.ceil(len(groups) / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=size, squeeze=False)

    for ax, (_, d) in zip(axes.flat, groups):
        for season, sd in d.groupby("Season", observed=True, sort=True):
            ax.scatter(sd[x], sd[value_col], s=8, alpha=0.8,
                       color=SEASON_COLORS.get(str(season), "#6b7280"), label=str(season))
        ax.set_title(str(d["fancy_label"].iloc[0]), fontsize=8)
        ax.tick_params(labelsize=7)
    for ax in axes.flat[len(groups):]:
        ax.set_visible(False)

    handles, labels = axes.flat[0].get_legend_handles_labels()
    if handles:
        fig.legend(handles, labels, loc="lower right", fontsize=7, frameon=False)
    fig.supxlabel(x, fontsize=8)
    fig.tight_layout()
    return fig


def plot_residual_diagnostics(fit, title: Optional[str] = None) -> plt.Figure:
    """Residuals vs fitted values and a normal Q-Q plot of the residuals."""
    fitted = pd.Series(fit.fittedvalues).to_numpy(dtype=float)
    resid = pd.Series(fit.resid).to_numpy(dtype=float)

    fig, (ax_rf, ax_qq) = plt.subplots(1, 2, figsize=FIG_SMALL)
    ax_rf.scatter(fitted, resid, s=8, color="#334155")
    ax_rf.axhline(0, color="#ef4444", lw=1)
    ax_rf.set_xlabel("Fitted")
    ax_rf.set_ylabel("Residual")
    stats.probplot(resid, dist="norm", plot=ax_qq)
    ax_qq.set_title("Normal Q-Q")
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig
