"""
Usage example: from the station workbook to per-response mixed models and figures.

Mirrors the community LMM notebook: base table, complete cases, long table,
one mixed model per community metric, diagnostics and a faceted overview.
"""

import sys
from pathlib import Path

# Add the src directory to path
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from zoopdata import build_base_table, build_model_table, build_long_table, get_analysis
from zoopdata.config import FIG_PAGE, RAW_STATION_XLSX
from zoopdata.utils.logging import configure_logging
from zoopstats import (
    coefficient_table, fit_by_response, plot_long_facets,
    plot_residual_diagnostics, save_figure,
)


def community_lmm_example():
    print("=== Community LMM - Usage Example ===\n")

    if not RAW_STATION_XLSX.exists():
        print(f"Error: station workbook not found at {RAW_STATION_XLSX}")
        print("Place the workbook there (sheet 'station_data') and rerun.")
        return

    configure_logging("INFO")
    analysis = get_analysis("community_lmm")

    print("1. Building base table...")
    base = build_base_table(analysis)
    print(f"   {len(base)} samples x {base.shape[1]} columns, {base['Station'].nunique()} stations")

    print("\n2. Complete cases for the mixed models...")
    model, cases = build_model_table(analysis, base)
    print(f"   kept {len(model)}, dropped {cases.n_dropped}")
    if cases.n_dropped:
        print(cases.report().to_string())

    print("\n3. One model per community metric (station random intercept)...")
    long = build_long_table(analysis, model)
    metrics = long[long["Variable"].isin(["Density", "H"])]
    metrics = metrics.assign(Variable=metrics["Variable"].cat.remove_unused_categories())
    fits = fit_by_response(metrics, "Season + Year", kind="lmm", value_col="Transformed_Value")
    print(coefficient_table(fits).round(3).to_string(index=False))

    print("\n4. Figures...")
    for name, fit in fits.items():
        save_figure(plot_residual_diagnostics(fit, title=name), f"lmm_diagnostics_{name}")
    overview = plot_long_facets(build_long_table(analysis, base))
    for p in save_figure(overview, "community_overview", size=FIG_PAGE):
        print(f"   wrote {p}")


if __name__ == "__main__":
    community_lmm_example()
