from __future__ import annotations
from pathlib import Path

import pandas as pd

from .analyses import Analysis, get_analysis
from .cleaning import harmonize_ids, normalize_columns, require_keys
from .data_io import save_interim
from .derive import add_calendar_fields, recode_stations
from .filters import CompleteCases, apply_filters, complete_cases
from .ingest import read_station_workbook
from .reshape import to_long
from .selection import project, validate_selection
from .utils.logging import get_logger, log_context
from .validators import assert_base_keys

log = get_logger(__name__)


def _resolve(analysis: Analysis | str) -> Analysis:
    return analysis if isinstance(analysis, Analysis) else get_analysis(analysis)


def prepare_station_data(raw: pd.DataFrame) -> pd.DataFrame:
    """Loaded workbook -> normalized names, station ranks and calendar fields."""
    df = normalize_columns(raw)
    df = require_keys(df)
    df = harmonize_ids(df, "station")
    df = recode_stations(df, code_col="station", out_col="Station")
    df = add_calendar_fields(df, date_col="date")
    return df


def build_base_table(
    analysis: Analysis | str,
    path: str | Path | None = None,
    *,
    raw: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """
    Build an analysis' base table.

    Args:
        analysis: Analysis (or its registered name) whose column contract to apply
        path: Workbook to read when raw is not given
        raw: Already-loaded station table (as returned by read_station_workbook)

    Returns:
        Projected, validated base table
    """
    analysis = _resolve(analysis)
    with log_context(analysis=analysis.name):
        if raw is None:
            raw = read_station_workbook(path)
        prepared = prepare_station_data(raw)
        validate_selection(prepared, analysis.selection)
        base = project(prepared, analysis.selection)
        base = assert_base_keys(base)
        log.info("Built base table", rows=len(base), columns=len(base.columns))
    return base


def build_model_table(
    analysis: Analysis | str,
    base: pd.DataFrame,
    *,
    filters: tuple[str, ...] | None = None,
) -> tuple[pd.DataFrame, CompleteCases]:
    """
    Reduce a base table to the rows an analysis fits models on.

    Complete cases on the analysis' declared fields, then its named filters
    (or the filters given here).

    Returns:
        (model table, complete-case report)
    """
    analysis = _resolve(analysis)
    with log_context(analysis=analysis.name):
        cases = complete_cases(base, analysis.complete_fields)
        model = apply_filters(cases.rows, analysis.filters if filters is None else filters)
        log.info("Built model table", rows=len(model), dropped_incomplete=cases.n_dropped)
    return model, cases


def build_long_table(analysis: Analysis | str, base: pd.DataFrame) -> pd.DataFrame:
    """Long-format table of the analysis' plotting variables."""
    analysis = _resolve(analysis)
    return to_long(base, analysis.variables)


def make_interim(
    analysis: Analysis | str,
    path: str | Path | None = None,
    *,
    directory: Path | None = None,
) -> dict[str, Path]:
    """Build and save base, model and long tables for one analysis."""
    analysis = _resolve(analysis)
    base = build_base_table(analysis, path)
    model, cases = build_model_table(analysis, base)
    long = build_long_table(analysis, base)

    out = {
        "base": save_interim(base, f"{analysis.name}_base.parquet", directory),
        "model": save_interim(model, f"{analysis.name}_model.parquet", directory),
        "long": save_interim(long, f"{analysis.name}_long.parquet", directory),
    }
    if cases.n_dropped:
        report = cases.report().reset_index(names="row")
        out["dropped"] = save_interim(report, f"{analysis.name}_dropped.parquet", directory)
    return out
