"""
Row filters that produce the reduced datasets used for model fitting.

- complete_cases: drop rows with a null in any required field, and report
  exactly which rows went and why (the handful of dropped rows is inspected
  by hand before fitting).
- subset_salinity: keep rows with salinity strictly above a threshold.
- drop_spring_upstream: remove spring samples from the upstream reach.

The salinity and spring-upstream filters are independent; analyses pick any
combination of them through FILTERS / apply_filters.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable

import pandas as pd

from .config import LOW_SALINITY_THRESHOLDS, UPSTREAM_RIV_KM
from .errors import EmptyResultWarning, MissingColumnError
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class CompleteCases:
    rows: pd.DataFrame     # retained rows
    dropped: pd.DataFrame  # removed rows, original index kept
    missing: pd.Series     # per dropped row: required fields that were null
    required: list[str]

    @property
    def n_dropped(self) -> int:
        return len(self.dropped)

    def report(self, id_cols: Iterable[str] = ("Date", "Station")) -> pd.DataFrame:
        """One line per dropped row: its identifying fields and the null fields."""
        cols = [c for c in id_cols if c in self.dropped.columns]
        out = self.dropped[cols].copy()
        out["missing"] = self.missing.map(", ".join)
        return out


def _warn_if_empty(df: pd.DataFrame, step: str) -> pd.DataFrame:
    if df.empty:
        log.warning("Filter produced no rows", step=step)
        warnings.warn(f"{step} produced an empty table", EmptyResultWarning, stacklevel=3)
    return df


def complete_cases(df: pd.DataFrame, required: Iterable[str]) -> CompleteCases:
    """
    Keep rows where every required field is non-null.

    Args:
        df: Base table
        required: Fields that must be present for the model family in use

    Returns:
        CompleteCases with retained rows (index reset), dropped rows and reasons

    Raises:
        MissingColumnError: if a required field is not a column of df
    """
    required = list(required)
    absent = [c for c in required if c not in df.columns]
    if absent:
        raise MissingColumnError(absent, context="complete-case fields")

    nulls = df[required].isna()
    keep = ~nulls.any(axis=1)
    dropped = df.loc[~keep].copy()
    flags = nulls.loc[~keep]
    missing = pd.Series(
        [[c for c, isnull in zip(required, row) if isnull] for row in flags.itertuples(index=False)],
        index=flags.index,
        dtype=object,
    )
    rows = df.loc[keep].reset_index(drop=True)

    log.info("Complete cases", rows_before=len(df), rows_after=len(rows), dropped=len(dropped))
    for idx, fields in missing.items():
        log.info("Dropped incomplete row", row=str(idx), missing=fields)
    _warn_if_empty(rows, "complete_cases")
    return CompleteCases(rows=rows, dropped=dropped, missing=missing, required=required)


def subset_salinity(df: pd.DataFrame, threshold: float, column: str = "Sal") -> pd.DataFrame:
    """Keep rows with column > threshold; null salinity is dropped."""
    if column not in df.columns:
        raise MissingColumnError([column], context="salinity subset")
    out = df.loc[df[column] > threshold].reset_index(drop=True)
    log.info("Salinity subset", threshold=threshold, rows_before=len(df), rows_after=len(out))
    return _warn_if_empty(out, f"{column} > {threshold:g}")


def drop_spring_upstream(
    df: pd.DataFrame,
    *,
    upstream_km: float = UPSTREAM_RIV_KM,
    season_col: str = "Season",
    km_col: str = "riv_km",
) -> pd.DataFrame:
    """Drop Spring samples taken at or above upstream_km river kilometers."""
    absent = [c for c in (season_col, km_col) if c not in df.columns]
    if absent:
        raise MissingColumnError(absent, context="spring-upstream filter")
    upstream_spring = (df[season_col] == "Spring") & (df[km_col] >= upstream_km)
    out = df.loc[~upstream_spring].reset_index(drop=True)
    log.info("Dropped spring upstream samples", upstream_km=upstream_km, dropped=len(df) - len(out))
    return _warn_if_empty(out, "drop_spring_upstream")


FILTERS: dict[str, Callable[[pd.DataFrame], pd.DataFrame]] = {
    **{f"sal_gt_{t:g}": partial(subset_salinity, threshold=t) for t in LOW_SALINITY_THRESHOLDS},
    "no_spring_upstream": drop_spring_upstream,
}


def apply_filters(df: pd.DataFrame, names: Iterable[str]) -> pd.DataFrame:
    """Apply named filters from FILTERS in the given order."""
    for name in names:
        try:
            fn = FILTERS[name]
        except KeyError:
            raise KeyError(f"Unknown filter {name!r}; known: {sorted(FILTERS)}") from None
        df = fn(df)
    return df
