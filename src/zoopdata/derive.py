"""
Derived fields of the station table.

- Station: ordinal rank 1..K of the raw station codes present in the data.
- Calendar fields from the sample date: Year, Yearf, Month, DOY.
- Season as an ordered categorical (Spring < Summer < Fall).

Station ranks are recomputed from whatever rows are loaded. If a station is
absent from an input file, every rank above it shifts down by one.
"""
from __future__ import annotations
from typing import Hashable, Iterable

import pandas as pd

from .config import MONTHS, SEASONS
from .errors import ParseError
from .utils.logging import get_logger

log = get_logger(__name__)


def _natural_order(codes: list) -> list:
    """Numeric-looking codes sort by value, anything else as text."""
    values = pd.to_numeric(pd.Series(codes, dtype=object), errors="coerce")
    if len(codes) and values.notna().all():
        return [c for _, c in sorted(zip(values.tolist(), codes), key=lambda t: (t[0], str(t[1])))]
    return sorted(codes, key=str)


def station_ranks(codes: Iterable[Hashable]) -> dict:
    """
    Map each distinct station code to its dense rank (1-based) in natural order.

    An empty input gives an empty mapping.
    """
    distinct = pd.Series(list(codes), dtype=object).dropna().unique().tolist()
    return {code: rank for rank, code in enumerate(_natural_order(distinct), start=1)}


def recode_stations(df: pd.DataFrame, code_col: str = "station", out_col: str = "Station") -> pd.DataFrame:
    """
    Add the ordinal station rank as out_col.

    Args:
        df: Normalized station table
        code_col: Column holding the raw station codes
        out_col: Name of the ordinal column to add

    Returns:
        Copy of df with an Int64 rank column

    Raises:
        ParseError: if any row has no station code
    """
    unranked = df.index[df[code_col].isna()]
    if len(unranked):
        raise ParseError(f"{len(unranked)} rows have no {code_col!r} code (rows {unranked.tolist()[:10]})")
    df = df.copy()
    mapping = station_ranks(df[code_col])
    df[out_col] = df[code_col].astype(object).map(mapping).astype("Int64")
    log.info("Recoded stations", stations=len(mapping), ranks={str(k): v for k, v in mapping.items()})
    return df


def as_season(values: pd.Series) -> pd.Series:
    """Ordered Season categorical; unknown labels are a parse error."""
    labels = values.astype("string").str.strip()
    unknown = sorted(set(labels.dropna()) - set(SEASONS))
    if unknown:
        raise ParseError(f"Unknown season labels {unknown}; expected {SEASONS}")
    return pd.Series(
        pd.Categorical(labels.to_numpy(dtype=object, na_value=None), categories=SEASONS, ordered=True),
        index=values.index,
        name=values.name,
    )


def add_calendar_fields(df: pd.DataFrame, date_col: str = "date", season_col: str = "Season") -> pd.DataFrame:
    """
    Derive calendar fields from the sample date.

    Adds Year (int), Yearf (categorical label of Year), Month (ordered Jan..Dec,
    all twelve levels kept) and DOY (1..366). A source Season column, when
    present, is converted to the ordered Spring < Summer < Fall categorical.
    """
    df = df.copy()
    dates = pd.to_datetime(df[date_col])
    if dates.isna().any():
        raise ParseError(f"{int(dates.isna().sum())} rows have no {date_col!r}")

    if "Year" in df.columns:
        disagree = int((pd.to_numeric(df["Year"], errors="coerce") != dates.dt.year).sum())
        if disagree:
            log.warning("Source Year differs from sample date; using the date", rows=disagree)

    df["Year"] = dates.dt.year.astype("int64")
    df["Yearf"] = pd.Categorical(df["Year"].astype(str), categories=sorted(df["Year"].astype(str).unique()))
    df["Month"] = pd.Categorical(
        dates.dt.month.map(dict(enumerate(MONTHS, start=1))), categories=MONTHS, ordered=True
    )
    df["DOY"] = dates.dt.dayofyear.astype("int64")
    if season_col in df.columns:
        df[season_col] = as_season(df[season_col])
    return df
