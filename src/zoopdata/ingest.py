from __future__ import annotations
from pathlib import Path
from typing import Sequence

import pandas as pd

from .config import RAW_STATION_XLSX, SHEET_NAME, STATION_COLUMN_TYPES, COLUMN_TYPE_TOKENS
from .errors import ParseError, SchemaMismatch, SourceNotFound
from .utils.logging import get_logger

log = get_logger(__name__)


def read_station_workbook(
    path: str | Path | None = None,
    *,
    sheet_name: str = SHEET_NAME,
    column_types: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Read the station sheet and type its columns by position.

    Args:
        path: Workbook path (default: config.RAW_STATION_XLSX)
        sheet_name: Sheet holding the station table
        column_types: One of "skip", "date", "numeric", "text" per source column,
            left to right (default: config.STATION_COLUMN_TYPES)

    Returns:
        DataFrame without the skipped columns; rows with no date are dropped.

    Raises:
        SourceNotFound: If the workbook or the sheet does not exist
        SchemaMismatch: If the type list does not match the sheet's width
        ParseError: If a cell cannot be coerced to its column's type
    """
    path = Path(path or RAW_STATION_XLSX)
    types = list(STATION_COLUMN_TYPES if column_types is None else column_types)
    unknown = sorted({t for t in types if t not in COLUMN_TYPE_TOKENS})
    if unknown:
        raise SchemaMismatch(f"Unknown column types {unknown}; expected one of {COLUMN_TYPE_TOKENS}")
    if not path.is_file():
        raise SourceNotFound(f"Station workbook not found: {path}")

    with pd.ExcelFile(path, engine="openpyxl") as book:
        if sheet_name not in book.sheet_names:
            raise SourceNotFound(f"Sheet {sheet_name!r} not found in {path} (sheets: {book.sheet_names})")
        # only empty cells are null; text such as "NA" or "n/a" is kept as written
        raw = book.parse(sheet_name, dtype=object, keep_default_na=False, na_values=[""])

    if raw.shape[1] != len(types):
        raise SchemaMismatch(
            f"{path.name}:{sheet_name} has {raw.shape[1]} columns but {len(types)} column types were declared"
        )

    kept = {}
    date_cols = []
    for col, kind in zip(raw.columns, types):
        if kind == "skip":
            continue
        kept[col] = _coerce(raw[col], kind)
        if kind == "date":
            date_cols.append(col)
    df = pd.DataFrame(kept, index=raw.index)

    if date_cols:
        n_before = len(df)
        df = df.dropna(subset=[date_cols[0]]).reset_index(drop=True)
        if len(df) < n_before:
            log.info("Dropped rows without a date", column=str(date_cols[0]), dropped=n_before - len(df))

    log.info("Loaded station workbook", path=str(path), sheet=sheet_name, rows=len(df), columns=df.shape[1])
    return df


def _coerce(series: pd.Series, kind: str) -> pd.Series:
    """Coerce one column to its declared type, failing on any unparseable cell."""
    if kind == "text":
        return series.astype("string")
    if kind == "date":
        out = pd.to_datetime(series, errors="coerce")
    else:
        out = pd.to_numeric(series, errors="coerce")
    bad = series.notna() & out.isna()
    if bad.any():
        examples = series[bad].astype(str).unique()[:5].tolist()
        rows = (series.index[bad] + 2).tolist()[:5]  # spreadsheet row numbers
        raise ParseError(f"Column {series.name!r}: cannot parse as {kind}: {examples} (sheet rows {rows})")
    return out
