from __future__ import annotations
from typing import Iterable

import pandas as pd

from .config import KEYS
from .errors import MissingColumnError
from .utils.logging import get_logger

log = get_logger(__name__)

ABUNDANCE_SUFFIX = "_Abundance"


def normalize_name(name: str) -> str:
    """
    Normalize one column name into the controlled vocabulary.

    Rules, applied in this order: space -> "_", "." -> "_", drop "?",
    "%" -> "pct", then strip a trailing "_Abundance".
    """
    out = (
        str(name)
        .replace(" ", "_")
        .replace(".", "_")
        .replace("?", "")
        .replace("%", "pct")
    )
    # repeated so that normalizing twice is a no-op
    while out.endswith(ABUNDANCE_SUFFIX):
        out = out[: -len(ABUNDANCE_SUFFIX)]
    return out


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize every column name of df (see normalize_name).

    Args:
        df: Input DataFrame

    Returns:
        Copy of df with normalized column names
    """
    df = df.copy()
    new = [normalize_name(c) for c in df.columns]
    renamed = {str(old): n for old, n in zip(df.columns, new) if str(old) != n}
    if renamed:
        log.debug("Normalized column names", renamed=len(renamed))
    dupes = sorted({n for n in new if new.count(n) > 1})
    if dupes:
        log.warning("Column names collide after normalization", columns=dupes)
    df.columns = new
    return df


def require_keys(df: pd.DataFrame, keys: Iterable[str] = KEYS) -> pd.DataFrame:
    """
    Check that df carries the key columns downstream steps rely on.

    Raises:
        MissingColumnError: listing every absent key
    """
    missing = [k for k in keys if k not in df.columns]
    if missing:
        raise MissingColumnError(missing, context="normalized station table")
    return df


def harmonize_ids(df: pd.DataFrame, id_col: str = "station") -> pd.DataFrame:
    """
    Strip surrounding whitespace from station codes so " S2" and "S2" share a rank.

    Numeric codes are left untouched.
    """
    df = df.copy()
    if id_col in df.columns and not pd.api.types.is_numeric_dtype(df[id_col]):
        df[id_col] = df[id_col].astype("string").str.strip()
    return df
