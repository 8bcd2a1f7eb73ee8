from __future__ import annotations
import numpy as np
import pandas as pd


def log_transform(x: pd.Series) -> pd.Series:
    """
    Natural log for strictly positive measurements (turbidity, chlorophyll, ...).
    Nulls stay null.
    """
    x = pd.to_numeric(x, errors="raise").astype(float)
    if (x.dropna() <= 0).any():
        raise ValueError(f"log_transform requires positive inputs ({x.name}).")
    return np.log(x)


def log1p_transform(x: pd.Series) -> pd.Series:
    """
    log(1 + x) for nonnegative densities and catch rates that include zeros.
    """
    x = pd.to_numeric(x, errors="raise").astype(float)
    if (x.dropna() < 0).any():
        raise ValueError(f"log1p_transform requires nonnegative inputs ({x.name}).")
    return np.log1p(x)
