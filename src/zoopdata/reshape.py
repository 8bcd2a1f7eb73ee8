from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

import pandas as pd

from .config import LONG_ID_VARS
from .errors import MissingColumnError
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class VariableSpec:
    """Display label and optional transform for one measurement column."""
    label: str
    transform: Optional[Callable[[pd.Series], pd.Series]] = None


def to_long(
    df: pd.DataFrame,
    variables: Mapping[str, VariableSpec],
    id_vars: Sequence[str] = LONG_ID_VARS,
) -> pd.DataFrame:
    """
    Unpivot measurement columns into one row per (sample, variable).

    Args:
        df: Base table (wide)
        variables: Ordered mapping of column name -> VariableSpec
        id_vars: Key fields repeated on every long row

    Returns:
        DataFrame with id_vars + Variable, Value, fancy_label, Transformed_Value.
        Rows with a null Value are dropped. Transformed_Value is the variable's
        transform applied to Value (Value itself when there is no transform).
    """
    names = list(variables)
    id_vars = list(id_vars)
    missing = [c for c in id_vars + names if c not in df.columns]
    if missing:
        raise MissingColumnError(missing, context="wide-to-long reshape")

    raw = df[id_vars + names]
    transformed = raw.copy()
    for name, spec in variables.items():
        if spec.transform is not None:
            transformed[name] = spec.transform(raw[name])

    # both frames share index, id columns and column order, so melt emits
    # their rows in the same sequence
    long = raw.melt(id_vars=id_vars, value_vars=names, var_name="Variable", value_name="Value")
    long["Transformed_Value"] = transformed.melt(
        id_vars=id_vars, value_vars=names, value_name="Transformed_Value"
    )["Transformed_Value"].to_numpy()

    long = long.loc[long["Value"].notna()].reset_index(drop=True)
    long["fancy_label"] = long["Variable"].map({n: s.label for n, s in variables.items()})
    long["Variable"] = pd.Categorical(long["Variable"], categories=names, ordered=True)

    log.debug("Reshaped to long", variables=len(names), rows_wide=len(df), rows_long=len(long))
    return long[id_vars + ["Variable", "Value", "fancy_label", "Transformed_Value"]]
