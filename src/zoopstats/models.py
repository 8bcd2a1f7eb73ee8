"""
Thin wrappers over statsmodels for the notebook model families.

- fit_by_response: one formula, fitted separately to every response variable
  of a long table (linear mixed model with station random intercepts, or OLS).
- coefficient_table / anova_table: tidy summaries of the fitted models.
- fit_gam: penalized B-spline GAM (statsmodels GLMGam) on a wide table.

Estimation itself (REML, penalized splines) is statsmodels' business; these
functions only deliver correctly typed rows and collect the results.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, Literal

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from statsmodels.gam.api import BSplines, GLMGam

from zoopdata.utils.logging import get_logger

log = get_logger(__name__)

__all__ = [
    "fit_by_response",
    "coefficient_table",
    "anova_table",
    "fit_gam",
]


def _plain_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    """Nullable extension columns (Int64, string) -> numpy dtypes the formula layer understands."""
    out = df.copy()
    for c in out.columns:
        s = out[c]
        if isinstance(s.dtype, pd.CategoricalDtype) or not pd.api.types.is_extension_array_dtype(s):
            continue
        if pd.api.types.is_numeric_dtype(s):
            out[c] = s.to_numpy(dtype="float64", na_value=np.nan)
        else:
            out[c] = s.astype(object)
    return out


def _formula_columns(formula: str, columns: Iterable[str]) -> list[str]:
    """Columns of the data named anywhere in a formula, e.g. "np.log(Turb) ~ C(Season)" -> Turb, Season."""
    names = set(re.findall(r"[A-Za-z_][A-Za-z0-9_]*", formula))
    return [c for c in columns if c in names]


def _complete_for(data: pd.DataFrame, formula: str, extra: Iterable[str] = ()) -> pd.DataFrame:
    """Drop rows with a null in any column the formula (or extra) uses."""
    used = _formula_columns(formula, data.columns) + [c for c in extra if c in data.columns]
    return data.dropna(subset=used).reset_index(drop=True)


def _fit_one(data: pd.DataFrame, formula: str, kind: str, groups: str, label: str):
    if kind == "lmm":
        data = _complete_for(data, formula, [groups])
        data[groups] = data[groups].astype(str)
        model = smf.mixedlm(formula, data, groups=groups)
    elif kind == "ols":
        data = _complete_for(data, formula)
        model = smf.ols(formula, data)
    else:
        raise ValueError(f"Unknown model kind: {kind!r} (expected 'lmm' or 'ols')")
    n, p = model.exog.shape
    if n <= p:
        raise ValueError(f"{label}: {n} rows is too few for {p} fixed-effect parameters")
    if kind == "lmm":
        return model.fit(reml=True)
    return model.fit()


def fit_by_response(
    long_df: pd.DataFrame,
    rhs: str,
    *,
    kind: Literal["lmm", "ols"] = "lmm",
    groups: str = "Station",
    value_col: str = "Value",
) -> Dict[str, object]:
    """
    Fit `value_col ~ rhs` separately for each Variable of a long table.

    Parameters
    ----------
    long_df : long table (zoopdata.to_long output)
    rhs : right-hand side of the model formula, e.g. "Season + Year"
    kind : "lmm" for a mixed model with random intercepts by `groups`, "ols" otherwise
    groups : grouping column for the random intercept
    value_col : "Value" or "Transformed_Value"

    Returns
    -------
    dict of Variable -> fitted statsmodels results, in Variable order
    """
    data = _plain_dtypes(long_df)
    formula = f"{value_col} ~ {rhs}"
    fits = {}
    for variable, d in data.groupby("Variable", observed=True, sort=True):
        fit = _fit_one(d.reset_index(drop=True), formula, kind, groups, label=str(variable))
        fits[str(variable)] = fit
        log.info("Fitted response", response=str(variable), kind=kind, formula=formula, rows=int(fit.nobs))
    return fits


def coefficient_table(fits: Dict[str, object]) -> pd.DataFrame:
    """Stack the coefficient tables of several fits, one block per response."""
    frames = []
    for response, fit in fits.items():
        frames.append(pd.DataFrame({
            "response": response,
            "term": fit.params.index,
            "estimate": fit.params.to_numpy(),
            "std_err": fit.bse.reindex(fit.params.index).to_numpy(),
            "p_value": fit.pvalues.reindex(fit.params.index).to_numpy(),
        }))
    if not frames:
        return pd.DataFrame(columns=["response", "term", "estimate", "std_err", "p_value"])
    return pd.concat(frames, ignore_index=True)


def anova_table(fit, typ: int = 2) -> pd.DataFrame:
    """ANOVA table of an OLS fit (type II by default)."""
    if not isinstance(fit.model, sm.OLS):
        raise TypeError("anova_table needs an OLS fit; use coefficient_table for mixed models")
    return sm.stats.anova_lm(fit, typ=typ)


def fit_gam(
    df: pd.DataFrame,
    formula: str,
    smoothers: Iterable[str],
    *,
    df_spline: int = 4,
    degree: int = 3,
    alpha: float = 1.0,
):
    """
    Gaussian GAM: parametric terms from `formula`, a penalized B-spline per smoother.

    Rows with a null in any formula or smoother column are dropped before
    fitting, so the spline basis and the design matrix share their rows.
    """
    smoothers = list(smoothers)
    data = _complete_for(_plain_dtypes(df), formula, smoothers)
    k = len(smoothers)
    splines = BSplines(data[smoothers], df=[df_spline] * k, degree=[degree] * k)
    model = GLMGam.from_formula(formula, data=data, smoother=splines, alpha=[alpha] * k)
    log.info("Fitting GAM", formula=formula, smoothers=smoothers, rows=len(data))
    return model.fit()
