"""
Per-analysis column contracts.

Each analysis declares its own ordered list of (source -> output) columns.
Two analyses working from the same normalized table may keep different
subsets and renames, so a Selection is never shared implicitly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
import pandas as pd

from .errors import MissingColumnError
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    source: str
    output: str
    required: bool = True


def col(source: str, output: str | None = None, *, required: bool = True) -> ColumnSpec:
    """Shorthand for ColumnSpec; output defaults to the source name."""
    return ColumnSpec(source, output or source, required)


@dataclass(frozen=True)
class Selection:
    name: str
    columns: tuple[ColumnSpec, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        outputs = [c.output for c in self.columns]
        dupes = sorted({o for o in outputs if outputs.count(o) > 1})
        if dupes:
            raise ValueError(f"Selection {self.name!r} declares duplicate output columns: {dupes}")

    @property
    def outputs(self) -> list[str]:
        return [c.output for c in self.columns]


def validate_selection(columns: Iterable[str] | pd.DataFrame, selection: Selection) -> list[str]:
    """
    Check a selection against the normalized column names.

    Returns:
        The absent optional source names.

    Raises:
        MissingColumnError: listing every absent required source name
    """
    available = set(columns.columns if isinstance(columns, pd.DataFrame) else columns)
    missing_required = [c.source for c in selection.columns if c.required and c.source not in available]
    if missing_required:
        raise MissingColumnError(missing_required, context=f"selection {selection.name!r}")
    return [c.source for c in selection.columns if not c.required and c.source not in available]


def project(df: pd.DataFrame, selection: Selection) -> pd.DataFrame:
    """
    Select, rename and order columns as the selection declares.

    Absent optional columns come back as all-null float columns.

    Returns:
        New DataFrame with exactly selection.outputs as columns, in order
    """
    absent = validate_selection(df, selection)
    if absent:
        log.warning("Optional columns absent; filled with nulls", selection=selection.name, columns=absent)
    out = pd.DataFrame(index=df.index)
    for spec in selection.columns:
        out[spec.output] = df[spec.source] if spec.source in df.columns else np.nan
    log.debug("Projected columns", selection=selection.name, columns=len(out.columns), rows=len(out))
    return out.reset_index(drop=True)
