from __future__ import annotations
import pandas as pd
import pandera.pandas as pa
from pandera.pandas import Column, DataFrameSchema, Check

from .config import MONTHS, SEASONS

# key fields of every base table; measurement columns vary per analysis
schema_base_keys = DataFrameSchema(
    {
        "Date": Column(pa.DateTime, nullable=False),
        "Station": Column("Int64", Check.ge(1), nullable=False),
        "Year": Column(int, Check.ge(1900), required=False),
        "DOY": Column(int, Check.in_range(1, 366), required=False),
        "Month": Column(checks=Check.isin(MONTHS), nullable=False, required=False),
        "Season": Column(checks=Check.isin(SEASONS), nullable=True, required=False),
        "riv_km": Column(float, Check.ge(0), nullable=True, required=False, coerce=True),
    },
    strict=False,
)


def assert_base_keys(df: pd.DataFrame) -> pd.DataFrame:
    """Validate key fields, collecting every failure before raising SchemaErrors."""
    return schema_base_keys.validate(df, lazy=True)
