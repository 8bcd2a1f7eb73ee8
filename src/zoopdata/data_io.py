from __future__ import annotations
from pathlib import Path
import pandas as pd
from .config import INTERIM
from .utils.logging import get_logger

log = get_logger(__name__)


def save_interim(df: pd.DataFrame, name: str, directory: Path | None = None) -> Path:
    """
    Save a DataFrame to the interim data directory as a Parquet file.

    Categorical columns (Month, Season, Yearf) keep their levels and order.

    Args:
        df: The DataFrame to save
        name: The filename (without path) for the saved file
        directory: Override for config.INTERIM

    Returns:
        Path: The full path to the saved file
    """
    directory = directory or INTERIM
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    df.to_parquet(path, index=False)
    log.info("Saved interim table", path=str(path), rows=len(df))
    return path


def load_interim(name: str, directory: Path | None = None) -> pd.DataFrame:
    """
    Load a DataFrame from the interim data directory.

    Args:
        name: The filename (without path) to load
        directory: Override for config.INTERIM

    Returns:
        pd.DataFrame: The loaded DataFrame
    """
    return pd.read_parquet((directory or INTERIM) / name)
