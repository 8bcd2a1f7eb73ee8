"""Shared fixtures: a small station table shaped like the raw workbook."""
from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

RIV_KM = {"S2": 20.0, "S4": 45.0, "S5": 62.0, "S8": 90.0}


@pytest.fixture
def raw_station_frame() -> pd.DataFrame:
    """Eight samples, as read_station_workbook returns them (headers not yet normalized)."""
    stations = ["S5", "S2", "S8", "S4", "S2", "S5", "S4", "S8"]
    return pd.DataFrame(
        {
            "date": pd.to_datetime([
                "2014-03-12", "2014-05-20", "2014-07-15", "2014-08-04",
                "2014-10-02", "2015-04-21", "2015-07-09", "2015-10-14",
            ]),
            "Year": [2014, 2014, 2014, 2014, 2014, 2015, 2015, 2015],
            "station": pd.array(stations, dtype="string"),
            "Season": pd.array(
                ["Spring", "Spring", "Summer", "Summer", "Fall", "Spring", "Summer", "Fall"], dtype="string"
            ),
            "riv km": [RIV_KM[s] for s in stations],
            "Temp": [9.5, 16.0, 25.1, 26.3, 18.0, 12.2, 24.8, 15.5],
            "Sal": [3.0, 22.0, 11.0, 8.0, 25.0, 12.0, 14.0, 2.0],
            "Turb": [12.0, 8.0, 20.0, 15.0, 9.0, 30.0, 11.0, 7.0],
            "Chl a": [4.1, 6.2, 12.0, 9.5, 3.3, 5.0, 10.1, 2.8],
            "DO %": [92.0, 88.5, 75.0, 70.2, 95.1, 90.0, 72.4, 97.3],
            "Fish CPUE": [1.2, 0.0, 3.4, np.nan, 2.2, 0.8, 1.5, 0.4],
            "River Herring Abundance": [0.0, 2.0, 5.0, 3.0, 1.0, 0.0, 4.0, 0.0],
            "Combined Density": [1200.0, 3400.0, 5600.0, 4100.0, 2300.0, 1500.0, 4800.0, 900.0],
            "Shannon H": [1.1, 1.4, 1.6, 1.5, 1.2, 1.0, 1.7, 0.9],
            "SEI": [0.31, 0.42, 0.55, 0.47, 0.38, 0.29, 0.51, 0.22],
            "Bosmina Abundance": [10.0, 40.0, 120.0, 80.0, 30.0, 15.0, 95.0, 5.0],
            "Daphnia Abundance": [2.0, 8.0, 30.0, 22.0, 6.0, 1.0, 18.0, 0.0],
            "Diaphanosoma Abundance": [0.0, 1.0, 14.0, 9.0, 2.0, 0.0, 11.0, 0.0],
            "Eurytemora Abundance": [300.0, 900.0, 1500.0, 1200.0, 700.0, 350.0, 1300.0, 200.0],
            "Cyclopoida Abundance": [50.0, 120.0, 260.0, 190.0, 90.0, 60.0, 240.0, 30.0],
            "Rotifera Abundance": [800.0, 2300.0, 3600.0, 2600.0, 1470.0, 1070.0, 3100.0, 660.0],
        }
    )


@pytest.fixture
def write_workbook(tmp_path: Path):
    """Write a frame to an .xlsx file with the given sheet name; returns the path."""

    def _write(df: pd.DataFrame, sheet_name: str = "station_data", name: str = "stations.xlsx") -> Path:
        path = tmp_path / name
        df.to_excel(path, sheet_name=sheet_name, index=False, engine="openpyxl")
        return path

    return _write
