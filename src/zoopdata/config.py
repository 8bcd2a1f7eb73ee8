from __future__ import annotations
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
RAW = DATA / "raw"
INTERIM = DATA / "interim"
FIG_DIR = ROOT / "figures"

# raw workbook (adjust to yours)
RAW_STATION_XLSX = RAW / "zooplankton_station_data.xlsx"
SHEET_NAME = "station_data"

# positional column types of the station sheet, left to right.
# header names are not consulted when typing columns.
STATION_COLUMN_TYPES: list[str] = (
    ["skip", "date", "numeric", "text"]
    + ["skip"] * 2
    + ["skip"]
    + ["numeric"] * 10
    + ["text"]
    + ["numeric"] * 47
    + ["text"]
    + ["numeric"] * 12
)
COLUMN_TYPE_TOKENS = ("skip", "date", "numeric", "text")

# keys every normalized table must carry
KEYS = ["date", "station"]

SEASONS = ["Spring", "Summer", "Fall"]  # no winter sampling
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# key fields carried onto every long-format row
LONG_ID_VARS = ["Date", "Station", "Year", "Season", "riv_km"]

# alternative reduced datasets
LOW_SALINITY_THRESHOLDS = (5.0, 10.0)
UPSTREAM_RIV_KM = 60.0  # spring samples at or above this are "upstream"

# figure sizes in inches (width, height)
FIG_SMALL = (5.0, 3.0)
FIG_PAGE = (6.85, 4.9)
FIG_FORMATS = ("png", "pdf")
FIG_DPI = 300
