from .ingest import read_station_workbook
from .cleaning import normalize_name, normalize_columns, require_keys
from .derive import station_ranks, recode_stations, add_calendar_fields
from .selection import ColumnSpec, Selection, col, project, validate_selection
from .filters import CompleteCases, complete_cases, subset_salinity, drop_spring_upstream, apply_filters
from .reshape import VariableSpec, to_long
from .analyses import Analysis, ANALYSES, get_analysis
from .pipeline import prepare_station_data, build_base_table, build_model_table, build_long_table, make_interim
from .errors import (
    PipelineError, SourceNotFound, SchemaMismatch, ParseError,
    MissingColumnError, EmptyResultWarning,
)

__all__ = [
    "read_station_workbook",
    "normalize_name",
    "normalize_columns",
    "require_keys",
    "station_ranks",
    "recode_stations",
    "add_calendar_fields",
    "ColumnSpec",
    "Selection",
    "col",
    "project",
    "validate_selection",
    "CompleteCases",
    "complete_cases",
    "subset_salinity",
    "drop_spring_upstream",
    "apply_filters",
    "VariableSpec",
    "to_long",
    "Analysis",
    "ANALYSES",
    "get_analysis",
    "prepare_station_data",
    "build_base_table",
    "build_model_table",
    "build_long_table",
    "make_interim",
    "PipelineError",
    "SourceNotFound",
    "SchemaMismatch",
    "ParseError",
    "MissingColumnError",
    "EmptyResultWarning",
]
