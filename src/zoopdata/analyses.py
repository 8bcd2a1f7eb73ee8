"""
Analysis contracts: which columns each notebook keeps, under which names,
which fields must be complete for its models, and which reduced-data
filters it applies.

Source names are the normalized workbook headers, e.g. "Chl a" -> "Chl_a",
"DO %" -> "DO_pct", "Bosmina Abundance" -> "Bosmina".
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .reshape import VariableSpec
from .selection import Selection, col
from .transform import log1p_transform, log_transform

KEY_COLUMNS = (
    col("date", "Date"),
    col("Station"),
    col("Year"),
    col("Yearf"),
    col("Month"),
    col("Season"),
    col("DOY"),
    col("riv_km"),
)

ENV_COLUMNS = (
    col("Temp"),
    col("Sal"),
    col("Turb"),
    col("Chl_a", "Chl"),
    col("DO_pct", "DO", required=False),
)

TAXA_COLUMNS = (
    col("Bosmina", "Bosm"),
    col("Daphnia", "Daph"),
    col("Diaphanosoma", "Diaph"),
    col("Eurytemora", "Eury"),
    col("Cyclopoida", "Cycl"),
    col("Rotifera", "Rot"),
)

ENV_VARIABLES = {
    "Temp": VariableSpec("Temperature (°C)"),
    "Sal": VariableSpec("Salinity (PSU)"),
    "Turb": VariableSpec("Turbidity (NTU)", log_transform),
    "Chl": VariableSpec("Chlorophyll a (µg/L)", log_transform),
    "Fish": VariableSpec("Fish CPUE", log1p_transform),
}

TAXA_VARIABLES = {
    "Bosm": VariableSpec("Bosmina", log1p_transform),
    "Daph": VariableSpec("Daphnia", log1p_transform),
    "Diaph": VariableSpec("Diaphanosoma", log1p_transform),
    "Eury": VariableSpec("Eurytemora", log1p_transform),
    "Cycl": VariableSpec("Cyclopoida", log1p_transform),
    "Rot": VariableSpec("Rotifera", log1p_transform),
}


@dataclass(frozen=True)
class Analysis:
    name: str
    selection: Selection
    complete_fields: tuple[str, ...]
    filters: tuple[str, ...] = ()
    variables: dict = field(default_factory=dict)


ANALYSES: dict[str, Analysis] = {}


def register(analysis: Analysis) -> Analysis:
    ANALYSES[analysis.name] = analysis
    return analysis


# linear mixed models of community metrics, station as random effect
register(Analysis(
    name="community_lmm",
    selection=Selection("community_lmm", (
        *KEY_COLUMNS,
        *ENV_COLUMNS,
        col("Fish_CPUE", "Fish"),
        col("Combined_Density", "Density"),
        col("Shannon_H", "H"),
        *TAXA_COLUMNS,
    )),
    complete_fields=("Temp", "Sal", "Turb", "Chl", "Fish", "Density", "H"),
    variables={
        **ENV_VARIABLES,
        "Density": VariableSpec("Zooplankton density (ind./m³)", log1p_transform),
        "H": VariableSpec("Shannon diversity (H)"),
    },
))

# GAMs of the community index against environmental smooths
register(Analysis(
    name="community_gam",
    selection=Selection("community_gam", (
        *KEY_COLUMNS,
        *ENV_COLUMNS,
        col("Discharge", "Q", required=False),
        col("Fish_CPUE", "Fish"),
        col("Combined_Density", "Density"),
        col("SEI"),
        *TAXA_COLUMNS,
    )),
    complete_fields=("Temp", "Sal", "Turb", "Chl", "Fish", "SEI"),
    filters=("sal_gt_5",),
    variables={**ENV_VARIABLES, "SEI": VariableSpec("SEI"), **TAXA_VARIABLES},
))

# herring predation models on the reduced (saline, no spring upstream) data
register(Analysis(
    name="herring_gam",
    selection=Selection("herring_gam", (
        *KEY_COLUMNS,
        *ENV_COLUMNS,
        col("Fish_CPUE", "Fish"),
        col("River_Herring", "RH"),
        col("Combined_Density", "Zoopl"),
        col("Shannon_H", "Diversity"),
    )),
    complete_fields=("Temp", "Sal", "Turb", "Chl", "RH", "Zoopl", "Diversity"),
    filters=("sal_gt_10", "no_spring_upstream"),
    variables={
        "RH": VariableSpec("River herring CPUE", log1p_transform),
        "Zoopl": VariableSpec("Zooplankton density (ind./m³)", log1p_transform),
        "Diversity": VariableSpec("Shannon diversity (H)"),
        "Sal": VariableSpec("Salinity (PSU)"),
    },
))


def get_analysis(name: str) -> Analysis:
    try:
        return ANALYSES[name]
    except KeyError:
        raise KeyError(f"Unknown analysis {name!r}; known: {sorted(ANALYSES)}") from None
