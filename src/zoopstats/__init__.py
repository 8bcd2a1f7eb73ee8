"""
zoopstats - model fitting and figures for the estuary zooplankton notebooks.

Works on the tables built by zoopdata:
- models: one formula fitted per response variable (statsmodels mixed models / OLS / GAM)
- figures: faceted plots, residual diagnostics, fixed-size PNG + PDF output
"""

from .models import fit_by_response, coefficient_table, anova_table, fit_gam
from .figures import save_figure, plot_long_facets, plot_residual_diagnostics

__all__ = [
    "fit_by_response", "coefficient_table", "anova_table", "fit_gam",
    "save_figure", "plot_long_facets", "plot_residual_diagnostics",
]

__version__ = "0.1.0"
