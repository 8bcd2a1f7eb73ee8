import numpy as np
import pandas as pd
import pytest

from zoopdata.errors import MissingColumnError
from zoopdata.reshape import VariableSpec, to_long
from zoopdata.transform import log1p_transform, log_transform


@pytest.fixture
def wide():
    return pd.DataFrame({
        "Date": pd.to_datetime(["2014-03-12", "2014-07-15", "2014-10-02"]),
        "Station": pd.array([1, 2, 3], dtype="Int64"),
        "Year": [2014, 2014, 2014],
        "Season": ["Spring", "Summer", "Fall"],
        "riv_km": [20.0, 45.0, 62.0],
        "Turb": [12.0, np.nan, 9.0],
        "Fish": [0.0, 3.4, np.nan],
        "H": [1.1, 1.6, 1.2],
    })


VARIABLES = {
    "Turb": VariableSpec("Turbidity (NTU)", log_transform),
    "Fish": VariableSpec("Fish CPUE", log1p_transform),
    "H": VariableSpec("Shannon diversity (H)"),
}


def test_long_rows_equal_non_null_cells(wide):
    long = to_long(wide, VARIABLES)
    assert len(long) == int(wide[list(VARIABLES)].notna().sum().sum())
    assert list(long.columns) == [
        "Date", "Station", "Year", "Season", "riv_km", "Variable", "Value", "fancy_label", "Transformed_Value",
    ]
    assert long["Value"].notna().all()


def test_labels_and_transforms_stay_with_their_variable(wide):
    long = to_long(wide, VARIABLES)
    for name, spec in VARIABLES.items():
        part = long[long["Variable"] == name]
        assert (part["fancy_label"] == spec.label).all()
        expected = spec.transform(part["Value"]) if spec.transform else part["Value"]
        assert np.allclose(part["Transformed_Value"].to_numpy(), expected.to_numpy())


def test_key_fields_carried_per_row(wide):
    long = to_long(wide, VARIABLES)
    fish = long[long["Variable"] == "Fish"]
    assert fish["Station"].tolist() == [1, 2]
    assert fish["Value"].tolist() == [0.0, 3.4]


def test_variable_order_follows_declaration(wide):
    long = to_long(wide, {"H": VARIABLES["H"], "Turb": VARIABLES["Turb"]})
    assert list(long["Variable"].cat.categories) == ["H", "Turb"]
    assert long["Variable"].iloc[0] == "H"


def test_unknown_variable(wide):
    with pytest.raises(MissingColumnError):
        to_long(wide, {"SEI": VariableSpec("SEI")})


def test_transform_rejects_out_of_domain_values(wide):
    with pytest.raises(ValueError):
        to_long(wide, {"Fish": VariableSpec("Fish CPUE", log_transform)})
