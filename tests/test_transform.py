import numpy as np
import pandas as pd
import pytest
from zoopdata.transform import log_transform, log1p_transform


def test_log1p_keeps_zeros_and_nulls():
    s = pd.Series([0.0, np.e - 1, np.nan], name="Fish")
    out = log1p_transform(s)
    assert out.iloc[0] == 0.0
    assert np.isclose(out.iloc[1], 1.0)
    assert np.isnan(out.iloc[2])
    assert out.index.equals(s.index)


def test_log_rejects_nonpositive():
    with pytest.raises(ValueError):
        log_transform(pd.Series([1.0, 0.0], name="Turb"))
    assert np.allclose(log_transform(pd.Series([1.0, np.e])), [0.0, 1.0])


def test_negative_inputs_rejected():
    with pytest.raises(ValueError):
        log1p_transform(pd.Series([-0.5]))
