"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np
import pandas as pd


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def two_group_data(rng):
    """Numeric response with a two-level grouping variable."""
    n = 40
    group = np.repeat(["control", "treatment"], n // 2)
    y = np.concatenate([
        rng.normal(10.0, 2.0, n // 2),
        rng.normal(12.0, 2.0, n // 2),
    ])
    return pd.DataFrame({"y": y, "group": group})


@pytest.fixture
def numeric_data(rng):
    """Single numeric response."""
    return pd.DataFrame({"y": rng.normal(5.0, 1.5, 50)})


@pytest.fixture
def survey_data():
    """Categorical response (yes/no) with a categorical explanatory."""
    answer = ["yes"] * 37 + ["no"] * 83
    region = (["north"] * 20 + ["south"] * 17) + (["north"] * 40 + ["south"] * 43)
    return pd.DataFrame({"answer": answer, "region": region})


@pytest.fixture
def three_group_data(rng):
    """Numeric response with a three-level grouping variable."""
    groups = np.repeat(["a", "b", "c"], 15)
    y = rng.normal(0.0, 1.0, 45) + np.repeat([0.0, 0.5, 1.0], 15)
    return pd.DataFrame({"y": y, "g": groups})


@pytest.fixture
def bivariate_data(rng):
    """Two numeric variables with a linear relationship."""
    x = rng.normal(0.0, 1.0, 60)
    y = 2.0 + 1.5 * x + rng.normal(0.0, 0.5, 60)
    return pd.DataFrame({"y": y, "x": x})
