"""
Variable typing and level ordering for DataFrame columns.

Three variable types are recognised:
    numeric      integer and float dtypes
    categorical  object, string and category dtypes
    logical      bool dtypes (behaves as a categorical with levels False, True)

Level order is the single rule used wherever levels are listed:
a pandas Categorical keeps its declared category order; every other
categorical or logical column uses its sorted unique non-missing values.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from pandas.api import types as ptypes

from pyinfer.core.exceptions import InvalidRoleError

NUMERIC = "numeric"
CATEGORICAL = "categorical"
LOGICAL = "logical"

# Abbreviations used in role signatures ("num ~ cat")
_SIGNATURE_CODES = {
    NUMERIC: "num",
    CATEGORICAL: "cat",
    LOGICAL: "cat",
}


def variable_type(series: pd.Series) -> str:
    """Classify a column as numeric, categorical or logical."""
    dtype = series.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return CATEGORICAL
    if ptypes.is_bool_dtype(dtype):
        return LOGICAL
    if ptypes.is_numeric_dtype(dtype):
        return NUMERIC
    if ptypes.is_object_dtype(dtype) or ptypes.is_string_dtype(dtype):
        non_missing = series.dropna()
        if len(non_missing) > 0 and all(isinstance(v, bool) for v in non_missing):
            return LOGICAL
        return CATEGORICAL
    raise InvalidRoleError(
        f"column {series.name!r} has unsupported dtype {dtype}; "
        f"expected numeric, categorical or logical data",
        column=str(series.name),
    )


def variable_levels(series: pd.Series) -> tuple[Any, ...]:
    """
    Levels of a categorical or logical column in natural order.

    Only values present in the column count as levels; a pandas
    Categorical keeps its declared category order but drops categories
    with no rows. Returns an empty tuple for numeric columns.
    """
    vtype = variable_type(series)
    if vtype == NUMERIC:
        return ()
    if isinstance(series.dtype, pd.CategoricalDtype):
        return tuple(series.cat.remove_unused_categories().cat.categories)
    observed = pd.unique(series.dropna())
    try:
        return tuple(sorted(observed))
    except TypeError as e:
        raise InvalidRoleError(
            f"column {series.name!r} mixes value types that cannot be "
            f"ordered into levels",
            column=str(series.name),
        ) from e


def signature_code(vtype: str) -> str:
    """Short code for a variable type in a role signature."""
    return _SIGNATURE_CODES[vtype]
