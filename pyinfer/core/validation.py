"""
Input validation utilities for pyinfer.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Sequence

import numpy as np
import pandas as pd

from pyinfer.core.compute.tolerances import P_SUM_TOLERANCE
from pyinfer.core.exceptions import (
    InvalidRoleError,
    ParameterValueError,
    ValidationError,
)


def check_dataframe(data: Any, name: str = "data") -> pd.DataFrame:
    """
    Verify input is a non-empty pandas DataFrame.

    Raises:
        InvalidRoleError: If data is not a DataFrame or has no rows
    """
    if not isinstance(data, pd.DataFrame):
        raise InvalidRoleError(
            f"{name}: expected a pandas DataFrame, got {type(data).__name__}"
        )
    if len(data) == 0:
        raise InvalidRoleError(f"{name}: DataFrame has no rows")
    return data


def check_columns_exist(
    data: pd.DataFrame,
    columns: Sequence[str],
    role: str,
) -> None:
    """
    Verify every named column is present in the DataFrame.

    Raises:
        InvalidRoleError: Naming the first missing column and the
            available columns
    """
    available = tuple(str(c) for c in data.columns)
    for col in columns:
        if col not in data.columns:
            raise InvalidRoleError(
                f"{role} column {col!r} not found in data. "
                f"Available: {list(available)}",
                column=col,
                available=available,
            )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Raises:
        ValidationError: If value is not an integer or is < 1
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ValidationError(f"{name} must be >= 1, got {value}")
    return int(value)


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, (bool, np.bool_)):
        raise ParameterValueError(
            f"{name} must be a number, got bool", parameter=name, value=value
        )
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParameterValueError(
            f"{name} must be a single number, got {value!r}",
            parameter=name,
            value=value,
        ) from e


def check_real_scalar(value: Any, name: str) -> float:
    """
    Verify value is a real number that is not NaN. Infinities pass.

    Raises:
        ParameterValueError: If value is not numeric or is NaN
    """
    out = _as_float(value, name)
    if math.isnan(out):
        raise ParameterValueError(
            f"{name} is undefined (NaN)", parameter=name, value=value
        )
    return out


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number.

    Raises:
        ParameterValueError: If value is not numeric, missing or infinite
    """
    out = _as_float(value, name)
    if not math.isfinite(out):
        raise ParameterValueError(
            f"{name} must be finite, got {out}", parameter=name, value=value
        )
    return out


def check_probability(value: Any, name: str = "p") -> float:
    """
    Verify value is a finite probability in [0, 1].

    Raises:
        ParameterValueError: If value is missing, infinite or out of range
    """
    out = check_finite_scalar(value, name)
    if not 0.0 <= out <= 1.0:
        raise ParameterValueError(
            f"{name} must be in [0, 1], got {out}", parameter=name, value=value
        )
    return out


def check_probability_mapping(
    p: Mapping,
    levels: Sequence[Any],
    name: str = "p",
    tol: float = P_SUM_TOLERANCE,
) -> dict[Any, float]:
    """
    Validate a level -> probability mapping against the observed levels.

    Every observed level must be named exactly once, every value must be
    a finite probability, and the values must sum to one within `tol`.

    Returns:
        dict ordered like `levels`

    Raises:
        ParameterValueError: On missing/extra levels, non-finite or
            out-of-range values, or a sum further than `tol` from one
    """
    keys = list(p.keys())
    missing = [lv for lv in levels if lv not in p]
    extra = [k for k in keys if k not in set(levels)]
    if missing or extra:
        raise ParameterValueError(
            f"{name} must give a probability for each response level "
            f"{list(levels)}; missing {missing}, unknown {extra}",
            parameter=name,
            value=dict(p),
        )

    values: dict[Any, float] = {}
    for lv in levels:
        raw = p[lv]
        if raw is None or (isinstance(raw, float) and math.isnan(raw)):
            raise ParameterValueError(
                f"{name}[{lv!r}] is missing", parameter=name, value=dict(p)
            )
        values[lv] = check_probability(raw, f"{name}[{lv!r}]")

    total = math.fsum(values.values())
    if abs(total - 1.0) > tol:
        raise ParameterValueError(
            f"{name} must sum to 1 (tolerance {tol:.3g}), got {total!r}",
            parameter=name,
            value=total,
        )
    return values
