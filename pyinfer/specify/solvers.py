"""
specify(): declare the response and explanatory roles of a dataset.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd

from pyinfer.core.exceptions import InvalidRoleError
from pyinfer.specify._formula import parse_formula
from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)


def _as_tuple(explanatory: str | Sequence[str] | None) -> tuple[str, ...]:
    if explanatory is None:
        return ()
    if isinstance(explanatory, str):
        return (explanatory,)
    return tuple(explanatory)


def specify(
    data: pd.DataFrame,
    formula: str | None = None,
    *,
    response: str | None = None,
    explanatory: str | Sequence[str] | None = None,
    success: Any = None,
    paired: bool = False,
) -> InferData:
    """
    Declare which columns are the response and explanatory variables.

    Parameters
    ----------
    data : pandas.DataFrame
        Input data. Never modified; the result holds its own copy of the
        role columns.
    formula : str or None
        Role formula "response ~ explanatory" (see pyinfer.specify._formula).
        Equivalent to passing `response`/`explanatory` directly.
    response : str or None
        Response column name.
    explanatory : str, sequence of str, or None
        Explanatory column name(s).
    success : object or None
        Response level counted as a success for proportion-type statistics.
    paired : bool
        Mark the response as a precomputed per-unit paired difference.

    Returns
    -------
    InferData

    Raises
    ------
    InvalidRoleError
        Unknown columns, missing response, overlapping roles, a `success`
        that is not a response level, or formula and arguments that
        disagree.
    """
    explanatory_t = _as_tuple(explanatory)

    if formula is not None:
        f_response, f_explanatory = parse_formula(formula)
        if response is not None and response != f_response:
            raise InvalidRoleError(
                f"formula response {f_response!r} conflicts with "
                f"response={response!r}"
            )
        if explanatory is not None and explanatory_t != f_explanatory:
            raise InvalidRoleError(
                f"formula explanatory {list(f_explanatory)} conflicts with "
                f"explanatory={list(explanatory_t)}"
            )
        response, explanatory_t = f_response, f_explanatory

    if response is None:
        raise InvalidRoleError(
            "a response variable must be given via `response` or `formula`"
        )

    out = InferData.from_dataframe(
        data,
        response,
        explanatory_t,
        success=success,
        paired=paired,
    )
    logger.debug(
        "specified %s (signature %r, n=%d, success=%r, paired=%s)",
        formula or f"{response} ~ {' + '.join(explanatory_t) or 'NULL'}",
        out.role_signature, out.n_observations, success, paired,
    )
    return out
