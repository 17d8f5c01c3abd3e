"""
hypothesize(): declare the null hypothesis on specified data.
"""

from __future__ import annotations

from typing import Any

from pyinfer.hypothesize.design import NullHypothesis
from pyinfer.specify.design import InferData


def hypothesize(
    data: InferData,
    null: str,
    *,
    p: Any = None,
    mu: float | None = None,
    med: float | None = None,
    sigma: float | None = None,
) -> InferData:
    """
    Declare a null hypothesis.

    Parameters
    ----------
    data : InferData
        Output of specify().
    null : str
        "point", "independence" or "paired independence".
    p : float or mapping or None
        Point null proportion of `success`, or a mapping from every
        response level to its probability.
    mu : float or None
        Point null mean.
    med : float or None
        Point null median.
    sigma : float or None
        Point null standard deviation.

    Returns
    -------
    InferData
        A copy of `data` carrying the validated NullHypothesis.

    Notes
    -----
    A point null takes exactly one of p, mu, med, sigma. The other null
    types take none; a parameter supplied with them is ignored with a
    UserWarning.
    """
    if not isinstance(data, InferData):
        raise TypeError(
            f"hypothesize() expects the output of specify(), got "
            f"{type(data).__name__}"
        )
    descriptor = NullHypothesis.from_data(
        data, null, p=p, mu=mu, med=med, sigma=sigma,
    )
    return data.with_null(descriptor)
