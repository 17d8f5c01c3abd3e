"""
calculate(): compute a named statistic on observed data or on replicates.
"""

from __future__ import annotations

from typing import Any, Sequence

from pyinfer.calculate.backends.cpu import CPUCalculateBackend
from pyinfer.calculate.design import CalculateDesign
from pyinfer.calculate.solution import NullDistribution, ObservedStatistic
from pyinfer.generate.solution import ReplicateSet
from pyinfer.specify.design import InferData


def calculate(
    x: InferData | ReplicateSet | CalculateDesign,
    stat: str | None = None,
    order: Sequence[Any] | None = None,
) -> NullDistribution | ObservedStatistic:
    """
    Compute a statistic.

    Parameters
    ----------
    x : InferData, ReplicateSet or CalculateDesign
        Observed data from specify()/hypothesize() (gives the observed
        statistic), or replicates from generate() (gives the null
        distribution).
    stat : str
        One of "mean", "median", "sum", "sd", "prop", "count", "t", "z",
        "diff in means", "diff in medians", "ratio of means",
        "diff in props", "ratio of props", "odds ratio", "F", "Chisq",
        "slope", "correlation". Which ones apply depends on the declared
        roles; see pyinfer.calculate.STATISTICS.
    order : sequence of two levels or None
        For two-group statistics, the explanatory level subtracted from
        (first) and the one subtracted (second). When omitted, the natural
        level order is used and a UserWarning names it.

    Returns
    -------
    NullDistribution
        If `x` is a ReplicateSet: one value per replicate, in replicate order.
    ObservedStatistic
        If `x` is InferData.
    """
    if isinstance(x, CalculateDesign):
        design = x
    else:
        if stat is None:
            raise TypeError("calculate() requires stat")
        design = CalculateDesign.for_calculate(x, stat, order)

    be = CPUCalculateBackend()
    result = be.solve(design)
    if design.is_distribution:
        return NullDistribution(_result=result, _design=design)
    return ObservedStatistic(_result=result, _design=design)
