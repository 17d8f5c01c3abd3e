"""
Statistic calculation.

Public API:
    calculate(x, stat, order)  - observed statistic or null distribution
    NullDistribution           - statistic per replicate
    ObservedStatistic          - statistic on observed data
    STATISTICS                 - (stat, role signature) -> implementation
"""

from pyinfer.calculate.solvers import calculate
from pyinfer.calculate.design import CalculateDesign
from pyinfer.calculate.solution import NullDistribution, ObservedStatistic
from pyinfer.calculate._common import StatParams
from pyinfer.calculate._table import STATISTICS, VALID_STATISTICS

__all__ = [
    "calculate",
    "CalculateDesign",
    "NullDistribution",
    "ObservedStatistic",
    "StatParams",
    "STATISTICS",
    "VALID_STATISTICS",
]
