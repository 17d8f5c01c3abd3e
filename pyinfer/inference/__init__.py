"""
Inference from a null distribution.

Public API:
    get_p_value(null_dist, obs_stat, direction)
    get_confidence_interval(dist, level, type, point_estimate)
"""

from pyinfer.inference.solvers import get_confidence_interval, get_p_value
from pyinfer.inference.design import CIDesign, PValueDesign
from pyinfer.inference.solution import CISolution, PValueSolution
from pyinfer.inference._common import VALID_CI_TYPES, VALID_DIRECTIONS

__all__ = [
    "get_p_value",
    "get_confidence_interval",
    "PValueDesign",
    "CIDesign",
    "PValueSolution",
    "CISolution",
    "VALID_DIRECTIONS",
    "VALID_CI_TYPES",
]
