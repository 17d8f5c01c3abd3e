"""
Common data structures for inference on a null distribution.

PValueParams and CIParams are the payloads wrapped by Result[P] and
exposed through PValueSolution and CISolution.
"""

from __future__ import annotations

from dataclasses import dataclass

LESS = "less"
GREATER = "greater"
TWO_SIDED = "two-sided"

VALID_DIRECTIONS = (LESS, GREATER, TWO_SIDED)

DIRECTION_ALIASES = {
    "left": LESS,
    "right": GREATER,
    "both": TWO_SIDED,
    "two_sided": TWO_SIDED,
    "two sided": TWO_SIDED,
    "two.sided": TWO_SIDED,
}

PERCENTILE = "percentile"
SE = "se"
BIAS_CORRECTED = "bias-corrected"

VALID_CI_TYPES = (PERCENTILE, SE, BIAS_CORRECTED)

CI_TYPE_ALIASES = {
    "perc": PERCENTILE,
    "bias_corrected": BIAS_CORRECTED,
    "bias corrected": BIAS_CORRECTED,
}


@dataclass(frozen=True)
class PValueParams:
    """
    Parameter payload for a randomization p-value.

    - p_value: proportion of the null distribution at least as extreme
    - direction: canonical direction
    - observed: observed statistic value
    - n_used: replicates entering the proportion (NaN excluded)
    - n_excluded: replicates excluded because the statistic was undefined
    """
    p_value: float
    direction: str
    observed: float
    n_used: int
    n_excluded: int


@dataclass(frozen=True)
class CIParams:
    """
    Parameter payload for a confidence interval from a distribution.

    - lower, upper: interval endpoints
    - level: confidence level in (0, 1)
    - ci_type: canonical interval type
    - point_estimate: centre used by 'se' and 'bias-corrected', else None
    - n_used: replicates entering the computation
    """
    lower: float
    upper: float
    level: float
    ci_type: str
    point_estimate: float | None
    n_used: int
