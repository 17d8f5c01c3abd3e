"""
Randomization p-value from a null distribution.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyinfer.inference._common import GREATER, LESS


def tail_proportion(dist: NDArray, observed: float, direction: str) -> float:
    """
    Proportion of `dist` at least as extreme as `observed`.

    less:      mean(dist <= observed)
    greater:   mean(dist >= observed)
    two-sided: min(1, 2 * min(less, greater))

    `dist` must already be free of NaN. Ties count as extreme.
    """
    left = float(np.mean(dist <= observed))
    if direction == LESS:
        return left
    right = float(np.mean(dist >= observed))
    if direction == GREATER:
        return right
    return min(1.0, 2.0 * min(left, right))
