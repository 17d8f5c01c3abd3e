"""
Common data structures for statistic calculation.

StatParams is the payload wrapped by Result[P] and exposed through
NullDistribution and ObservedStatistic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class StatParams:
    """
    Parameter payload for calculated statistics.

    - stat: one value per replicate (length 1 for an observed statistic);
      NaN marks a replicate on which the statistic is undefined
    - replicate: replicate ids aligned with `stat` (0 for observed data)
    - n_dropped: rows dropped for missing values, aligned with `stat`
    - stat_name: canonical statistic name
    - signature: role signature the statistic was computed for
    - order: two-group order used, or None
    - reps: replicates requested by the generation run (1 when observed)
    - complete: False when computed from a cancelled generation run
    """
    stat: NDArray[np.floating[Any]]
    replicate: NDArray[np.integer[Any]]
    n_dropped: NDArray[np.integer[Any]]
    stat_name: str
    signature: str
    order: tuple[Any, Any] | None
    reps: int
    complete: bool

    @property
    def n_undefined(self) -> int:
        return int(np.sum(np.isnan(self.stat)))
