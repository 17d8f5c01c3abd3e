"""
Design classes for inference on a null distribution.

Both designs check compatibility before anything is computed: a p-value
needs an observed statistic of the same kind as the distribution, and
neither consumer accepts a distribution from a cancelled generation run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyinfer.calculate.solution import NullDistribution, ObservedStatistic
from pyinfer.core.exceptions import (
    IncompatibleStatisticError,
    IncompleteDistributionError,
    ValidationError,
)
from pyinfer.core.validation import check_finite_scalar, check_real_scalar
from pyinfer.inference._common import (
    BIAS_CORRECTED,
    CI_TYPE_ALIASES,
    DIRECTION_ALIASES,
    SE,
    VALID_CI_TYPES,
    VALID_DIRECTIONS,
)


def _require_complete(dist: NullDistribution) -> None:
    if not dist.complete:
        raise IncompleteDistributionError(
            f"null distribution holds {len(dist)} of {dist.reps} requested "
            "replicates because generation was cancelled; regenerate before "
            "drawing inference from it",
            n_completed=len(dist),
            n_requested=dist.reps,
        )


def _resolve_direction(direction: str) -> str:
    key = direction.lower().strip() if isinstance(direction, str) else direction
    key = DIRECTION_ALIASES.get(key, key)
    if key not in VALID_DIRECTIONS:
        raise ValidationError(
            f"direction must be one of {list(VALID_DIRECTIONS)} "
            f"(or {list(DIRECTION_ALIASES)}), got {direction!r}"
        )
    return key


def _resolve_ci_type(ci_type: str) -> str:
    key = ci_type.lower().strip() if isinstance(ci_type, str) else ci_type
    key = CI_TYPE_ALIASES.get(key, key)
    if key not in VALID_CI_TYPES:
        raise ValidationError(
            f"type must be one of {list(VALID_CI_TYPES)}, got {ci_type!r}"
        )
    return key


def _finite_values(dist: NullDistribution) -> tuple[NDArray, int]:
    values = np.asarray(dist.stat, dtype=np.float64)
    keep = ~np.isnan(values)
    return values[keep], int(np.sum(~keep))


@dataclass(frozen=True)
class PValueDesign:
    """
    Frozen design for a randomization p-value.

    Attributes:
        distribution: Null distribution values with NaN removed.
        observed: Observed statistic value.
        direction: Canonical direction.
        n_excluded: Replicates dropped because the statistic was undefined.
        stat: Statistic name shared by distribution and observed value.
        signature: Role signature shared by both.
    """
    distribution: NDArray
    observed: float
    direction: str
    n_excluded: int
    stat: str
    signature: str

    @classmethod
    def for_p_value(
        cls,
        null_dist: NullDistribution,
        obs_stat: ObservedStatistic | float,
        direction: str,
    ) -> PValueDesign:
        """
        Create a p-value design with validation.

        Raises:
            IncompleteDistributionError: Distribution from a cancelled run.
            IncompatibleStatisticError: Observed statistic computed for a
                different statistic or role signature.
            ValidationError: Unknown direction or undefined (NaN) observed value.
        """
        if not isinstance(null_dist, NullDistribution):
            raise TypeError(
                "get_p_value() expects a NullDistribution from calculate() "
                f"on generated replicates, got {type(null_dist).__name__}"
            )
        _require_complete(null_dist)
        canonical = _resolve_direction(direction)

        if isinstance(obs_stat, ObservedStatistic):
            if (obs_stat.stat_name, obs_stat.signature) != (
                null_dist.stat_name, null_dist.signature,
            ):
                raise IncompatibleStatisticError(
                    f"observed statistic is {obs_stat.stat_name!r} for "
                    f"{obs_stat.signature!r} but the null distribution is "
                    f"{null_dist.stat_name!r} for {null_dist.signature!r}",
                    stat=obs_stat.stat_name,
                    signature=obs_stat.signature,
                )
            if obs_stat.order != null_dist.order:
                raise IncompatibleStatisticError(
                    f"observed statistic uses order {obs_stat.order!r} but "
                    f"the null distribution uses {null_dist.order!r}",
                    stat=obs_stat.stat_name,
                    signature=obs_stat.signature,
                )
            observed = obs_stat.value
        else:
            observed = obs_stat
        observed = check_real_scalar(observed, "obs_stat")

        values, n_excluded = _finite_values(null_dist)
        if len(values) == 0:
            raise ValidationError(
                "every value in the null distribution is undefined (NaN); "
                "no p-value can be computed"
            )

        return cls(
            distribution=values,
            observed=observed,
            direction=canonical,
            n_excluded=n_excluded,
            stat=null_dist.stat_name,
            signature=null_dist.signature,
        )


@dataclass(frozen=True)
class CIDesign:
    """
    Frozen design for a confidence interval from a distribution.

    Attributes:
        distribution: Distribution values with NaN removed.
        level: Confidence level in (0, 1).
        ci_type: Canonical interval type.
        point_estimate: Centre for 'se' and 'bias-corrected'.
        n_excluded: Replicates dropped because the statistic was undefined.
        stat: Statistic name of the distribution.
    """
    distribution: NDArray
    level: float
    ci_type: str
    point_estimate: float | None
    n_excluded: int
    stat: str

    @classmethod
    def for_ci(
        cls,
        dist: NullDistribution,
        level: float = 0.95,
        ci_type: str = "percentile",
        point_estimate: ObservedStatistic | float | None = None,
    ) -> CIDesign:
        """
        Create a confidence interval design with validation.

        Raises:
            IncompleteDistributionError: Distribution from a cancelled run.
            ValidationError: Bad level or type, missing point estimate.
        """
        if not isinstance(dist, NullDistribution):
            raise TypeError(
                "get_confidence_interval() expects a NullDistribution from "
                f"calculate() on generated replicates, got {type(dist).__name__}"
            )
        _require_complete(dist)
        canonical = _resolve_ci_type(ci_type)

        if isinstance(level, bool) or not isinstance(level, (int, float, np.floating)):
            raise ValidationError(f"level must be a number in (0, 1), got {level!r}")
        if not 0.0 < float(level) < 1.0:
            raise ValidationError(f"level must be in (0, 1), got {level!r}")

        estimate: Any = point_estimate
        if isinstance(estimate, ObservedStatistic):
            estimate = estimate.value
        if canonical in (SE, BIAS_CORRECTED):
            if estimate is None:
                raise ValidationError(
                    f"type={canonical!r} needs point_estimate (the observed "
                    "statistic the interval is centred on)"
                )
            estimate = check_finite_scalar(estimate, "point_estimate")
        elif estimate is not None:
            estimate = check_finite_scalar(estimate, "point_estimate")

        values, n_excluded = _finite_values(dist)
        if len(values) < 2:
            raise ValidationError(
                f"a confidence interval needs at least 2 defined values; the "
                f"distribution has {len(values)}"
            )

        return cls(
            distribution=values,
            level=float(level),
            ci_type=canonical,
            point_estimate=estimate,
            n_excluded=n_excluded,
            stat=dist.stat_name,
        )
