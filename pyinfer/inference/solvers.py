"""
Consumers of a null distribution: p-values and confidence intervals.
"""

from __future__ import annotations

import logging
import warnings

from pyinfer.calculate.solution import NullDistribution, ObservedStatistic
from pyinfer.core.compute.timing import Timer
from pyinfer.core.result import Result
from pyinfer.inference._ci import ci_bias_corrected, ci_percentile, ci_se
from pyinfer.inference._common import (
    BIAS_CORRECTED,
    CIParams,
    PERCENTILE,
    PValueParams,
)
from pyinfer.inference._p_value import tail_proportion
from pyinfer.inference.design import CIDesign, PValueDesign
from pyinfer.inference.solution import CISolution, PValueSolution

logger = logging.getLogger(__name__)


def get_p_value(
    null_dist: NullDistribution,
    obs_stat: ObservedStatistic | float,
    direction: str,
) -> PValueSolution:
    """
    Randomization p-value of an observed statistic.

    Parameters
    ----------
    null_dist : NullDistribution
        Statistic computed on generated replicates.
    obs_stat : ObservedStatistic or float
        Statistic computed on the observed data. An ObservedStatistic is
        checked against the distribution's statistic, roles and order.
    direction : str
        "less", "greater" or "two-sided" (aliases "left", "right",
        "both", "two_sided", "two sided").

    Returns
    -------
    PValueSolution
    """
    design = PValueDesign.for_p_value(null_dist, obs_stat, direction)

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    if design.n_excluded:
        msg = (
            f"{design.n_excluded} undefined (NaN) replicate(s) excluded; "
            f"p-value is based on {len(design.distribution)} replicates"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        warnings_list.append(msg)

    with timer.section('p_value'):
        p = tail_proportion(design.distribution, design.observed, design.direction)

    if p == 0.0:
        msg = (
            "p-value of 0 is an approximation: no replicate was as extreme as "
            f"the observed statistic; the true p-value is below "
            f"{1.0 / len(design.distribution):.3g} (1/reps)"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        warnings_list.append(msg)

    timer.stop()
    logger.debug(
        "p-value %.6g (%s) for %s from %d replicates",
        p, design.direction, design.stat, len(design.distribution),
    )

    result = Result(
        params=PValueParams(
            p_value=p,
            direction=design.direction,
            observed=design.observed,
            n_used=len(design.distribution),
            n_excluded=design.n_excluded,
        ),
        info={'stat': design.stat, 'signature': design.signature},
        timing=timer.result(),
        backend_name='cpu_p_value',
        warnings=tuple(warnings_list),
    )
    return PValueSolution(_result=result, _design=design)


def get_confidence_interval(
    dist: NullDistribution,
    level: float = 0.95,
    type: str = "percentile",
    point_estimate: ObservedStatistic | float | None = None,
) -> CISolution:
    """
    Confidence interval from a bootstrap distribution.

    Parameters
    ----------
    dist : NullDistribution
        Statistic computed on generated replicates.
    level : float
        Confidence level in (0, 1).
    type : str
        "percentile", "se" or "bias-corrected".
    point_estimate : ObservedStatistic, float or None
        Required by "se" and "bias-corrected".

    Returns
    -------
    CISolution
    """
    design = CIDesign.for_ci(dist, level, type, point_estimate)

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    if design.n_excluded:
        msg = (
            f"{design.n_excluded} undefined (NaN) replicate(s) excluded from "
            "the interval"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        warnings_list.append(msg)

    with timer.section('interval'):
        if design.ci_type == PERCENTILE:
            lower, upper = ci_percentile(design.distribution, design.level)
        elif design.ci_type == BIAS_CORRECTED:
            lower, upper = ci_bias_corrected(
                design.distribution, design.level, design.point_estimate,
            )
        else:
            lower, upper = ci_se(
                design.distribution, design.level, design.point_estimate,
            )

    timer.stop()

    result = Result(
        params=CIParams(
            lower=lower,
            upper=upper,
            level=design.level,
            ci_type=design.ci_type,
            point_estimate=design.point_estimate,
            n_used=len(design.distribution),
        ),
        info={'stat': design.stat},
        timing=timer.result(),
        backend_name='cpu_ci',
        warnings=tuple(warnings_list),
    )
    return CISolution(_result=result, _design=design)
