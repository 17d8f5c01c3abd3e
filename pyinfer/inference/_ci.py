"""
Confidence intervals from a simulated distribution.

Three methods:
- percentile: central quantiles of the distribution
- se: normal interval point_estimate +/- z * sd(distribution)
- bias-corrected: percentile interval with quantile levels shifted by
  the median bias of the distribution relative to point_estimate
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats


def ci_percentile(dist: NDArray, level: float) -> tuple[float, float]:
    """
    Percentile CI.

    CI = [Q(alpha/2), Q(1-alpha/2)]
    """
    alpha = 1.0 - level
    return (
        float(np.quantile(dist, alpha / 2.0)),
        float(np.quantile(dist, 1.0 - alpha / 2.0)),
    )


def ci_se(dist: NDArray, level: float, point_estimate: float) -> tuple[float, float]:
    """
    Standard-error CI.

    CI = point_estimate +/- z_{1-alpha/2} * sd(dist)
    """
    alpha = 1.0 - level
    z = sp_stats.norm.ppf(1.0 - alpha / 2.0)
    se = np.std(dist, ddof=1)
    return float(point_estimate - z * se), float(point_estimate + z * se)


def ci_bias_corrected(
    dist: NDArray,
    level: float,
    point_estimate: float,
) -> tuple[float, float]:
    """
    Bias-corrected percentile CI.

    Steps:
    1. z0 = Phi^{-1}(proportion of dist < point_estimate)
    2. Quantile levels Phi(2*z0 + z_{alpha/2}), Phi(2*z0 + z_{1-alpha/2})
    3. CI from the adjusted quantiles
    """
    alpha = 1.0 - level
    R = len(dist)

    prop_below = np.sum(dist < point_estimate) / R
    # Clamp to avoid infinite z0
    prop_below = np.clip(prop_below, 1.0 / (2.0 * R), 1.0 - 1.0 / (2.0 * R))
    z0 = sp_stats.norm.ppf(prop_below)

    z_lo = sp_stats.norm.ppf(alpha / 2.0)
    z_hi = sp_stats.norm.ppf(1.0 - alpha / 2.0)

    alpha1 = sp_stats.norm.cdf(2.0 * z0 + z_lo)
    alpha2 = sp_stats.norm.cdf(2.0 * z0 + z_hi)

    return float(np.quantile(dist, alpha1)), float(np.quantile(dist, alpha2))
