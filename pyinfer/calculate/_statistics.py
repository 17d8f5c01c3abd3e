"""
Statistic implementations.

Every function has the signature fn(y, x, ctx) -> float where y is the
response, x the explanatory values (None for one-variable statistics)
with missing values already removed, and ctx a StatContext. A statistic
that is undefined for the given values (empty group, zero variance,
fewer than two observations) returns NaN rather than raising, so one
degenerate replicate never shortens a null distribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class StatContext:
    """
    Fixed inputs a statistic needs besides the data.

    Attributes:
        success: Response level counted as a success, or None.
        order: (minuend level, subtrahend level) for two-group statistics.
        mu: Hypothesized mean for the one-sample t statistic.
        p0: Hypothesized success proportion for the one-sample z statistic.
        expected_p: Level probabilities for the goodness-of-fit Chisq.
        response_levels: Natural-order levels of the response.
        explanatory_levels: Natural-order levels of the explanatory variable.
    """
    success: Any = None
    order: tuple[Any, Any] | None = None
    mu: float = 0.0
    p0: float | None = None
    expected_p: tuple[float, ...] | None = None
    response_levels: tuple[Any, ...] = ()
    explanatory_levels: tuple[Any, ...] = ()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _groups(y: NDArray, x: NDArray, order: tuple[Any, Any]) -> tuple[NDArray, NDArray]:
    """Response values of the two groups named by `order`."""
    a, b = order
    return y[x == a], y[x == b]


def _successes(y: NDArray, success: Any) -> NDArray:
    return y == success


def _mean(y: NDArray) -> float:
    return float(np.mean(y)) if len(y) > 0 else np.nan


def _median(y: NDArray) -> float:
    return float(np.median(y)) if len(y) > 0 else np.nan


def _var(y: NDArray) -> float:
    return float(np.var(y, ddof=1)) if len(y) > 1 else np.nan


def _prop(y: NDArray, success: Any) -> float:
    return float(np.mean(_successes(y, success))) if len(y) > 0 else np.nan


def _divide(num: float, den: float) -> float:
    if not np.isfinite(num) or not np.isfinite(den) or den == 0.0:
        return np.nan
    return num / den


# ---------------------------------------------------------------------------
# One numeric variable
# ---------------------------------------------------------------------------

def stat_mean(y, x, ctx):
    return _mean(y)


def stat_median(y, x, ctx):
    return _median(y)


def stat_sum(y, x, ctx):
    return float(np.sum(y))


def stat_sd(y, x, ctx):
    var = _var(y)
    return float(np.sqrt(var)) if np.isfinite(var) else np.nan


def stat_t_one_sample(y, x, ctx):
    """(mean - mu) / (sd / sqrt(n))."""
    n = len(y)
    se = np.sqrt(_var(y) / n) if n > 1 else np.nan
    return _divide(_mean(y) - ctx.mu, se)


# ---------------------------------------------------------------------------
# One categorical variable
# ---------------------------------------------------------------------------

def stat_prop(y, x, ctx):
    return _prop(y, ctx.success)


def stat_count(y, x, ctx):
    return float(np.sum(_successes(y, ctx.success)))


def stat_z_one_sample(y, x, ctx):
    """(p_hat - p0) / sqrt(p0 (1 - p0) / n)."""
    n = len(y)
    p0 = ctx.p0
    se = np.sqrt(p0 * (1.0 - p0) / n) if n > 0 else np.nan
    return _divide(_prop(y, ctx.success) - p0, se)


def stat_chisq_gof(y, x, ctx):
    """Pearson goodness-of-fit X^2 against ctx.expected_p (uniform if None)."""
    levels = ctx.response_levels
    n = len(y)
    if n == 0:
        return np.nan
    observed = np.array([np.sum(y == lv) for lv in levels], dtype=np.float64)
    if ctx.expected_p is None:
        p = np.full(len(levels), 1.0 / len(levels))
    else:
        p = np.asarray(ctx.expected_p, dtype=np.float64)
    expected = n * p
    keep = expected > 0
    if np.any(observed[~keep] > 0):
        return np.inf
    return float(np.sum((observed[keep] - expected[keep]) ** 2 / expected[keep]))


# ---------------------------------------------------------------------------
# Numeric response, categorical explanatory
# ---------------------------------------------------------------------------

def stat_diff_in_means(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    return _mean(a) - _mean(b)


def stat_diff_in_medians(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    return _median(a) - _median(b)


def stat_ratio_of_means(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    return _divide(_mean(a), _mean(b))


def stat_t_two_sample(y, x, ctx):
    """Welch two-sample t for mean(A) - mean(B)."""
    a, b = _groups(y, x, ctx.order)
    se = np.sqrt(_var(a) / len(a) + _var(b) / len(b)) if min(len(a), len(b)) > 1 else np.nan
    return _divide(_mean(a) - _mean(b), se)


def stat_f(y, x, ctx):
    """One-way ANOVA F: between-group over within-group mean square."""
    groups = [y[x == lv] for lv in ctx.explanatory_levels]
    groups = [g for g in groups if len(g) > 0]
    k = len(groups)
    n = len(y)
    if k < 2 or n <= k:
        return np.nan
    grand = np.mean(y)
    ss_between = sum(len(g) * (np.mean(g) - grand) ** 2 for g in groups)
    ss_within = sum(np.sum((g - np.mean(g)) ** 2) for g in groups)
    return _divide(ss_between / (k - 1), ss_within / (n - k))


# ---------------------------------------------------------------------------
# Categorical response, categorical explanatory
# ---------------------------------------------------------------------------

def stat_diff_in_props(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    return _prop(a, ctx.success) - _prop(b, ctx.success)


def stat_ratio_of_props(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    return _divide(_prop(a, ctx.success), _prop(b, ctx.success))


def stat_odds_ratio(y, x, ctx):
    a, b = _groups(y, x, ctx.order)
    pa, pb = _prop(a, ctx.success), _prop(b, ctx.success)
    return _divide(_divide(pa, 1.0 - pa), _divide(pb, 1.0 - pb))


def stat_z_two_sample(y, x, ctx):
    """Pooled two-proportion z for prop(A) - prop(B)."""
    a, b = _groups(y, x, ctx.order)
    na, nb = len(a), len(b)
    if na == 0 or nb == 0:
        return np.nan
    pooled = (np.sum(_successes(a, ctx.success)) + np.sum(_successes(b, ctx.success))) / (na + nb)
    se = np.sqrt(pooled * (1.0 - pooled) * (1.0 / na + 1.0 / nb))
    return _divide(_prop(a, ctx.success) - _prop(b, ctx.success), se)


def stat_chisq_independence(y, x, ctx):
    """Pearson X^2 for the response-by-explanatory contingency table."""
    table = np.array(
        [[np.sum((y == r) & (x == c)) for c in ctx.explanatory_levels]
         for r in ctx.response_levels],
        dtype=np.float64,
    )
    # Levels absent from this sample carry no information
    table = table[table.sum(axis=1) > 0][:, table.sum(axis=0) > 0]
    if table.shape[0] < 2 or table.shape[1] < 2:
        return np.nan
    expected = np.outer(table.sum(axis=1), table.sum(axis=0)) / table.sum()
    return float(np.sum((table - expected) ** 2 / expected))


# ---------------------------------------------------------------------------
# Two numeric variables
# ---------------------------------------------------------------------------

def stat_slope(y, x, ctx):
    """OLS slope of y on x."""
    if len(y) < 2:
        return np.nan
    xc = x - np.mean(x)
    return _divide(float(np.sum(xc * (y - np.mean(y)))), float(np.sum(xc ** 2)))


def stat_correlation(y, x, ctx):
    """Pearson correlation."""
    if len(y) < 2:
        return np.nan
    xc = x - np.mean(x)
    yc = y - np.mean(y)
    return _divide(
        float(np.sum(xc * yc)),
        float(np.sqrt(np.sum(xc ** 2) * np.sum(yc ** 2))),
    )
