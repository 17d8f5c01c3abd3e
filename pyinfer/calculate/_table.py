"""
Statistic dispatch table.

STATISTICS maps (statistic name, role signature) to the function that
computes it. It is the only place a statistic is tied to the roles it
accepts; calculate() looks combinations up here and nowhere else.
"""

from __future__ import annotations

from typing import Callable

from pyinfer.calculate import _statistics as s

STATISTICS: dict[tuple[str, str], Callable] = {
    ("mean", "num"): s.stat_mean,
    ("median", "num"): s.stat_median,
    ("sum", "num"): s.stat_sum,
    ("sd", "num"): s.stat_sd,
    ("prop", "cat"): s.stat_prop,
    ("count", "cat"): s.stat_count,
    ("t", "num"): s.stat_t_one_sample,
    ("t", "num ~ cat"): s.stat_t_two_sample,
    ("z", "cat"): s.stat_z_one_sample,
    ("z", "cat ~ cat"): s.stat_z_two_sample,
    ("diff in means", "num ~ cat"): s.stat_diff_in_means,
    ("diff in medians", "num ~ cat"): s.stat_diff_in_medians,
    ("ratio of means", "num ~ cat"): s.stat_ratio_of_means,
    ("diff in props", "cat ~ cat"): s.stat_diff_in_props,
    ("ratio of props", "cat ~ cat"): s.stat_ratio_of_props,
    ("odds ratio", "cat ~ cat"): s.stat_odds_ratio,
    ("F", "num ~ cat"): s.stat_f,
    ("Chisq", "cat"): s.stat_chisq_gof,
    ("Chisq", "cat ~ cat"): s.stat_chisq_independence,
    ("slope", "num ~ num"): s.stat_slope,
    ("correlation", "num ~ num"): s.stat_correlation,
}

VALID_STATISTICS = tuple(dict.fromkeys(name for name, _ in STATISTICS))

# Statistics comparing two explanatory groups; they take `order`
TWO_GROUP_STATISTICS = frozenset({
    ("t", "num ~ cat"),
    ("z", "cat ~ cat"),
    ("diff in means", "num ~ cat"),
    ("diff in medians", "num ~ cat"),
    ("ratio of means", "num ~ cat"),
    ("diff in props", "cat ~ cat"),
    ("ratio of props", "cat ~ cat"),
    ("odds ratio", "cat ~ cat"),
})

# Statistics that count a success level of the response
SUCCESS_STATISTICS = frozenset({
    "prop", "count", "z", "diff in props", "ratio of props", "odds ratio",
})

_CANONICAL = {name.lower(): name for name in VALID_STATISTICS}


def canonical_stat(stat: str) -> str | None:
    """
    Canonical spelling of a statistic name, or None if unknown.

    Matching ignores case and treats '_' as a space, so 'diff_in_means'
    and 'chisq' are accepted.
    """
    if not isinstance(stat, str):
        return None
    key = " ".join(stat.replace("_", " ").split()).lower()
    return _CANONICAL.get(key)


def signatures_for(stat: str) -> tuple[str, ...]:
    """Role signatures a statistic accepts."""
    return tuple(sig for name, sig in STATISTICS if name == stat)
