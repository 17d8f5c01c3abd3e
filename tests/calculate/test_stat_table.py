"""
Tests for the statistic dispatch table and the statistic functions.

Every (statistic, role signature) entry is exercised end to end on both
observed data and generated replicates.
"""

import warnings

import numpy as np
import pandas as pd
import pytest

from pyinfer import calculate, generate, hypothesize, specify
from pyinfer.calculate import STATISTICS, VALID_STATISTICS
from pyinfer.calculate._statistics import (
    StatContext,
    stat_chisq_independence,
    stat_correlation,
    stat_diff_in_means,
    stat_f,
    stat_odds_ratio,
    stat_ratio_of_means,
    stat_slope,
    stat_t_two_sample,
)
from pyinfer.calculate._table import (
    SUCCESS_STATISTICS,
    TWO_GROUP_STATISTICS,
    canonical_stat,
    signatures_for,
)

SIGNATURES = {"num", "cat", "num ~ cat", "cat ~ cat", "num ~ num"}


def _data_for(signature):
    """Observed InferData with roles and a null suited to `signature`."""
    rng = np.random.default_rng(0)
    if signature == "num":
        df = pd.DataFrame({"y": rng.normal(3.0, 1.0, 30)})
        return hypothesize(specify(df, response="y"), "point", mu=3.0)
    if signature == "cat":
        df = pd.DataFrame({"a": rng.choice(["yes", "no"], 30)})
        return hypothesize(specify(df, response="a", success="yes"), "point", p=0.5)
    if signature == "num ~ cat":
        df = pd.DataFrame({"y": rng.normal(0.0, 1.0, 30) + 5.0,
                           "g": np.repeat(["a", "b"], 15)})
        return hypothesize(specify(df, "y ~ g"), "independence")
    if signature == "cat ~ cat":
        df = pd.DataFrame({"a": np.tile(["yes", "no", "no"], 10),
                           "g": np.repeat(["a", "b"], 15)})
        return hypothesize(specify(df, "a ~ g", success="yes"), "independence")
    df = pd.DataFrame({"y": rng.normal(size=30), "x": rng.normal(size=30)})
    return hypothesize(specify(df, "y ~ x"), "independence")


class TestTable:
    """The closed (statistic, role signature) dispatch table."""

    def test_signatures_closed(self):
        """Entries use only the five supported role signatures."""
        assert {sig for _, sig in STATISTICS} <= SIGNATURES

    def test_every_statistic_has_a_signature(self):
        """Every listed statistic resolves to at least one signature."""
        for name in VALID_STATISTICS:
            assert signatures_for(name)

    def test_all_listed_names(self):
        """The statistic names are exactly the documented set."""
        assert set(VALID_STATISTICS) == {
            "mean", "median", "sum", "sd", "prop", "count", "t", "z",
            "diff in means", "diff in medians", "ratio of means",
            "diff in props", "ratio of props", "odds ratio", "F", "Chisq",
            "slope", "correlation",
        }

    def test_subsets(self):
        """Two-group and success subsets are drawn from the table."""
        assert TWO_GROUP_STATISTICS <= set(STATISTICS)
        assert SUCCESS_STATISTICS <= set(VALID_STATISTICS)

    def test_canonical_stat(self):
        """Spellings canonicalise; unknown names give None."""
        assert canonical_stat("chisq") == "Chisq"
        assert canonical_stat("f") == "F"
        assert canonical_stat("odds_ratio") == "odds ratio"
        assert canonical_stat("nonsense") is None
        assert canonical_stat(3) is None

    @pytest.mark.parametrize("stat,signature", sorted(STATISTICS))
    def test_entry_computes(self, stat, signature):
        """Each entry computes a finite observed value and a full distribution."""
        d = _data_for(signature)
        assert d.role_signature == signature
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            obs = calculate(d, stat)
            dist = calculate(generate(d, reps=5, seed=1), stat)
        assert np.isfinite(obs.value)
        assert len(dist) == 5
        assert dist.stat_name == stat
        assert dist.signature == signature

    @pytest.mark.parametrize("stat,signature", sorted(STATISTICS))
    def test_other_signatures_rejected(self, stat, signature):
        """Each statistic is refused for every signature it lacks."""
        from pyinfer.core.exceptions import IncompatibleStatisticError
        for other in SIGNATURES - set(signatures_for(stat)):
            with pytest.raises(IncompatibleStatisticError):
                calculate(_data_for(other), stat)


class TestStatisticFunctions:
    """Degenerate inputs give NaN rather than raising."""

    CTX = StatContext(order=("a", "b"), success="yes",
                      response_levels=("no", "yes"), explanatory_levels=("a", "b"))

    def test_empty_group(self):
        """A group with no rows gives NaN."""
        y = np.array([1.0, 2.0])
        x = np.array(["a", "a"], dtype=object)
        assert np.isnan(stat_diff_in_means(y, x, self.CTX))

    def test_zero_denominator(self):
        """A zero denominator gives NaN."""
        y = np.array([1.0, 0.0])
        x = np.array(["a", "b"], dtype=object)
        assert np.isnan(stat_ratio_of_means(y, x, self.CTX))

    def test_t_with_singleton_group(self):
        """Welch t needs two observations per group."""
        y = np.array([1.0, 2.0, 3.0])
        x = np.array(["a", "a", "b"], dtype=object)
        assert np.isnan(stat_t_two_sample(y, x, self.CTX))

    def test_odds_ratio_all_successes(self):
        """Odds ratio with no failures in a group is NaN."""
        y = np.array(["yes", "yes", "no", "yes"], dtype=object)
        x = np.array(["a", "a", "b", "b"], dtype=object)
        assert np.isnan(stat_odds_ratio(y, x, self.CTX))

    def test_f_single_group(self):
        """F needs at least two groups."""
        y = np.array([1.0, 2.0, 3.0])
        x = np.array(["a", "a", "a"], dtype=object)
        assert np.isnan(stat_f(y, x, self.CTX))

    def test_chisq_single_row(self):
        """Contingency X^2 needs a 2x2 table after dropping empty rows."""
        y = np.array(["yes", "yes", "yes"], dtype=object)
        x = np.array(["a", "b", "b"], dtype=object)
        assert np.isnan(stat_chisq_independence(y, x, self.CTX))

    def test_constant_x(self):
        """Slope and correlation are undefined for a constant predictor."""
        y = np.array([1.0, 2.0, 3.0])
        x = np.array([5.0, 5.0, 5.0])
        assert np.isnan(stat_slope(y, x, self.CTX))
        assert np.isnan(stat_correlation(y, x, self.CTX))
