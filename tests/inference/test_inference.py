"""
Tests for get_p_value() and get_confidence_interval().
"""

import threading

import numpy as np
import pandas as pd
import pytest
from scipy import stats as sp_stats

from pyinfer import (
    calculate,
    generate,
    get_confidence_interval,
    get_p_value,
    hypothesize,
    specify,
)
from pyinfer.core.exceptions import (
    IncompatibleStatisticError,
    IncompleteDistributionError,
    ParameterValueError,
    ValidationError,
)
from pyinfer.inference import CISolution, PValueSolution
from pyinfer.inference._ci import ci_bias_corrected, ci_percentile, ci_se
from pyinfer.inference._p_value import tail_proportion

ORDER = ("control", "treatment")


@pytest.fixture
def two_group(two_group_data):
    return hypothesize(
        specify(two_group_data, response="y", explanatory="group"), "independence",
    )


@pytest.fixture
def null_dist(two_group):
    return calculate(generate(two_group, reps=500, seed=1), "diff in means",
                     order=ORDER)


@pytest.fixture
def obs_stat(two_group):
    return calculate(two_group, "diff in means", order=ORDER)


@pytest.fixture
def boot_dist(numeric_data):
    d = specify(numeric_data, response="y")
    return calculate(generate(d, reps=1000, seed=3), "mean")


# ---------------------------------------------------------------------------
# Tail proportions
# ---------------------------------------------------------------------------

class TestTailProportion:
    """Tail proportions on a fixed distribution."""

    DIST = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])

    def test_less(self):
        """Share of values at or below the observed value."""
        assert tail_proportion(self.DIST, 0.0, "less") == 0.6

    def test_greater(self):
        """Share of values at or above the observed value."""
        assert tail_proportion(self.DIST, 1.0, "greater") == 0.4

    def test_two_sided(self):
        """Two-sided doubles the smaller tail."""
        assert tail_proportion(self.DIST, 1.0, "two-sided") == 0.8

    def test_two_sided_capped_at_one(self):
        """Two-sided never exceeds 1."""
        assert tail_proportion(self.DIST, 0.0, "two-sided") == 1.0


# ---------------------------------------------------------------------------
# get_p_value
# ---------------------------------------------------------------------------

class TestGetPValue:
    """p-values from a null distribution."""

    def test_returns_solution(self, null_dist, obs_stat):
        """A PValueSolution in [0, 1] using every replicate."""
        p = get_p_value(null_dist, obs_stat, "two-sided")
        assert isinstance(p, PValueSolution)
        assert 0.0 <= p.p_value <= 1.0
        assert p.n_used == 500
        assert p.observed == obs_stat.value

    def test_matches_manual_proportion(self, null_dist, obs_stat):
        """The left tail is the proportion at or below the observed value."""
        p = get_p_value(null_dist, obs_stat, "less")
        assert p.p_value == np.mean(null_dist.stat <= obs_stat.value)

    @pytest.mark.parametrize("alias,canonical", [
        ("left", "less"), ("right", "greater"), ("both", "two-sided"),
        ("two_sided", "two-sided"), ("two sided", "two-sided"),
        ("Greater", "greater"),
    ])
    def test_direction_aliases(self, null_dist, obs_stat, alias, canonical):
        """Direction aliases resolve to canonical names."""
        assert get_p_value(null_dist, obs_stat, alias).direction == canonical

    def test_one_sided_sum(self, null_dist):
        """One-sided p-values sum to 1 without ties."""
        # No ties on a continuous statistic: less + greater == 1
        less = get_p_value(null_dist, 0.1234567, "less").p_value
        greater = get_p_value(null_dist, 0.1234567, "greater").p_value
        assert less + greater == pytest.approx(1.0)

    def test_strong_effect_small_p(self):
        """A p-value of 0 is returned with a warning."""
        df = pd.DataFrame({
            "y": np.r_[np.arange(20.0), np.arange(20.0) + 100.0],
            "g": np.repeat(["a", "b"], 20),
        })
        d = hypothesize(specify(df, "y ~ g"), "independence")
        dist = calculate(generate(d, reps=200, seed=1), "diff in means", order=("a", "b"))
        obs = calculate(d, "diff in means", order=("a", "b"))
        with pytest.warns(UserWarning, match="approximation"):
            p = get_p_value(dist, obs, "two-sided")
        assert p.p_value == 0.0
        assert any("1/reps" in w for w in p.warnings)

    def test_agrees_with_welch_t_roughly(self, two_group, two_group_data):
        """The randomization p-value is close to Welch's."""
        dist = calculate(generate(two_group, reps=2000, seed=5), "t", order=ORDER)
        obs = calculate(two_group, "t", order=ORDER)
        p = get_p_value(dist, obs, "two-sided").p_value
        a = two_group_data.loc[two_group_data["group"] == "control", "y"]
        b = two_group_data.loc[two_group_data["group"] == "treatment", "y"]
        ref = sp_stats.ttest_ind(a, b, equal_var=False).pvalue
        assert p == pytest.approx(ref, abs=0.03)

    def test_float_observed(self, null_dist):
        """A plain float stands in for an observed statistic."""
        assert get_p_value(null_dist, 0.0, "greater").observed == 0.0

    def test_infinite_observed_chisq(self):
        """An observed count in a zero-probability level gives X^2 = inf and p = 0."""
        df = pd.DataFrame({"c": ["a"] * 10 + ["b"] * 10 + ["c"]})
        d = hypothesize(specify(df, response="c"), "point",
                        p={"a": 0.5, "b": 0.5, "c": 0.0})
        obs = calculate(d, "Chisq")
        assert obs.value == np.inf
        dist = calculate(generate(d, reps=100, seed=2), "Chisq")
        assert np.all(np.isfinite(dist.stat))
        with pytest.warns(UserWarning, match="approximation"):
            p = get_p_value(dist, obs, "greater")
        assert p.p_value == 0.0
        assert p.observed == np.inf

    def test_nan_observed_rejected(self, null_dist):
        """An undefined observed value cannot be placed in the distribution."""
        with pytest.raises(ParameterValueError, match="obs_stat"):
            get_p_value(null_dist, float("nan"), "greater")

    def test_nan_replicates_excluded(self):
        """NaN replicates leave both numerator and denominator."""
        df = pd.DataFrame({"y": [1.0, 2.0, 3.0, 4.0], "g": ["a", "a", "a", "b"]})
        d = specify(df, "y ~ g")
        with pytest.warns(UserWarning):
            dist = calculate(generate(d, reps=50, type="bootstrap", seed=6),
                             "diff in means", order=("a", "b"))
        with pytest.warns(UserWarning, match="excluded"):
            p = get_p_value(dist, -1.0, "less")
        assert p.n_excluded == dist.n_undefined
        assert p.n_used == 50 - dist.n_undefined

    def test_mismatched_statistic(self, two_group, null_dist):
        """Observed and null statistics must match."""
        obs = calculate(two_group, "diff in medians", order=ORDER)
        with pytest.raises(IncompatibleStatisticError):
            get_p_value(null_dist, obs, "two-sided")

    def test_mismatched_order(self, two_group, null_dist):
        """Observed and null orders must match."""
        obs = calculate(two_group, "diff in means", order=ORDER[::-1])
        with pytest.raises(IncompatibleStatisticError, match="order"):
            get_p_value(null_dist, obs, "two-sided")

    def test_unknown_direction(self, null_dist, obs_stat):
        """Unknown directions raise."""
        with pytest.raises(ValidationError, match="direction"):
            get_p_value(null_dist, obs_stat, "sideways")

    def test_incomplete_distribution(self, two_group, obs_stat):
        """A cancelled distribution is refused."""
        cancel = threading.Event()
        cancel.set()
        dist = calculate(generate(two_group, reps=10, seed=1, cancel=cancel),
                         "diff in means", order=ORDER)
        with pytest.raises(IncompleteDistributionError) as exc:
            get_p_value(dist, obs_stat, "two-sided")
        assert exc.value.n_completed == 0
        assert exc.value.n_requested == 10

    def test_observed_not_a_distribution(self, obs_stat):
        """The first argument must be a NullDistribution."""
        with pytest.raises(TypeError):
            get_p_value(obs_stat, obs_stat, "two-sided")

    def test_summary_and_repr(self, null_dist, obs_stat):
        """Summary heading, repr and float conversion."""
        p = get_p_value(null_dist, obs_stat, "greater")
        assert "RANDOMIZATION P-VALUE" in p.summary()
        assert repr(p).startswith("PValueSolution(p_value=")
        assert float(p) == p.p_value


# ---------------------------------------------------------------------------
# get_confidence_interval
# ---------------------------------------------------------------------------

class TestConfidenceInterval:
    """Intervals from a bootstrap distribution."""

    def test_percentile(self, boot_dist):
        """Percentile bounds are the distribution quantiles."""
        ci = get_confidence_interval(boot_dist, level=0.95)
        assert isinstance(ci, CISolution)
        assert ci.lower == pytest.approx(np.quantile(boot_dist.stat, 0.025))
        assert ci.upper == pytest.approx(np.quantile(boot_dist.stat, 0.975))
        assert ci.ci_type == "percentile"

    def test_contains_sample_mean(self, boot_dist, numeric_data):
        """The interval covers the sample mean."""
        ci = get_confidence_interval(boot_dist)
        assert ci.lower < numeric_data["y"].mean() < ci.upper

    def test_se(self, boot_dist, numeric_data):
        """Standard-error interval is centred on the point estimate."""
        obs = calculate(specify(numeric_data, response="y"), "mean")
        ci = get_confidence_interval(boot_dist, type="se", point_estimate=obs)
        half = sp_stats.norm.ppf(0.975) * np.std(boot_dist.stat, ddof=1)
        assert ci.lower == pytest.approx(obs.value - half)
        assert ci.upper == pytest.approx(obs.value + half)
        assert ci.point_estimate == obs.value

    def test_bias_corrected_close_to_percentile(self, boot_dist, numeric_data):
        """Bias correction moves little for a symmetric statistic."""
        est = numeric_data["y"].mean()
        bc = get_confidence_interval(boot_dist, type="bias-corrected",
                                     point_estimate=est)
        perc = get_confidence_interval(boot_dist)
        assert bc.lower == pytest.approx(perc.lower, abs=0.1)
        assert bc.upper == pytest.approx(perc.upper, abs=0.1)

    def test_level_widens_interval(self, boot_dist):
        """Higher levels give wider intervals."""
        narrow = get_confidence_interval(boot_dist, level=0.8)
        wide = get_confidence_interval(boot_dist, level=0.99)
        assert wide.lower < narrow.lower
        assert wide.upper > narrow.upper

    @pytest.mark.parametrize("ci_type", ["se", "bias-corrected"])
    def test_point_estimate_required(self, boot_dist, ci_type):
        """se and bias-corrected need a point estimate."""
        with pytest.raises(ValidationError, match="point_estimate"):
            get_confidence_interval(boot_dist, type=ci_type)

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5, "high"])
    def test_bad_level(self, boot_dist, level):
        """level must be a number in (0, 1)."""
        with pytest.raises(ValidationError, match="level"):
            get_confidence_interval(boot_dist, level=level)

    def test_unknown_type(self, boot_dist):
        """Unknown interval types raise."""
        with pytest.raises(ValidationError, match="type"):
            get_confidence_interval(boot_dist, type="studentized")

    def test_type_aliases(self, boot_dist):
        """Interval type aliases resolve to canonical names."""
        assert get_confidence_interval(boot_dist, type="perc").ci_type == "percentile"
        ci = get_confidence_interval(boot_dist, type="bias_corrected",
                                     point_estimate=5.0)
        assert ci.ci_type == "bias-corrected"

    def test_summary_and_repr(self, boot_dist):
        """Summary reports the level; repr and interval agree."""
        ci = get_confidence_interval(boot_dist)
        assert "95% interval" in ci.summary()
        assert repr(ci).startswith("CISolution(lower=")
        assert ci.interval == (ci.lower, ci.upper)


class TestCIFunctions:
    """Interval functions on an even grid."""

    DIST = np.linspace(-1.0, 1.0, 2001)

    def test_percentile_symmetric(self):
        """Percentile bounds are symmetric on a symmetric grid."""
        lo, hi = ci_percentile(self.DIST, 0.9)
        assert lo == pytest.approx(-0.9)
        assert hi == pytest.approx(0.9)

    def test_se_centred(self):
        """The se interval is centred on the estimate."""
        lo, hi = ci_se(self.DIST, 0.95, 2.0)
        assert (lo + hi) / 2 == pytest.approx(2.0)

    def test_bias_corrected_unbiased_equals_percentile(self):
        """An estimate at the median leaves the percentile interval."""
        # Estimate at the median: no bias correction
        assert ci_bias_corrected(self.DIST, 0.9, 0.0) == pytest.approx(
            ci_percentile(self.DIST, 0.9), abs=1e-3,
        )
