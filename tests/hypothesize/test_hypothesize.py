"""
Tests for hypothesize() and the NullHypothesis descriptor.

Validation order: null type cardinality, role fit, parameter arity,
parameter compatibility/value. Each test below trips exactly one step
(or several, to check which one wins).
"""

import warnings

import numpy as np
import pandas as pd
import pytest

from pyinfer import hypothesize, specify
from pyinfer.core.compute.tolerances import MACHINE_EPSILON
from pyinfer.core.exceptions import (
    IncompatibleParameterError,
    InvalidRoleError,
    NullHypothesisError,
    ParameterValueError,
)
from pyinfer.hypothesize import (
    INDEPENDENCE,
    PAIRED_INDEPENDENCE,
    POINT,
    NullHypothesis,
    NullParameter,
)


@pytest.fixture
def num(numeric_data):
    return specify(numeric_data, response="y")


@pytest.fixture
def two_group(two_group_data):
    return specify(two_group_data, response="y", explanatory="group")


@pytest.fixture
def answer(survey_data):
    return specify(survey_data, response="answer", success="yes")


@pytest.fixture
def three_level():
    df = pd.DataFrame({"colour": ["red"] * 5 + ["green"] * 3 + ["blue"] * 2})
    return specify(df, response="colour")


# ---------------------------------------------------------------------------
# Point nulls
# ---------------------------------------------------------------------------

class TestPointNull:
    """Point nulls on mu, med, sigma and p."""

    def test_mu(self, num):
        """A point mu is recorded on the returned data."""
        d = hypothesize(num, "point", mu=5.0)
        assert d.null.null_type == POINT
        assert d.null.parameter == NullParameter("mu", 5.0)
        assert d.null.parameter_value == 5.0

    @pytest.mark.parametrize("kind", ["med", "sigma"])
    def test_other_numeric_parameters(self, num, kind):
        """med and sigma are accepted as point parameters."""
        d = hypothesize(num, "point", **{kind: 2.0})
        assert d.null.parameter_kind == kind

    def test_scalar_p(self, answer):
        """A scalar p expands to success and its complement."""
        d = hypothesize(answer, "point", p=0.3)
        assert d.null.parameter_kind == "p"
        assert d.null.probabilities(answer.response_levels, "yes") == {
            "no": pytest.approx(0.7), "yes": 0.3,
        }

    def test_scalar_p_numpy_float(self, answer):
        """numpy scalars are accepted for p."""
        d = hypothesize(answer, "point", p=np.float64(0.25))
        assert d.null.parameter_value == 0.25

    def test_scalar_p_ignores_unused_category(self):
        """A Categorical with an empty third category still takes a scalar p."""
        df = pd.DataFrame({"a": pd.Categorical(["yes", "no", "no", "yes"],
                                               categories=["yes", "no", "maybe"])})
        d = hypothesize(specify(df, response="a", success="yes"), "point", p=0.4)
        assert d.null.probabilities(d.response_levels, "yes") == {
            "yes": 0.4, "no": pytest.approx(0.6),
        }

    def test_vector_p(self, three_level):
        """A mapping assigns p to every response level."""
        d = hypothesize(three_level, "point",
                        p={"red": 0.5, "green": 0.3, "blue": 0.2})
        assert d.null.parameter.is_vector
        # ordered like the natural levels
        assert list(d.null.parameter_value) == ["blue", "green", "red"]

    def test_vector_p_from_series(self, three_level):
        """A pandas Series is read as a mapping."""
        p = pd.Series({"red": 0.5, "green": 0.3, "blue": 0.2})
        d = hypothesize(three_level, "point", p=p)
        assert d.null.parameter_value["red"] == 0.5

    def test_vector_p_sum_within_epsilon(self, three_level):
        """Sums within the tolerance of 1 are accepted."""
        eps = MACHINE_EPSILON
        hypothesize(three_level, "point",
                    p={"red": 0.5 + eps, "green": 0.25, "blue": 0.25})
        hypothesize(three_level, "point",
                    p={"red": 0.5 - eps, "green": 0.25, "blue": 0.25})

    def test_vector_p_sum_three_epsilon_off(self, three_level):
        """Sums three epsilons away from 1 are rejected."""
        eps = MACHINE_EPSILON
        with pytest.raises(ParameterValueError, match="sum to 1"):
            hypothesize(three_level, "point",
                        p={"red": 0.5 + 3 * eps, "green": 0.25, "blue": 0.25})

    def test_input_not_mutated(self, num):
        """hypothesize() returns a new object."""
        hypothesize(num, "point", mu=1.0)
        assert num.null is None

    def test_alias_case_insensitive(self, num):
        """Null type names are case-insensitive."""
        d = hypothesize(num, "Point", mu=0.0)
        assert d.null.is_point


class TestPointNullErrors:
    """Point-null parameter arity, compatibility and value errors."""

    def test_no_parameter(self, num):
        """A point null needs a parameter."""
        with pytest.raises(NullHypothesisError) as exc:
            hypothesize(num, "point")
        assert exc.value.rule == "parameter_arity"

    def test_two_parameters(self, num):
        """A point null takes exactly one parameter."""
        with pytest.raises(NullHypothesisError) as exc:
            hypothesize(num, "point", mu=0.0, sigma=1.0)
        assert exc.value.rule == "parameter_arity"

    def test_p_on_numeric(self, num):
        """p does not apply to a numeric response."""
        with pytest.raises(IncompatibleParameterError) as exc:
            hypothesize(num, "point", p=0.5)
        assert exc.value.parameter == "p"
        assert exc.value.response_type == "numeric"

    def test_mu_on_categorical(self, answer):
        """mu does not apply to a categorical response."""
        with pytest.raises(IncompatibleParameterError):
            hypothesize(answer, "point", mu=0.5)

    @pytest.mark.parametrize("p", [-0.1, 1.5, float("nan")])
    def test_p_out_of_range(self, answer, p):
        """p outside [0, 1] is rejected."""
        with pytest.raises(ParameterValueError):
            hypothesize(answer, "point", p=p)

    def test_scalar_p_needs_success(self, survey_data):
        """A scalar p needs a declared success level."""
        d = specify(survey_data, response="answer")
        with pytest.raises(IncompatibleParameterError, match="success"):
            hypothesize(d, "point", p=0.5)

    def test_scalar_p_needs_two_levels(self):
        """A scalar p needs a two-level response."""
        df = pd.DataFrame({"c": ["a", "b", "c", "a"]})
        d = specify(df, response="c", success="a")
        with pytest.raises(IncompatibleParameterError, match="two-level"):
            hypothesize(d, "point", p=0.5)

    def test_vector_p_as_list(self, three_level):
        """A bare list does not say which level gets which probability."""
        with pytest.raises(ParameterValueError, match="map each"):
            hypothesize(three_level, "point", p=[0.5, 0.3, 0.2])

    def test_vector_p_missing_level(self, three_level):
        """Every response level needs a probability."""
        with pytest.raises(ParameterValueError, match="missing"):
            hypothesize(three_level, "point", p={"red": 0.5, "green": 0.5})

    def test_sigma_not_positive(self, num):
        """sigma must be positive."""
        with pytest.raises(ParameterValueError, match="positive"):
            hypothesize(num, "point", sigma=0.0)

    def test_infinite_mu(self, num):
        """mu must be finite."""
        with pytest.raises(ParameterValueError, match="finite"):
            hypothesize(num, "point", mu=float("inf"))

    def test_point_with_explanatory(self, two_group):
        """A point null takes no explanatory variable."""
        with pytest.raises(InvalidRoleError, match="point null"):
            hypothesize(two_group, "point", mu=0.0)


# ---------------------------------------------------------------------------
# Independence nulls
# ---------------------------------------------------------------------------

class TestIndependenceNull:
    """Independence and paired independence."""

    def test_independence(self, two_group):
        """Independence needs a response and an explanatory variable."""
        d = hypothesize(two_group, "independence")
        assert d.null == NullHypothesis.for_independence()
        assert d.null.parameter is None

    def test_independence_needs_explanatory(self, num):
        """Independence without an explanatory variable is rejected."""
        with pytest.raises(InvalidRoleError, match="explanatory"):
            hypothesize(num, "independence")

    def test_independence_parameter_ignored_with_warning(self, two_group):
        """A parameter on an independence null warns and is dropped."""
        with pytest.warns(UserWarning, match="ignored"):
            d = hypothesize(two_group, "independence", mu=3.0)
        assert d.null.null_type == INDEPENDENCE
        assert d.null.parameter is None

    def test_paired_independence(self):
        """Paired independence on a numeric difference."""
        df = pd.DataFrame({"diff": [0.5, -0.2, 1.1, 0.3]})
        d = specify(df, response="diff", paired=True)
        d = hypothesize(d, "paired independence")
        assert d.null.null_type == PAIRED_INDEPENDENCE

    def test_paired_independence_underscore(self):
        """The underscore spelling is accepted."""
        df = pd.DataFrame({"diff": [0.5, -0.2]})
        d = hypothesize(specify(df, response="diff"), "paired_independence")
        assert d.null == NullHypothesis.for_paired_independence()

    def test_paired_independence_with_explanatory(self, two_group):
        """Paired independence takes no explanatory variable."""
        with pytest.raises(InvalidRoleError, match="paired"):
            hypothesize(two_group, "paired independence")


# ---------------------------------------------------------------------------
# Structural errors and validation order
# ---------------------------------------------------------------------------

class TestStructure:
    """Null type cardinality and validation order."""

    def test_two_null_types(self, two_group):
        """Exactly one null type may be declared."""
        with pytest.raises(NullHypothesisError) as exc:
            hypothesize(two_group, ["point", "independence"])
        assert exc.value.rule == "type_cardinality"

    def test_single_element_list(self, two_group):
        """A one-element list is accepted."""
        d = hypothesize(two_group, ["independence"])
        assert d.null.null_type == INDEPENDENCE

    def test_unknown_null_type(self, num):
        """Unknown null types are rejected."""
        with pytest.raises(NullHypothesisError) as exc:
            hypothesize(num, "equality")
        assert exc.value.rule == "unknown_type"

    def test_already_declared(self, num):
        """A null cannot be declared twice."""
        d = hypothesize(num, "point", mu=0.0)
        with pytest.raises(NullHypothesisError) as exc:
            hypothesize(d, "point", mu=1.0)
        assert exc.value.rule == "already_declared"

    def test_type_checked_before_roles(self, num):
        """Cardinality is checked before roles."""
        # Both the null list and the roles are wrong; the type error wins
        with pytest.raises(NullHypothesisError):
            hypothesize(num, ["independence", "point"])

    def test_roles_checked_before_arity(self, two_group):
        """Roles are checked before arity."""
        # Point null with explanatory and two parameters: role error wins
        with pytest.raises(InvalidRoleError):
            hypothesize(two_group, "point", mu=0.0, med=1.0)

    def test_arity_checked_before_compatibility(self, num):
        """Arity is checked before compatibility."""
        # Two parameters, one incompatible: arity error wins
        with pytest.raises(NullHypothesisError):
            hypothesize(num, "point", p=0.5, mu=0.0)

    def test_not_infer_data(self, numeric_data):
        """A bare DataFrame is rejected."""
        with pytest.raises(TypeError):
            hypothesize(numeric_data, "point", mu=0.0)

    def test_no_warning_for_point(self, num):
        """A valid point null is silent."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            hypothesize(num, "point", mu=0.0)


class TestNullHypothesis:
    """The NullHypothesis descriptor."""

    def test_frozen(self):
        """Descriptors are immutable."""
        null = NullHypothesis.for_independence()
        with pytest.raises(Exception):
            null.null_type = POINT

    def test_for_point_requires_parameter(self):
        """for_point() needs a parameter."""
        with pytest.raises(NullHypothesisError):
            NullHypothesis.for_point(None)

    def test_repr(self):
        """repr shows type and parameter."""
        null = NullHypothesis.for_point(NullParameter("mu", 2.0))
        assert repr(null) == "NullHypothesis('point', NullParameter(mu=2))"

    def test_parameter_description(self):
        """Parameters carry a readable description."""
        assert NullParameter("sigma", 1.0).description == "standard deviation"
