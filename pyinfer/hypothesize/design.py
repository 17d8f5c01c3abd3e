"""
NullHypothesis: tagged union for a declared null hypothesis.

The `null_type` field identifies the variant:

    point                -> parameter is a NullParameter
    independence         -> no parameter
    paired independence  -> no parameter

Built via factory classmethods; from_data() runs the full validation
chain against an InferData. Immutable after construction.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TYPE_CHECKING

import numpy as np
import pandas as pd

from pyinfer.core.exceptions import (
    IncompatibleParameterError,
    InvalidRoleError,
    NullHypothesisError,
    ParameterValueError,
)
from pyinfer.core.validation import (
    check_finite_scalar,
    check_probability,
    check_probability_mapping,
)
from pyinfer.hypothesize._common import (
    INDEPENDENCE,
    NULL_TYPE_ALIASES,
    PAIRED_INDEPENDENCE,
    POINT,
    VALID_NULL_TYPES,
    VALID_PARAMETERS,
    NullParameter,
)
from pyinfer.specify._variables import NUMERIC

if TYPE_CHECKING:
    from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)


def _resolve_null_type(null: Any) -> str:
    """Step 1: exactly one known null type."""
    if isinstance(null, (list, tuple)):
        if len(null) != 1:
            raise NullHypothesisError(
                f"exactly one null type must be given, got {len(null)}: "
                f"{list(null)}",
                rule="type_cardinality",
            )
        null = null[0]
    if not isinstance(null, str):
        raise NullHypothesisError(
            f"null must be one of {VALID_NULL_TYPES}, got {null!r}",
            rule="type_cardinality",
        )
    key = null.strip().lower()
    if key not in NULL_TYPE_ALIASES:
        raise NullHypothesisError(
            f"null must be one of {VALID_NULL_TYPES}, got {null!r}",
            rule="unknown_type",
        )
    return NULL_TYPE_ALIASES[key]


def _check_roles(data: 'InferData', null_type: str) -> None:
    """Step 2: the declared roles fit the null type."""
    if null_type == POINT:
        if data.explanatory:
            raise InvalidRoleError(
                "a point null concerns the response alone; remove the "
                f"explanatory variable(s) {list(data.explanatory)} or use "
                "null='independence'"
            )
    elif null_type == INDEPENDENCE:
        if not data.explanatory:
            raise InvalidRoleError(
                "null='independence' requires both a response and an "
                "explanatory variable; only the response "
                f"{data.response!r} is specified"
            )
    elif null_type == PAIRED_INDEPENDENCE:
        if data.explanatory:
            raise InvalidRoleError(
                "null='paired independence' takes only the response (the "
                "per-unit difference); remove explanatory variable(s) "
                f"{list(data.explanatory)}"
            )
        if data.response_type != NUMERIC:
            raise InvalidRoleError(
                "null='paired independence' requires a numeric response "
                f"(the paired difference), {data.response!r} is "
                f"{data.response_type}",
                column=data.response,
            )


def _point_parameter(data: 'InferData', kind: str, value: Any) -> NullParameter:
    """Step 4: compatibility and validity of a point-null parameter."""
    rtype = data.response_type

    if kind == "p":
        if rtype == NUMERIC:
            raise IncompatibleParameterError(
                f"p applies to a categorical response; {data.response!r} "
                "is numeric (use mu, med or sigma)",
                parameter="p",
                response_type=rtype,
            )
        if isinstance(value, pd.Series):
            value = value.to_dict()
        if isinstance(value, Mapping):
            probs = check_probability_mapping(value, data.response_levels, "p")
            return NullParameter(kind="p", value=MappingProxyType(probs))
        if np.ndim(value) != 0:
            raise ParameterValueError(
                "a vector p must map each response level to its probability, "
                f"e.g. {{level: probability}}; got {value!r}",
                parameter="p",
                value=value,
            )
        if data.success is None:
            raise IncompatibleParameterError(
                "a single p is the proportion of successes; declare "
                "`success` in specify() first",
                parameter="p",
                response_type=rtype,
            )
        if len(data.response_levels) != 2:
            raise IncompatibleParameterError(
                f"a single p needs a two-level response; {data.response!r} "
                f"has levels {list(data.response_levels)}. Give p as a "
                "mapping level -> probability instead",
                parameter="p",
                response_type=rtype,
            )
        return NullParameter(kind="p", value=check_probability(value, "p"))

    if rtype != NUMERIC:
        raise IncompatibleParameterError(
            f"{kind} applies to a numeric response; {data.response!r} is "
            f"{rtype} (use p)",
            parameter=kind,
            response_type=rtype,
        )
    number = check_finite_scalar(value, kind)
    if kind == "sigma" and number <= 0.0:
        raise ParameterValueError(
            f"sigma must be positive, got {number}", parameter="sigma", value=value,
        )
    return NullParameter(kind=kind, value=number)


@dataclass(frozen=True)
class NullHypothesis:
    """
    A declared null hypothesis.

    Attributes:
        null_type: 'point', 'independence' or 'paired independence'.
        parameter: NullParameter for a point null, else None.

    Do not construct directly; use factory classmethods or from_data().
    """
    null_type: str
    parameter: NullParameter | None = None

    # --- Factory classmethods ---

    @classmethod
    def for_point(cls, parameter: NullParameter) -> NullHypothesis:
        if parameter is None or parameter.kind not in VALID_PARAMETERS:
            raise NullHypothesisError(
                f"a point null needs one of {VALID_PARAMETERS}",
                rule="parameter_arity",
            )
        return cls(null_type=POINT, parameter=parameter)

    @classmethod
    def for_independence(cls) -> NullHypothesis:
        return cls(null_type=INDEPENDENCE)

    @classmethod
    def for_paired_independence(cls) -> NullHypothesis:
        return cls(null_type=PAIRED_INDEPENDENCE)

    @classmethod
    def from_data(
        cls,
        data: 'InferData',
        null: Any,
        *,
        p: Any = None,
        mu: Any = None,
        med: Any = None,
        sigma: Any = None,
    ) -> NullHypothesis:
        """
        Validate a null declaration against `data` and build it.

        Checks run in a fixed order and the first failure is raised:

        1. exactly one known null type
        2. the roles declared on `data` fit the null type
        3. parameter arity (one of p/mu/med/sigma for point; none
           otherwise, where a supplied parameter is ignored with a warning)
        4. parameter compatibility with the response and value validity

        Raises:
            NullHypothesisError: Steps 1 and 3, or a null already declared.
            InvalidRoleError: Step 2.
            IncompatibleParameterError, ParameterValueError: Step 4.
        """
        null_type = _resolve_null_type(null)

        if data.is_replicate:
            raise NullHypothesisError(
                "cannot declare a null on a generated replicate",
                rule="already_declared",
            )
        if data.null is not None:
            raise NullHypothesisError(
                f"a {data.null.null_type!r} null is already declared on this "
                "data; start again from specify()",
                rule="already_declared",
            )

        _check_roles(data, null_type)

        supplied = {
            k: v for k, v in (("p", p), ("mu", mu), ("med", med), ("sigma", sigma))
            if v is not None
        }

        if null_type == POINT:
            if len(supplied) != 1:
                given = list(supplied) or "none"
                raise NullHypothesisError(
                    "a point null needs exactly one of p, mu, med or sigma; "
                    f"got {given}",
                    rule="parameter_arity",
                )
            (kind, value), = supplied.items()
            parameter = _point_parameter(data, kind, value)
            logger.debug("declared point null %r on %r", parameter, data.response)
            return cls.for_point(parameter)

        if supplied:
            warnings.warn(
                f"parameter(s) {list(supplied)} are ignored for "
                f"null={null_type!r}; the null is declared without a "
                "parameter",
                UserWarning,
                stacklevel=3,
            )
        logger.debug("declared %r null on %s", null_type, data.role_signature)
        if null_type == INDEPENDENCE:
            return cls.for_independence()
        return cls.for_paired_independence()

    # --- Properties ---

    @property
    def is_point(self) -> bool:
        return self.null_type == POINT

    @property
    def parameter_kind(self) -> str | None:
        return self.parameter.kind if self.parameter is not None else None

    @property
    def parameter_value(self) -> float | Mapping[Any, float] | None:
        return self.parameter.value if self.parameter is not None else None

    def probabilities(
        self,
        levels: tuple[Any, ...],
        success: Any = None,
    ) -> dict[Any, float]:
        """
        Level probabilities implied by a point `p`, ordered like `levels`.

        A scalar p on a two-level response gives p to `success` and
        1 - p to the other level.
        """
        if self.parameter_kind != "p":
            raise ValueError(f"null has no p parameter: {self!r}")
        value = self.parameter.value
        if isinstance(value, Mapping):
            return {lv: float(value[lv]) for lv in levels}
        return {lv: (value if lv == success else 1.0 - value) for lv in levels}

    def __repr__(self) -> str:
        if self.parameter is None:
            return f"NullHypothesis({self.null_type!r})"
        return f"NullHypothesis({self.null_type!r}, {self.parameter!r})"
