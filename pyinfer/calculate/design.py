"""
Design class for statistic calculation.

CalculateDesign resolves a statistic request against the declared roles
and null: it looks the (statistic, role signature) pair up in the
dispatch table, fixes the two-group order, and gathers the null
parameters the statistic needs. All checks happen here, before any
replicate is touched.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from pyinfer.calculate._statistics import StatContext
from pyinfer.calculate._table import (
    STATISTICS,
    SUCCESS_STATISTICS,
    TWO_GROUP_STATISTICS,
    VALID_STATISTICS,
    canonical_stat,
    signatures_for,
)
from pyinfer.core.exceptions import IncompatibleStatisticError, ValidationError
from pyinfer.generate.solution import ReplicateSet
from pyinfer.hypothesize._common import INDEPENDENCE, PAIRED_INDEPENDENCE, POINT
from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)


def _resolve_order(
    source: InferData,
    stat: str,
    order: Sequence[Any] | None,
) -> tuple[tuple[Any, Any], str | None]:
    """
    Two-group order and the warning to emit, if any.

    Omitting `order` takes the explanatory variable's natural level order.
    """
    column = source.explanatory[0]
    levels = source.levels(column)
    if len(levels) != 2:
        raise IncompatibleStatisticError(
            f"stat={stat!r} compares two groups, but explanatory {column!r} "
            f"has {len(levels)} levels: {list(levels)}",
            stat=stat,
            signature=source.role_signature,
        )

    if order is None:
        chosen = (levels[0], levels[1])
        msg = (
            f"order not given for stat={stat!r}; using the natural level "
            f"order {list(chosen)}, i.e. {chosen[0]!r} - {chosen[1]!r}"
        )
        return chosen, msg

    if isinstance(order, str) or len(order) != 2:
        raise ValidationError(
            f"order must list exactly two levels of {column!r}, got {order!r}"
        )
    first, second = order
    for lv in (first, second):
        if lv not in levels:
            raise ValidationError(
                f"order level {lv!r} is not a level of {column!r}; "
                f"levels are {list(levels)}"
            )
    if first == second:
        raise ValidationError(f"order must name two different levels, got {order!r}")
    # Use the stored level objects so comparisons match the data exactly
    return (levels[levels.index(first)], levels[levels.index(second)]), None


def _t_mu(source: InferData, signature: str) -> float:
    """Hypothesized mean for a one-sample t; validates the t request."""
    null = source.null
    if signature == "num ~ cat":
        if null is None or null.null_type != INDEPENDENCE:
            raise IncompatibleStatisticError(
                "stat='t' with an explanatory variable is the two-sample t; "
                "declare null='independence' with hypothesize() first",
                stat="t",
                signature=signature,
            )
        return 0.0
    if null is None or null.null_type == PAIRED_INDEPENDENCE:
        return 0.0
    if null.parameter_kind != "mu":
        raise IncompatibleStatisticError(
            "the one-sample t under a point null compares against mu; the "
            f"declared null is {null!r}",
            stat="t",
            signature=signature,
        )
    return float(null.parameter_value)


def _z_p0(source: InferData) -> float:
    null = source.null
    if null is None or null.null_type != POINT or null.parameter_kind != "p":
        raise IncompatibleStatisticError(
            "the one-sample z compares against a hypothesized proportion; "
            "declare null='point' with p using hypothesize() first",
            stat="z",
            signature=source.role_signature,
        )
    return null.probabilities(source.response_levels, source.success)[source.success]


def _expected_p(source: InferData) -> tuple[float, ...] | None:
    null = source.null
    if null is None or null.parameter_kind != "p":
        return None
    probs = null.probabilities(source.response_levels, source.success)
    return tuple(probs[lv] for lv in source.response_levels)


@dataclass(frozen=True)
class CalculateDesign:
    """
    Frozen design for statistic calculation.

    Attributes:
        source: Observed InferData carrying roles and null.
        items: InferData to evaluate (the replicates, or the source alone).
        stat: Canonical statistic name.
        signature: Role signature of the source.
        function: Statistic implementation from the dispatch table.
        context: Fixed statistic inputs (order, success, null values).
        is_distribution: True when items are generated replicates.
        reps: Replicates requested by the generation run (1 when observed).
        complete: False when the replicates come from a cancelled run.
        warnings: Soft warnings raised while resolving the request.
    """
    source: InferData
    items: tuple[InferData, ...]
    stat: str
    signature: str
    function: Callable
    context: StatContext
    is_distribution: bool
    reps: int
    complete: bool
    generation: str | None = None
    warnings: tuple[str, ...] = ()

    @classmethod
    def for_calculate(
        cls,
        x: InferData | ReplicateSet,
        stat: str,
        order: Sequence[Any] | None = None,
    ) -> CalculateDesign:
        """
        Create a calculation design with validation.

        Args:
            x: Observed InferData or a ReplicateSet from generate().
            stat: Statistic name (see VALID_STATISTICS).
            order: Two levels of the explanatory variable, minuend first.

        Raises:
            IncompatibleStatisticError: Unknown statistic, statistic not
                defined for the roles, missing `success`, or a t/z request
                without the null it needs.
            ValidationError: Malformed `order`.
        """
        if isinstance(x, ReplicateSet):
            source = x.source
            items = x.replicates
            is_distribution = True
            reps, complete, generation = x.reps, x.complete, x.generation
        elif isinstance(x, InferData):
            source = x
            items = (x,)
            is_distribution = False
            reps, complete, generation = 1, True, x.generation
        else:
            raise TypeError(
                "calculate() expects InferData or a ReplicateSet, got "
                f"{type(x).__name__}"
            )

        name = canonical_stat(stat)
        if name is None:
            raise IncompatibleStatisticError(
                f"unknown stat {stat!r}; choose one of {list(VALID_STATISTICS)}",
                stat=str(stat),
            )

        signature = source.role_signature
        if (name, signature) not in STATISTICS:
            raise IncompatibleStatisticError(
                f"stat={name!r} is not defined for roles {signature!r} "
                f"(response {source.response!r}"
                + (f", explanatory {list(source.explanatory)}" if source.explanatory else "")
                + f"); it accepts {list(signatures_for(name))}",
                stat=name,
                signature=signature,
            )

        if name in SUCCESS_STATISTICS and source.success is None:
            raise IncompatibleStatisticError(
                f"stat={name!r} counts a success level of response "
                f"{source.response!r}, but `success` was not declared; pass "
                f"success= to specify() (levels: {list(source.response_levels)})",
                stat=name,
                signature=signature,
            )

        warnings_list: list[str] = []
        resolved_order = None
        if (name, signature) in TWO_GROUP_STATISTICS:
            resolved_order, msg = _resolve_order(source, name, order)
            if msg is not None:
                warnings.warn(msg, UserWarning, stacklevel=3)
                warnings_list.append(msg)
        elif order is not None:
            logger.debug("order %r ignored for stat=%r", order, name)

        if name == "F" and len(source.levels(source.explanatory[0])) < 2:
            raise IncompatibleStatisticError(
                f"stat='F' needs an explanatory variable with at least two "
                f"levels; {source.explanatory[0]!r} has "
                f"{list(source.levels(source.explanatory[0]))}",
                stat=name,
                signature=signature,
            )

        mu = _t_mu(source, signature) if name == "t" else 0.0
        p0 = _z_p0(source) if (name, signature) == ("z", "cat") else None
        expected_p = _expected_p(source) if (name, signature) == ("Chisq", "cat") else None

        context = StatContext(
            success=source.success,
            order=resolved_order,
            mu=mu,
            p0=p0,
            expected_p=expected_p,
            response_levels=source.response_levels,
            explanatory_levels=(
                source.levels(source.explanatory[0]) if source.explanatory else ()
            ),
        )

        return cls(
            source=source,
            items=tuple(items),
            stat=name,
            signature=signature,
            function=STATISTICS[(name, signature)],
            context=context,
            is_distribution=is_distribution,
            reps=reps,
            complete=complete,
            generation=generation,
            warnings=tuple(warnings_list),
        )
