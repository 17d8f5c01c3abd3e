"""
Solution wrappers for calculated statistics.

NullDistribution wraps Result[StatParams] for a statistic computed over
generated replicates; ObservedStatistic wraps the single value computed
on observed data. Both expose the statistic name and role signature so
consumers can check they are comparing like with like.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyinfer.core.result import Result
from pyinfer.calculate._common import StatParams

if TYPE_CHECKING:
    from pyinfer.calculate.design import CalculateDesign


@dataclass
class _StatSolution:
    """Shared accessors for calculated statistics."""
    _result: Result[StatParams]
    _design: 'CalculateDesign'

    @property
    def stat_name(self) -> str:
        """Canonical statistic name (e.g. 'diff in means')."""
        return self._result.params.stat_name

    @property
    def signature(self) -> str:
        """Role signature the statistic was computed for."""
        return self._result.params.signature

    @property
    def order(self) -> tuple[Any, Any] | None:
        """Two-group order used, minuend first."""
        return self._result.params.order

    @property
    def null_type(self) -> str | None:
        return self._result.info.get('null_type')

    @property
    def response(self) -> str:
        return self._design.source.response

    @property
    def explanatory(self) -> tuple[str, ...]:
        return self._design.source.explanatory

    @property
    def n_dropped(self) -> NDArray[np.integer[Any]]:
        """Rows dropped for missing values, per value."""
        return self._result.params.n_dropped

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings


@dataclass
class NullDistribution(_StatSolution):
    """
    User-facing null distribution table.

    One statistic value per generated replicate, in replicate order.
    Length always equals the number of replicates generated; undefined
    replicates hold NaN.
    """

    @property
    def stat(self) -> NDArray[np.floating[Any]]:
        """Statistic values, shape (R,)."""
        return self._result.params.stat

    @property
    def replicate(self) -> NDArray[np.integer[Any]]:
        """Replicate ids aligned with `stat`."""
        return self._result.params.replicate

    @property
    def reps(self) -> int:
        """Replicates requested by the generation run."""
        return self._result.params.reps

    @property
    def complete(self) -> bool:
        """False if generation was cancelled before `reps` replicates."""
        return self._result.params.complete

    @property
    def n_undefined(self) -> int:
        return self._result.params.n_undefined

    @property
    def generation(self) -> str | None:
        return self._result.info.get('generation')

    def __len__(self) -> int:
        return len(self._result.params.stat)

    def __array__(self, dtype=None, copy=None):
        out = self._result.params.stat
        return out.astype(dtype) if dtype is not None else out.copy()

    def to_frame(self) -> pd.DataFrame:
        """DataFrame with columns 'replicate' and 'stat'."""
        return pd.DataFrame({'replicate': self.replicate, 'stat': self.stat})

    def summary(self) -> str:
        finite = self.stat[np.isfinite(self.stat)]
        lines = [
            "\nNULL DISTRIBUTION",
            "",
            f"Statistic: {self.stat_name} ({self.signature})",
            f"Null hypothesis: {self.null_type}",
            f"Generation: {self.generation}",
            f"Replicates: {len(self)} of {self.reps}"
            + ("" if self.complete else " (INCOMPLETE)"),
        ]
        if self.order is not None:
            lines.append(f"Order: {self.order[0]!r} - {self.order[1]!r}")
        if len(finite):
            lines.append(
                f"Mean: {np.mean(finite):.6g}   SD: "
                f"{np.std(finite, ddof=1) if len(finite) > 1 else float('nan'):.6g}"
            )
            lines.append(
                f"Range: [{np.min(finite):.6g}, {np.max(finite):.6g}]"
            )
        if self.n_undefined:
            lines.append(f"Undefined (NaN) replicates: {self.n_undefined}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"NullDistribution(stat={self.stat_name!r}, "
            f"reps={len(self)}/{self.reps}, signature={self.signature!r})"
        )


@dataclass
class ObservedStatistic(_StatSolution):
    """User-facing statistic computed on observed data."""

    @property
    def value(self) -> float:
        return float(self._result.params.stat[0])

    @property
    def stat(self) -> NDArray[np.floating[Any]]:
        """Value as a length-1 array."""
        return self._result.params.stat

    @property
    def n_rows_dropped(self) -> int:
        """Rows dropped for missing values before computation."""
        return int(self._result.params.n_dropped[0])

    def __float__(self) -> float:
        return self.value

    def summary(self) -> str:
        lines = [
            "\nOBSERVED STATISTIC",
            "",
            f"Statistic: {self.stat_name} ({self.signature})",
            f"Value: {self.value:.6g}",
        ]
        if self.order is not None:
            lines.append(f"Order: {self.order[0]!r} - {self.order[1]!r}")
        if self.n_rows_dropped:
            lines.append(f"Rows dropped (missing values): {self.n_rows_dropped}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ObservedStatistic(stat={self.stat_name!r}, "
            f"value={self.value:.6g})"
        )
