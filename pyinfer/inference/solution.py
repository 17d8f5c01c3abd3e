"""
Solution wrappers for p-values and confidence intervals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pyinfer.core.result import Result
from pyinfer.inference._common import CIParams, PValueParams

if TYPE_CHECKING:
    from pyinfer.inference.design import CIDesign, PValueDesign


@dataclass
class PValueSolution:
    """User-facing randomization p-value."""
    _result: Result[PValueParams]
    _design: 'PValueDesign'

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def direction(self) -> str:
        return self._result.params.direction

    @property
    def observed(self) -> float:
        return self._result.params.observed

    @property
    def n_used(self) -> int:
        """Replicates entering the proportion."""
        return self._result.params.n_used

    @property
    def n_excluded(self) -> int:
        """Replicates excluded because the statistic was undefined."""
        return self._result.params.n_excluded

    @property
    def stat(self) -> str:
        return self._design.stat

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

    def __float__(self) -> float:
        return self.p_value

    def summary(self) -> str:
        lines = [
            "\nRANDOMIZATION P-VALUE",
            "",
            f"Statistic: {self.stat} ({self._design.signature})",
            f"Observed: {self.observed:.6g}",
            f"Direction: {self.direction}",
            f"p-value: {self.p_value:.4g}  (from {self.n_used} replicates)",
        ]
        if self.n_excluded:
            lines.append(f"Excluded undefined replicates: {self.n_excluded}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PValueSolution(p_value={self.p_value:.4g}, "
            f"direction={self.direction!r}, n={self.n_used})"
        )


@dataclass
class CISolution:
    """User-facing confidence interval."""
    _result: Result[CIParams]
    _design: 'CIDesign'

    @property
    def lower(self) -> float:
        return self._result.params.lower

    @property
    def upper(self) -> float:
        return self._result.params.upper

    @property
    def interval(self) -> tuple[float, float]:
        return self.lower, self.upper

    @property
    def level(self) -> float:
        return self._result.params.level

    @property
    def ci_type(self) -> str:
        return self._result.params.ci_type

    @property
    def point_estimate(self) -> float | None:
        return self._result.params.point_estimate

    @property
    def n_used(self) -> int:
        return self._result.params.n_used

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

    def summary(self) -> str:
        lines = [
            "\nCONFIDENCE INTERVAL",
            "",
            f"Statistic: {self._design.stat}",
            f"Method: {self.ci_type}",
            f"{self.level * 100:g}% interval: [{self.lower:.6g}, {self.upper:.6g}]",
        ]
        if self.point_estimate is not None:
            lines.append(f"Point estimate: {self.point_estimate:.6g}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CISolution(lower={self.lower:.6g}, upper={self.upper:.6g}, "
            f"level={self.level:g}, type={self.ci_type!r})"
        )
