"""
Generic result container for all pyinfer computations.

The Result class provides a standardized envelope that every computed
output uses (replicate sets, statistic tables, p-values, intervals). This
enables shared tooling for timing, logging and reproducibility while
allowing each stage to define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (seed, counts, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for pipeline computations.

    Type Parameters:
        P: The stage-specific parameter payload type

    Attributes:
        params: Stage-specific payload (replicates, statistic values, ...)
        info: Structured metadata (seed, role signature, dropped rows)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=StatParams(stat=values, ...),
        ...     info={'stat': 'diff in means', 'signature': 'num ~ cat'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_calculate'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
