"""
Core infrastructure for pyinfer.

Shared abstractions used by every pipeline stage.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, per-replicate random streams
"""

from pyinfer.core.result import Result
from pyinfer.core.exceptions import (
    PyInferError,
    ValidationError,
    InvalidRoleError,
    NullHypothesisError,
    IncompatibleParameterError,
    ParameterValueError,
    IncompatibleStatisticError,
    GenerationError,
    IncompleteDistributionError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyInferError",
    "ValidationError",
    "InvalidRoleError",
    "NullHypothesisError",
    "IncompatibleParameterError",
    "ParameterValueError",
    "IncompatibleStatisticError",
    "GenerationError",
    "IncompleteDistributionError",
]
