"""
pyinfer: randomization-based statistical inference for pandas data.

A small grammar of four composable verbs:

    specify()      declare response and explanatory roles
    hypothesize()  attach a null hypothesis
    generate()     bootstrap, permute or draw replicates under the null
    calculate()    reduce each replicate to a statistic

followed by get_p_value() and get_confidence_interval() on the resulting
null distribution.

Submodules:
    specify: Dataset wrapper and role declaration
    hypothesize: Null hypothesis descriptor
    generate: Replicate generation
    calculate: Statistic calculation and the null distribution table
    inference: p-values and confidence intervals
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

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
from pyinfer.specify import specify, InferData
from pyinfer.hypothesize import hypothesize, NullHypothesis, NullParameter
from pyinfer.generate import generate, ReplicateSet
from pyinfer.calculate import calculate, NullDistribution, ObservedStatistic
from pyinfer.inference import get_p_value, get_confidence_interval

__all__ = [
    "__version__",
    # Pipeline
    "specify",
    "hypothesize",
    "generate",
    "calculate",
    "get_p_value",
    "get_confidence_interval",
    # Types
    "InferData",
    "NullHypothesis",
    "NullParameter",
    "ReplicateSet",
    "NullDistribution",
    "ObservedStatistic",
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
