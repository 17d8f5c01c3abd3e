"""
Null hypothesis declaration.

Public API:
    hypothesize(data, null, ...)  - attach a validated null to InferData
    NullHypothesis                - the null descriptor (tagged union)
    NullParameter                 - point null parameter payload
"""

from pyinfer.hypothesize.solvers import hypothesize
from pyinfer.hypothesize.design import NullHypothesis
from pyinfer.hypothesize._common import (
    NullParameter,
    POINT,
    INDEPENDENCE,
    PAIRED_INDEPENDENCE,
    VALID_NULL_TYPES,
    VALID_PARAMETERS,
)

__all__ = [
    "hypothesize",
    "NullHypothesis",
    "NullParameter",
    "POINT",
    "INDEPENDENCE",
    "PAIRED_INDEPENDENCE",
    "VALID_NULL_TYPES",
    "VALID_PARAMETERS",
]
