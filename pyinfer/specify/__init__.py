"""
Role declaration.

Public API:
    specify(data, formula)  - declare response/explanatory roles
    InferData               - the annotated dataset wrapper
"""

from pyinfer.specify.solvers import specify
from pyinfer.specify.design import InferData
from pyinfer.specify._variables import NUMERIC, CATEGORICAL, LOGICAL

__all__ = [
    "specify",
    "InferData",
    "NUMERIC",
    "CATEGORICAL",
    "LOGICAL",
]
