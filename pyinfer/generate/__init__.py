"""
Replicate generation.

Public API:
    generate(data, reps, type)  - bootstrap / permute / draw replicates
    GenerateDesign              - validated generation request
    ReplicateSet                - sequence of replicate InferData
"""

from pyinfer.generate.solvers import generate
from pyinfer.generate.design import GenerateDesign
from pyinfer.generate.solution import ReplicateSet
from pyinfer.generate._common import (
    BOOTSTRAP,
    PERMUTE,
    DRAW,
    VALID_GENERATION_TYPES,
)

__all__ = [
    "generate",
    "GenerateDesign",
    "ReplicateSet",
    "BOOTSTRAP",
    "PERMUTE",
    "DRAW",
    "VALID_GENERATION_TYPES",
]
