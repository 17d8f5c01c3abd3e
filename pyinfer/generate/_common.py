"""
Common data structures for replicate generation.

ReplicateParams is the payload wrapped by Result[P] and exposed through
ReplicateSet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyinfer.specify.design import InferData

BOOTSTRAP = "bootstrap"
PERMUTE = "permute"
DRAW = "draw"

VALID_GENERATION_TYPES = (BOOTSTRAP, PERMUTE, DRAW)

# "simulate" is the name used for parametric draws in some interfaces
GENERATION_ALIASES = {
    "bootstrap": BOOTSTRAP,
    "permute": PERMUTE,
    "draw": DRAW,
    "simulate": DRAW,
}


@dataclass(frozen=True)
class ReplicateParams:
    """
    Parameter payload for a generation run.

    - replicates: generated InferData, replicate ids 1..n_completed
    - reps: number of replicates requested
    - seed: integer seed the run can be replayed with
    - generation: generation type used
    - complete: False if the run was cancelled before `reps` replicates
    """
    replicates: tuple['InferData', ...]
    reps: int
    seed: int
    generation: str
    complete: bool

    @property
    def n_completed(self) -> int:
        return len(self.replicates)
