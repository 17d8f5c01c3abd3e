"""
Compute primitives shared across stages: timing, tolerances, RNG streams.
"""

from pyinfer.core.compute.timing import Timer, timed
from pyinfer.core.compute.rng import replicate_rng, resolve_seed

__all__ = [
    "Timer",
    "timed",
    "replicate_rng",
    "resolve_seed",
]
