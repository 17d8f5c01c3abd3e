"""
Per-replicate random streams.

Replicate i always draws from a generator seeded by (seed, i), so a run
is reproducible regardless of how replicates are scheduled across
workers. Streams are built with numpy's SeedSequence spawn keys, which
guarantees statistically independent, non-overlapping streams.
"""

from __future__ import annotations

import numpy as np


def resolve_seed(seed: int | None) -> int:
    """
    Return a concrete integer seed.

    When seed is None, fresh OS entropy is drawn once so the caller can
    record it and replay the run.
    """
    if seed is None:
        return int(np.random.SeedSequence().entropy)
    if isinstance(seed, (bool, np.bool_)) or not isinstance(seed, (int, np.integer)):
        raise TypeError(f"seed must be an int or None, got {type(seed).__name__}")
    if seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}")
    return int(seed)


def replicate_rng(seed: int, index: int) -> np.random.Generator:
    """Generator for replicate `index` (0-based) of a run seeded with `seed`."""
    return np.random.default_rng(
        np.random.SeedSequence(entropy=seed, spawn_key=(index,))
    )
