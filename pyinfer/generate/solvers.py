"""
generate(): produce resampled replicates of specified data.
"""

from __future__ import annotations

import threading

from pyinfer.generate.backends.cpu import CPUGenerateBackend
from pyinfer.generate.design import GenerateDesign
from pyinfer.generate.solution import ReplicateSet
from pyinfer.specify.design import InferData


def generate(
    data: InferData | GenerateDesign,
    reps: int = 1,
    type: str | None = None,
    *,
    seed: int | None = None,
    n_jobs: int = 1,
    cancel: threading.Event | None = None,
) -> ReplicateSet:
    """
    Generate replicates of the data, under the declared null if any.

    Parameters
    ----------
    data : InferData or GenerateDesign
        Output of specify() or hypothesize(), or a pre-built design.
    reps : int
        Number of replicates. Must be >= 1.
    type : str or None
        "bootstrap": rows resampled with replacement (no null, or a point
        null on mu/med/sigma, in which case the response is first moved
        onto the null value).
        "permute": explanatory values shuffled across rows (independence),
        or the sign of each paired difference flipped at random (paired
        independence).
        "draw" (alias "simulate"): categorical response drawn from the
        point null p.
        None picks the type implied by the declared null.
    seed : int or None
        Random seed. Replicate i is a pure function of (seed, i). When None,
        fresh entropy is used and recorded on the result.
    n_jobs : int
        Number of joblib workers. 1 (default) runs serially; the output does
        not depend on n_jobs.
    cancel : threading.Event or None
        Set from another thread to stop generation early. The returned set
        then has complete=False.

    Returns
    -------
    ReplicateSet
    """
    if isinstance(data, GenerateDesign):
        design = data
    else:
        design = GenerateDesign.for_generate(
            data, reps, type,
            seed=seed,
            n_jobs=n_jobs,
            cancel=cancel,
        )

    be = CPUGenerateBackend()
    result = be.solve(design)
    return ReplicateSet(_result=result, _design=design)
