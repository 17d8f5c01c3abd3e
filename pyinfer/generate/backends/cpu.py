"""
CPU backend for replicate generation.

CPUGenerateBackend: bootstrap, permutation and draw replicates, one
independent random stream per replicate, optionally spread over joblib
workers.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from pyinfer.core.compute.rng import replicate_rng
from pyinfer.core.compute.timing import Timer
from pyinfer.core.exceptions import GenerationError
from pyinfer.core.result import Result
from pyinfer.generate._common import BOOTSTRAP, DRAW, PERMUTE, ReplicateParams
from pyinfer.generate.design import GenerateDesign
from pyinfer.hypothesize._common import PAIRED_INDEPENDENCE
from pyinfer.specify._variables import LOGICAL
from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)

# Replicates handed to joblib per dispatch round; cancellation is checked
# between rounds.
_PARALLEL_CHUNK = 64


def _null_response(data: InferData) -> pd.DataFrame:
    """
    Observed frame with a numeric response moved onto a point null.

    mu shifts the response so its mean is mu, med shifts it so its median
    is med, sigma rescales deviations about the mean so its sd is sigma.
    """
    frame = data.data
    null = data.null
    if null is None or not null.is_point or null.parameter_kind == "p":
        return frame

    y = data.values(data.response)
    kind = null.parameter_kind
    target = float(null.parameter_value)

    if kind == "mu":
        moved = y + (target - np.nanmean(y))
    elif kind == "med":
        moved = y + (target - np.nanmedian(y))
    else:
        sd = np.nanstd(y, ddof=1)
        if not np.isfinite(sd) or sd == 0.0:
            raise GenerationError(
                f"cannot rescale response {data.response!r} to sigma={target:g}: "
                "observed standard deviation is zero or undefined",
                generation=BOOTSTRAP,
                null_type=null.null_type,
            )
        center = np.nanmean(y)
        moved = center + (y - center) * (target / sd)

    out = frame.copy()
    out[data.response] = moved
    return out


def _bootstrap(data: InferData, base: pd.DataFrame, rng: np.random.Generator) -> pd.DataFrame:
    """Rows sampled with replacement, kept whole."""
    n = len(base)
    indices = rng.choice(n, size=n, replace=True)
    return base.iloc[indices].reset_index(drop=True)


def _permute(data: InferData, base: pd.DataFrame, rng: np.random.Generator) -> pd.DataFrame:
    """
    Explanatory block reordered by one permutation; response untouched.

    Under a paired independence null, the sign of each difference is
    flipped with probability 1/2 instead.
    """
    if data.null.null_type == PAIRED_INDEPENDENCE:
        y = data.values(data.response)
        signs = rng.choice(np.array([-1.0, 1.0]), size=len(y), replace=True)
        return pd.DataFrame({data.response: y * signs})

    perm = rng.permutation(len(base))
    shuffled = base.loc[:, list(data.explanatory)].iloc[perm].reset_index(drop=True)
    return pd.concat([base.loc[:, [data.response]], shuffled], axis=1)


def _draw(data: InferData, base: pd.DataFrame, rng: np.random.Generator) -> pd.DataFrame:
    """Response values drawn independently from the null level probabilities."""
    levels = data.response_levels
    probs = data.null.probabilities(levels, data.success)
    p = np.array([probs[lv] for lv in levels], dtype=np.float64)
    codes = rng.choice(len(levels), size=len(base), replace=True, p=p / p.sum())

    original = base[data.response]
    if data.response_type == LOGICAL:
        values = np.asarray(levels, dtype=bool)[codes]
    else:
        level_arr = np.empty(len(levels), dtype=object)
        level_arr[:] = list(levels)
        values = level_arr[codes]
        if isinstance(original.dtype, pd.CategoricalDtype):
            # Observed levels can be a subset of the declared categories
            values = pd.Categorical(values, categories=original.cat.categories)
    return pd.DataFrame({data.response: values})


_GENERATORS = {
    BOOTSTRAP: _bootstrap,
    PERMUTE: _permute,
    DRAW: _draw,
}


def _one_replicate(
    data: InferData,
    base: pd.DataFrame,
    generation: str,
    seed: int,
    index: int,
) -> InferData:
    """Replicate `index` (0-based); a pure function of (seed, index)."""
    rng = replicate_rng(seed, index)
    frame = _GENERATORS[generation](data, base, rng)
    return data.with_replicate(frame, generation, index + 1)


class CPUGenerateBackend:
    """
    CPU backend for replicate generation.

    Serial by default; n_jobs != 1 dispatches replicates to joblib worker
    threads. Output is identical either way because replicate i depends
    only on (seed, i).
    """

    @property
    def name(self) -> str:
        return 'cpu_generate'

    def solve(self, design: GenerateDesign) -> Result[ReplicateParams]:
        """Generate replicates and return Result[ReplicateParams]."""
        timer = Timer()
        timer.start()

        data = design.data
        R = design.reps
        generation = design.generation
        seed = design.seed
        cancel = design.cancel
        warnings_list: list[str] = []

        with timer.section('null_adjustment'):
            base = _null_response(data) if generation == BOOTSTRAP else data.data

        replicates: list[InferData] = []
        with timer.section('replicates'):
            if design.n_jobs == 1:
                for i in range(R):
                    if cancel is not None and cancel.is_set():
                        break
                    replicates.append(
                        _one_replicate(data, base, generation, seed, i)
                    )
            else:
                parallel = Parallel(n_jobs=design.n_jobs, prefer="threads")
                for start in range(0, R, _PARALLEL_CHUNK):
                    if cancel is not None and cancel.is_set():
                        break
                    stop = min(start + _PARALLEL_CHUNK, R)
                    replicates.extend(parallel(
                        delayed(_one_replicate)(data, base, generation, seed, i)
                        for i in range(start, stop)
                    ))

        complete = len(replicates) == R
        if not complete:
            msg = (
                f"generation cancelled: {len(replicates)} of {R} replicates "
                "produced; the replicate set is incomplete"
            )
            warnings_list.append(msg)
            logger.warning(msg)

        timer.stop()
        logger.debug(
            "generated %d %s replicates in %.3fs", len(replicates), generation,
            timer.result()['total_seconds'],
        )

        params = ReplicateParams(
            replicates=tuple(replicates),
            reps=R,
            seed=seed,
            generation=generation,
            complete=complete,
        )

        return Result(
            params=params,
            info={
                'generation': generation,
                'seed': seed,
                'n': data.n_observations,
                'n_jobs': design.n_jobs,
                'null_type': data.null.null_type if data.null is not None else None,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
