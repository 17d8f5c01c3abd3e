"""
Design class for replicate generation.

GenerateDesign encapsulates all inputs needed by the backend to produce
replicates. Immutable, validated at construction so an invalid request
fails before any resampling starts.
"""

from __future__ import annotations

import logging
import threading
import warnings
from dataclasses import dataclass

from pyinfer.core.compute.rng import resolve_seed
from pyinfer.core.exceptions import GenerationError, ValidationError
from pyinfer.core.validation import check_positive_int
from pyinfer.generate._common import (
    BOOTSTRAP,
    DRAW,
    GENERATION_ALIASES,
    PERMUTE,
    VALID_GENERATION_TYPES,
)
from pyinfer.hypothesize._common import INDEPENDENCE, PAIRED_INDEPENDENCE, POINT
from pyinfer.specify._variables import NUMERIC
from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)


def _default_generation(data: InferData) -> str:
    """Generation type implied by the declared null."""
    null = data.null
    if null is None:
        return BOOTSTRAP
    if null.null_type == POINT:
        return DRAW if null.parameter_kind == "p" else BOOTSTRAP
    return PERMUTE


def _check_compatible(data: InferData, generation: str) -> None:
    null_type = data.null.null_type if data.null is not None else None
    kind = data.null.parameter_kind if data.null is not None else None

    if generation == BOOTSTRAP:
        if null_type in (INDEPENDENCE, PAIRED_INDEPENDENCE):
            raise GenerationError(
                f"bootstrap does not generate data under null={null_type!r}; "
                "use type='permute'",
                generation=generation,
                null_type=null_type,
            )
        if kind == "p":
            warnings.warn(
                "bootstrap resamples the observed responses and does not "
                "generate data under the declared p; a point null on p is "
                "simulated with type='draw'",
                UserWarning,
                stacklevel=4,
            )
    elif generation == PERMUTE:
        if null_type not in (INDEPENDENCE, PAIRED_INDEPENDENCE):
            raise GenerationError(
                "type='permute' requires null='independence' or "
                f"null='paired independence'; declared null is {null_type!r}",
                generation=generation,
                null_type=null_type,
            )
    elif generation == DRAW:
        if data.response_type == NUMERIC:
            raise GenerationError(
                "type='draw' simulates categorical responses only; drawing a "
                f"numeric response {data.response!r} from a parametric family "
                "is not supported (use type='bootstrap' with mu, med or sigma)",
                generation=generation,
                null_type=null_type,
            )
        if null_type != POINT or kind != "p":
            raise GenerationError(
                "type='draw' requires a point null with p; declared null is "
                f"{data.null!r}",
                generation=generation,
                null_type=null_type,
            )


@dataclass(frozen=True)
class GenerateDesign:
    """
    Frozen design for replicate generation.

    Attributes:
        data: Source InferData (observed, possibly carrying a null).
        reps: Number of replicates to generate.
        generation: 'bootstrap', 'permute' or 'draw'.
        seed: Integer seed; replicate i draws from (seed, i).
        n_jobs: Worker count for joblib; 1 runs serially, -1 uses all cores.
        cancel: Optional event; when set, generation stops early.
    """
    data: InferData
    reps: int
    generation: str
    seed: int
    n_jobs: int = 1
    cancel: threading.Event | None = None

    @classmethod
    def for_generate(
        cls,
        data: InferData,
        reps: int = 1,
        type: str | None = None,
        *,
        seed: int | None = None,
        n_jobs: int = 1,
        cancel: threading.Event | None = None,
    ) -> GenerateDesign:
        """
        Create a generation design with validation.

        Args:
            data: Output of specify() or hypothesize().
            reps: Number of replicates. Must be >= 1.
            type: 'bootstrap', 'permute', 'draw' ('simulate' is an alias),
                or None to pick from the declared null.
            seed: Random seed; None draws fresh entropy.
            n_jobs: joblib worker count. Must not be 0.
            cancel: threading.Event checked between replicates.

        Returns:
            Validated GenerateDesign.

        Raises:
            GenerationError: If the type is unknown or does not fit the
                declared null, or reps < 1.
        """
        if not isinstance(data, InferData):
            raise TypeError(
                "generate() expects the output of specify() or "
                f"hypothesize(), got {data.__class__.__name__}"
            )
        if data.is_replicate:
            raise GenerationError(
                "cannot generate from a generated replicate; generate from "
                "the observed data",
            )

        try:
            reps = check_positive_int(reps, "reps")
        except ValidationError as e:
            raise GenerationError(str(e)) from e

        if type is None:
            generation = _default_generation(data)
            logger.info(
                "setting generation type to %r for null %r", generation,
                data.null.null_type if data.null is not None else None,
            )
        else:
            key = type.strip().lower() if isinstance(type, str) else None
            if key not in GENERATION_ALIASES:
                raise GenerationError(
                    f"type must be one of {VALID_GENERATION_TYPES}, got {type!r}",
                    generation=str(type),
                )
            generation = GENERATION_ALIASES[key]

        _check_compatible(data, generation)

        if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or n_jobs == 0:
            raise ValidationError(f"n_jobs must be a non-zero integer, got {n_jobs!r}")

        return cls(
            data=data,
            reps=reps,
            generation=generation,
            seed=resolve_seed(seed),
            n_jobs=n_jobs,
            cancel=cancel,
        )
