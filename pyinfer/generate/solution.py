"""
Solution wrapper for generated replicates.

ReplicateSet wraps Result[ReplicateParams] and behaves as a read-only
sequence of replicate InferData objects.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Iterator, TYPE_CHECKING

import pandas as pd

from pyinfer.core.result import Result
from pyinfer.generate._common import ReplicateParams

if TYPE_CHECKING:
    from pyinfer.generate.design import GenerateDesign
    from pyinfer.hypothesize.design import NullHypothesis
    from pyinfer.specify.design import InferData


@dataclass(eq=False)
class ReplicateSet(Sequence):
    """
    User-facing generation results.

    Indexing and iteration yield replicate InferData in replicate order
    (replicate ids 1..len). `complete` is False when generation was
    cancelled before all requested replicates were produced.
    """
    _result: Result[ReplicateParams]
    _design: 'GenerateDesign'

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return self._result.params.n_completed

    def __getitem__(self, index):
        return self._result.params.replicates[index]

    def __iter__(self) -> Iterator['InferData']:
        return iter(self._result.params.replicates)

    # --- Core fields ---

    @property
    def replicates(self) -> tuple['InferData', ...]:
        return self._result.params.replicates

    @property
    def reps(self) -> int:
        """Number of replicates requested."""
        return self._result.params.reps

    @property
    def n_completed(self) -> int:
        """Number of replicates actually produced."""
        return self._result.params.n_completed

    @property
    def complete(self) -> bool:
        return self._result.params.complete

    @property
    def seed(self) -> int:
        """Seed that replays this run exactly."""
        return self._result.params.seed

    @property
    def generation(self) -> str:
        return self._result.params.generation

    # --- Metadata ---

    @property
    def source(self) -> 'InferData':
        """The observed data the replicates were generated from."""
        return self._design.data

    @property
    def null(self) -> 'NullHypothesis | None':
        return self._design.data.null

    @property
    def role_signature(self) -> str:
        return self._design.data.role_signature

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Conversion ---

    def to_frame(self) -> pd.DataFrame:
        """Long DataFrame of all replicates with a leading 'replicate' column."""
        frames = [
            r.data.assign(replicate=r.replicate) for r in self.replicates
        ]
        if not frames:
            columns = ['replicate', *self.source.columns]
            return pd.DataFrame(columns=columns)
        out = pd.concat(frames, ignore_index=True)
        return out[['replicate', *self.source.columns]]

    # --- Display ---

    def summary(self) -> str:
        lines = [
            f"\nGENERATED REPLICATES ({self.generation.upper()})",
            "",
            f"Roles: {self.source.role_signature} "
            f"(response {self.source.response!r})",
            f"Null hypothesis: {self.null!r}",
            f"Replicates: {self.n_completed} of {self.reps}"
            + ("" if self.complete else " (INCOMPLETE)"),
            f"Rows per replicate: {self.source.n_observations}",
            f"Seed: {self.seed}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ReplicateSet(generation={self.generation!r}, "
            f"reps={self.n_completed}/{self.reps}, seed={self.seed})"
        )
