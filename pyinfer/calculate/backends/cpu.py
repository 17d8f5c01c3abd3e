"""
CPU backend for statistic calculation.

Evaluates the design's statistic on every item (replicate or observed
data) after dropping rows with missing values, and assembles the values
in replicate order.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np
import pandas as pd

from pyinfer.calculate._common import StatParams
from pyinfer.calculate.design import CalculateDesign
from pyinfer.core.compute.timing import Timer
from pyinfer.core.result import Result
from pyinfer.specify.design import InferData

logger = logging.getLogger(__name__)


def _complete_cases(item: InferData) -> tuple[np.ndarray, np.ndarray | None, int]:
    """Response and first explanatory values with missing rows removed."""
    y = item.values(item.response)
    x = item.values(item.explanatory[0]) if item.explanatory else None

    keep = ~pd.isna(y)
    if x is not None:
        keep &= ~pd.isna(x)
    n_dropped = int(len(y) - np.sum(keep))
    if n_dropped:
        y = y[keep]
        x = x[keep] if x is not None else None
    return y, x, n_dropped


class CPUCalculateBackend:
    """CPU reference backend for statistic calculation."""

    @property
    def name(self) -> str:
        return 'cpu_calculate'

    def solve(self, design: CalculateDesign) -> Result[StatParams]:
        """Compute the statistic on every item and return Result[StatParams]."""
        timer = Timer()
        timer.start()

        items = design.items
        fn = design.function
        ctx = design.context
        warnings_list = list(design.warnings)

        values = np.empty(len(items), dtype=np.float64)
        dropped = np.zeros(len(items), dtype=np.int64)
        ids = np.array(
            [item.replicate if item.replicate is not None else 0 for item in items],
            dtype=np.int64,
        )

        with timer.section('statistic'):
            for i, item in enumerate(items):
                y, x, n_dropped = _complete_cases(item)
                dropped[i] = n_dropped
                values[i] = fn(y, x, ctx)

        n_undefined = int(np.sum(np.isnan(values)))
        if n_undefined:
            where = "replicates" if design.is_distribution else "observed data"
            msg = (
                f"stat={design.stat!r} is undefined (NaN) for {n_undefined} "
                f"of {len(items)} {where}; these values are kept as NaN"
            )
            warnings.warn(msg, UserWarning, stacklevel=3)
            warnings_list.append(msg)

        if not design.is_distribution and dropped[0]:
            logger.info(
                "dropped %d row(s) with missing values before computing %r",
                int(dropped[0]), design.stat,
            )

        if design.is_distribution and not design.complete:
            warnings_list.append(
                f"distribution is incomplete: {len(items)} of {design.reps} "
                "replicates were generated"
            )

        timer.stop()

        params = StatParams(
            stat=values,
            replicate=ids,
            n_dropped=dropped,
            stat_name=design.stat,
            signature=design.signature,
            order=design.context.order,
            reps=design.reps,
            complete=design.complete,
        )

        return Result(
            params=params,
            info={
                'stat': design.stat,
                'signature': design.signature,
                'null_type': (
                    design.source.null.null_type
                    if design.source.null is not None else None
                ),
                'generation': design.generation,
                'n_rows_dropped': int(dropped.sum()),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
