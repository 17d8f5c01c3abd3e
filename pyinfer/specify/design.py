"""
InferData: the dataset wrapper every pipeline stage reads and annotates.

An InferData holds the columns taking part in the analysis together with
their declared roles, the null hypothesis (if one was declared) and, for
generated replicates, the generation type and replicate id. Immutable;
every stage returns a new InferData rather than modifying one.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyinfer.core.exceptions import InvalidRoleError
from pyinfer.core.validation import check_columns_exist, check_dataframe
from pyinfer.specify._variables import (
    NUMERIC,
    signature_code,
    variable_levels,
    variable_type,
)

if TYPE_CHECKING:
    from pyinfer.hypothesize.design import NullHypothesis


@dataclass(frozen=True, eq=False)
class InferData:
    """
    Tabular data annotated with variable roles.

    Attributes:
        data: DataFrame restricted to the response and explanatory
            columns, with a fresh RangeIndex.
        response: Response column name.
        explanatory: Explanatory column names (possibly empty).
        success: Response level counted as a success, or None.
        paired: True when the response is a precomputed paired difference.
        null: Declared null hypothesis, or None.
        generation: Generation type that produced this replicate, or None
            for observed data.
        replicate: 1-based replicate id, or None for observed data.

    Do not construct directly; use specify() or InferData.from_dataframe().
    """
    data: pd.DataFrame
    response: str
    explanatory: tuple[str, ...] = ()
    success: Any = None
    paired: bool = False
    null: 'NullHypothesis | None' = None
    generation: str | None = None
    replicate: int | None = None

    # Column types and levels, fixed at specify() time so that replicates
    # keep the levels of the original data even when a level goes unsampled.
    _types: dict[str, str] = field(default_factory=dict, repr=False)
    _levels: dict[str, tuple[Any, ...]] = field(default_factory=dict, repr=False)

    # --- Factory ---

    @classmethod
    def from_dataframe(
        cls,
        data: pd.DataFrame,
        response: str,
        explanatory: tuple[str, ...] = (),
        *,
        success: Any = None,
        paired: bool = False,
    ) -> InferData:
        """
        Build a validated InferData.

        Raises:
            InvalidRoleError: If columns are missing, roles overlap,
                `success` does not fit the response, or `paired` is
                combined with an explanatory variable.
        """
        check_dataframe(data)
        if response is None:
            raise InvalidRoleError("a response variable must be specified")

        explanatory = tuple(explanatory)
        check_columns_exist(data, [response], "response")
        check_columns_exist(data, explanatory, "explanatory")

        if response in explanatory:
            raise InvalidRoleError(
                f"column {response!r} cannot be both response and explanatory",
                column=response,
            )
        if len(set(explanatory)) != len(explanatory):
            raise InvalidRoleError(
                f"explanatory columns must be distinct, got {list(explanatory)}"
            )
        if paired and explanatory:
            raise InvalidRoleError(
                "a paired response is already the per-unit difference; "
                f"no explanatory variable may be declared, got {list(explanatory)}"
            )

        columns = [response, *explanatory]
        frame = data.loc[:, columns].reset_index(drop=True).copy()

        types = {col: variable_type(frame[col]) for col in columns}
        levels = {col: variable_levels(frame[col]) for col in columns}

        if success is not None:
            if types[response] == NUMERIC:
                raise InvalidRoleError(
                    f"success={success!r} was given but response {response!r} "
                    f"is numeric; success applies to categorical responses",
                    column=response,
                )
            if success not in levels[response]:
                raise InvalidRoleError(
                    f"success={success!r} is not a level of response "
                    f"{response!r}; levels are {list(levels[response])}",
                    column=response,
                )

        if paired and types[response] != NUMERIC:
            raise InvalidRoleError(
                f"paired response {response!r} must be a numeric difference",
                column=response,
            )

        return cls(
            data=frame,
            response=response,
            explanatory=explanatory,
            success=success,
            paired=paired,
            _types=types,
            _levels=levels,
        )

    # --- Annotation (each returns a new InferData) ---

    def with_null(self, null: 'NullHypothesis') -> InferData:
        """Copy annotated with a null hypothesis."""
        return dataclasses.replace(self, null=null)

    def with_replicate(
        self,
        data: pd.DataFrame,
        generation: str,
        replicate: int,
    ) -> InferData:
        """Copy holding a generated replicate of the data."""
        return dataclasses.replace(
            self, data=data, generation=generation, replicate=replicate,
        )

    # --- Properties ---

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return len(self.data)

    @property
    def columns(self) -> tuple[str, ...]:
        """Response followed by explanatory column names."""
        return (self.response, *self.explanatory)

    @property
    def response_type(self) -> str:
        return self._types[self.response]

    @property
    def explanatory_types(self) -> tuple[str, ...]:
        return tuple(self._types[c] for c in self.explanatory)

    @property
    def response_levels(self) -> tuple[Any, ...]:
        return self._levels[self.response]

    @property
    def is_replicate(self) -> bool:
        return self.replicate is not None

    @property
    def has_null(self) -> bool:
        return self.null is not None

    @property
    def role_signature(self) -> str:
        """
        Compact description of the variable roles.

        'num', 'cat', 'num ~ cat', 'cat ~ cat', 'num ~ num', 'cat ~ num',
        or 'num ~ cat + num' style for several explanatory variables.
        """
        lhs = signature_code(self.response_type)
        if not self.explanatory:
            return lhs
        rhs = " + ".join(signature_code(t) for t in self.explanatory_types)
        return f"{lhs} ~ {rhs}"

    @property
    def metadata(self) -> dict[str, Any]:
        """Roles, types and annotations as a plain dict."""
        return {
            'n_observations': self.n_observations,
            'response': self.response,
            'explanatory': self.explanatory,
            'success': self.success,
            'paired': self.paired,
            'signature': self.role_signature,
            'null_type': self.null.null_type if self.null is not None else None,
            'generation': self.generation,
            'replicate': self.replicate,
        }

    # --- Column access ---

    def variable_type(self, column: str) -> str:
        """Variable type of a role column."""
        return self._types[column]

    def levels(self, column: str) -> tuple[Any, ...]:
        """Natural-order levels of a role column (empty for numeric)."""
        return self._levels[column]

    def values(self, column: str) -> NDArray:
        """Column values as a numpy array (float64 for numeric columns)."""
        series = self.data[column]
        if self._types[column] == NUMERIC:
            return series.to_numpy(dtype=np.float64, na_value=np.nan)
        return series.to_numpy(dtype=object)

    def __repr__(self) -> str:
        parts = [f"response={self.response!r}"]
        if self.explanatory:
            parts.append(f"explanatory={list(self.explanatory)!r}")
        if self.success is not None:
            parts.append(f"success={self.success!r}")
        if self.null is not None:
            parts.append(f"null={self.null.null_type!r}")
        if self.replicate is not None:
            parts.append(f"replicate={self.replicate}")
        parts.append(f"n={self.n_observations}")
        return f"InferData({', '.join(parts)})"
