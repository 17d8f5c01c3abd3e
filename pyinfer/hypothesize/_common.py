"""
Common types for null hypothesis declaration.

Defines the closed sets of null types and parameter kinds, and the
NullParameter payload carried by a point null.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

POINT = "point"
INDEPENDENCE = "independence"
PAIRED_INDEPENDENCE = "paired independence"

VALID_NULL_TYPES = (POINT, INDEPENDENCE, PAIRED_INDEPENDENCE)

# Spellings accepted for null types, mapped to the canonical name
NULL_TYPE_ALIASES = {
    "point": POINT,
    "independence": INDEPENDENCE,
    "paired independence": PAIRED_INDEPENDENCE,
    "paired_independence": PAIRED_INDEPENDENCE,
}

# Parameter kinds: proportion, mean, median, standard deviation
VALID_PARAMETERS = ("p", "mu", "med", "sigma")

PARAMETER_DESCRIPTIONS = {
    "p": "proportion",
    "mu": "mean",
    "med": "median",
    "sigma": "standard deviation",
}


@dataclass(frozen=True)
class NullParameter:
    """
    The single parameter of a point null.

    Attributes:
        kind: One of 'p', 'mu', 'med', 'sigma'.
        value: float, or for a multi-level 'p' a mapping level -> probability
            ordered like the response levels.
    """
    kind: str
    value: float | Mapping[Any, float]

    @property
    def is_vector(self) -> bool:
        return isinstance(self.value, Mapping)

    @property
    def description(self) -> str:
        return PARAMETER_DESCRIPTIONS[self.kind]

    def __repr__(self) -> str:
        if self.is_vector:
            inner = ", ".join(f"{k!r}: {v:g}" for k, v in self.value.items())
            return f"NullParameter({self.kind}={{{inner}}})"
        return f"NullParameter({self.kind}={self.value:g})"
