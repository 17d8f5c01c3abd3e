"""
Parsing of `response ~ explanatory` role formulas.

Accepted forms:
    "y ~ x"
    "y ~ x1 + x2"
    "y ~ 1"  or  "y ~ NULL"  or  "y ~"    (response only)
    "`col name` ~ x"                      (backticks quote a column name)
"""

from __future__ import annotations

from pyinfer.core.exceptions import InvalidRoleError

_NO_EXPLANATORY = ("", "1", "NULL")


def _clean_term(term: str) -> str:
    term = term.strip()
    if len(term) >= 2 and term.startswith("`") and term.endswith("`"):
        term = term[1:-1]
    return term


def parse_formula(formula: str) -> tuple[str, tuple[str, ...]]:
    """
    Split a formula into its response and explanatory column names.

    Returns:
        (response, explanatory) where explanatory may be empty

    Raises:
        InvalidRoleError: If the formula is not a string, lacks exactly
            one '~', or has an empty response or explanatory term
    """
    if not isinstance(formula, str):
        raise InvalidRoleError(
            f"formula must be a string like 'y ~ x', got {type(formula).__name__}"
        )
    if formula.count("~") != 1:
        raise InvalidRoleError(
            f"formula must contain exactly one '~', got {formula!r}"
        )

    lhs, rhs = formula.split("~")
    response = _clean_term(lhs)
    if not response:
        raise InvalidRoleError(f"formula {formula!r} has no response variable")

    rhs = rhs.strip()
    if rhs in _NO_EXPLANATORY:
        return response, ()

    terms = tuple(_clean_term(t) for t in rhs.split("+"))
    if any(not t for t in terms):
        raise InvalidRoleError(
            f"formula {formula!r} has an empty explanatory term"
        )
    return response, terms
