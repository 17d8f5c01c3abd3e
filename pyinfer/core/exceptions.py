"""
Exception hierarchy for pyinfer.

All exceptions inherit from PyInferError to allow catching any
library-specific error. Each pipeline stage raises the most specific
class below so callers can tell a structural mistake (wrong roles,
wrong number of null types) from a semantic one (statistic incompatible
with the declared roles) or a numeric one (parameter out of range).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyInferError(Exception):
    """Base exception for all pyinfer errors."""
    pass


class ValidationError(PyInferError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidRoleError(ValidationError):
    """
    Variable roles are missing, unknown or inconsistent.

    Raised by specify() and by null declarations whose required roles
    are absent.

    Attributes:
        column: Offending column name, if the error concerns one column
        available: Columns present in the data, if relevant
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        available: tuple[str, ...] | None = None,
    ):
        super().__init__(message)
        self.column = column
        self.available = available


class NullHypothesisError(ValidationError):
    """
    The null hypothesis declaration is structurally invalid.

    Covers the number of null types supplied, the number of parameters
    supplied for a point null, and re-declaration of a null.

    Attributes:
        rule: Short identifier of the violated rule
            ('type_cardinality', 'unknown_type', 'parameter_arity',
            'already_declared')
    """

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(message)
        self.rule = rule


class IncompatibleParameterError(ValidationError):
    """
    A null parameter does not fit the response variable.

    Attributes:
        parameter: Parameter name ('p', 'mu', 'med', 'sigma')
        response_type: Variable type of the response
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        response_type: str | None = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.response_type = response_type


class ParameterValueError(ValidationError):
    """
    A null parameter value is out of range, missing or does not sum to one.

    Attributes:
        parameter: Parameter name
        value: The offending value (scalar, mapping, or sum)
    """

    def __init__(self, message: str, parameter: str | None = None, value=None):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class IncompatibleStatisticError(ValidationError):
    """
    A statistic cannot be computed for the declared roles or null.

    Attributes:
        stat: Requested statistic name
        signature: Role signature of the data (e.g. 'num ~ cat')
    """

    def __init__(
        self,
        message: str,
        stat: str | None = None,
        signature: str | None = None,
    ):
        super().__init__(message)
        self.stat = stat
        self.signature = signature


class GenerationError(ValidationError):
    """
    A generate() request is invalid for the declared null and roles.

    Attributes:
        generation: Requested generation type
        null_type: Declared null type, or None
    """

    def __init__(
        self,
        message: str,
        generation: str | None = None,
        null_type: str | None = None,
    ):
        super().__init__(message)
        self.generation = generation
        self.null_type = null_type


class IncompleteDistributionError(PyInferError):
    """
    A distribution from a cancelled generation run was consumed.

    Attributes:
        n_completed: Replicates actually produced
        n_requested: Replicates requested
    """

    def __init__(self, message: str, n_completed: int, n_requested: int):
        super().__init__(message)
        self.n_completed = n_completed
        self.n_requested = n_requested
