"""
Exception hierarchy for PyOLS.

All exceptions inherit from PyOLSError so callers can catch any
library-specific failure in one place.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages name the offending value and what was expected
    - A fit either completes or raises; there are no partial results
"""


class PyOLSError(Exception):
    """Base exception for all PyOLS errors."""
    pass


class ValidationError(PyOLSError):
    """
    Input validation failed.

    Raised when user-provided inputs (tables, column selections, arrays)
    fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when an
    indicator vector does not line up with the table's data rows, or when
    a non-square matrix is passed to an inverter.
    """
    pass


class ColumnNotFoundError(ValidationError):
    """
    A requested column is absent from the table header.

    Attributes:
        column: The name that could not be resolved
        available: Header names that were available
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


class InsufficientDataError(ValidationError):
    """
    Too few usable rows to carry out the computation.

    Raised when a table has no data rows, when fewer than two rows survive
    numeric filtering, or when there are fewer rows than predictors + 2.

    Attributes:
        n_rows: Usable rows actually available
        required: Minimum number of rows required
    """

    def __init__(
        self,
        message: str,
        n_rows: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.n_rows = n_rows
        self.required = required


class NumericalError(PyOLSError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or numerically rank-deficient.

    The default fit policy absorbs degenerate pivots as zero-valued
    unknowns; this error is only raised when a strict fit is requested.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank found during elimination
        expected_rank: Rank required for a unique solution
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
