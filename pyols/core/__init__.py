"""
Core infrastructure for PyOLS.

Shared abstractions used by the regression domain.

Key components:
    table: Table of string cells and the CSV splitter that feeds it
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Elimination kernels, Student-t functions, tolerances
"""

from pyols.core.table import Table, parse_csv
from pyols.core.result import Result
from pyols.core.exceptions import (
    PyOLSError,
    ValidationError,
    DimensionError,
    ColumnNotFoundError,
    InsufficientDataError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Table
    "Table",
    "parse_csv",
    # Result
    "Result",
    # Exceptions
    "PyOLSError",
    "ValidationError",
    "DimensionError",
    "ColumnNotFoundError",
    "InsufficientDataError",
    "NumericalError",
    "SingularMatrixError",
]
