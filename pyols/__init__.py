"""
PyOLS: multivariate ordinary least squares for tabular data.

Turns a table of string cells plus a choice of response and predictor
columns (categorical columns expanded into indicator variables) into
coefficients, goodness-of-fit statistics and per-coefficient inference.

Submodules:
    core: Table, exceptions, result envelope, numerical kernels
    regression: Design construction, fitting, solutions, fit history
"""

__version__ = "0.1.0"

from pyols.core.table import Table, parse_csv
from pyols.regression import (
    fit,
    Design,
    encode_categorical,
    detect_categorical_columns,
    LinearSolution,
    FitHistory,
)

__all__ = [
    "__version__",
    "Table",
    "parse_csv",
    "fit",
    "Design",
    "encode_categorical",
    "detect_categorical_columns",
    "LinearSolution",
    "FitHistory",
]
