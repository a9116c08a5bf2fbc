"""
Ordinary least squares regression.

Public API:
    fit(table, y, x, ...) -> LinearSolution
    encode_categorical(table, column, ...) -> CategoricalEncoding

The fit() function is the only fitting entry point. It handles:
    - Design construction (numeric parsing, row exclusion, dummy columns)
    - Backend selection
    - Result wrapping

Example:
    >>> from pyols.regression import fit, encode_categorical
    >>> enc = encode_categorical(table, 'Category')
    >>> result = fit(table, 'Score', ['Hours', 'Category'],
    ...              encodings={'Category': enc})
    >>> print(result.summary())
"""

from pyols.regression.design import Design
from pyols.regression.encoding import (
    CategoricalEncoding,
    encode_categorical,
    detect_categorical_columns,
)
from pyols.regression.solution import LinearSolution, LinearParams
from pyols.regression._inference import CoefficientStats
from pyols.regression.solvers import fit
from pyols.regression.history import FitHistory, HistoryEntry

__all__ = [
    "fit",
    "Design",
    "CategoricalEncoding",
    "encode_categorical",
    "detect_categorical_columns",
    "LinearSolution",
    "LinearParams",
    "CoefficientStats",
    "FitHistory",
    "HistoryEntry",
]
