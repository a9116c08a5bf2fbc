"""
Treatment (dummy) coding of categorical table columns.

A categorical column with k levels becomes k-1 indicator columns named
"{column}_{level}". The reference level gets no column; its effect is
carried by the intercept.

Ordering is fixed: levels are sorted lexicographically, and the default
reference is the first sorted level. Two runs on the same table always
produce the same columns in the same order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import ValidationError, InsufficientDataError
from pyols.core.table import Table, parse_number

# Data rows inspected by detect_categorical_columns()
DETECTION_SAMPLE_SIZE = 100

# A detected categorical column has between MIN_LEVELS and MAX_LEVELS levels
MIN_LEVELS = 2
MAX_LEVELS = 9


@dataclass(frozen=True)
class CategoricalEncoding:
    """
    Indicator columns for one categorical source column.

    Attributes:
        source: Name of the categorical column in the table
        reference: Level absorbed into the intercept (no column), or None
            when the column has no non-empty values
        categories: All levels, sorted
        columns: indicator name -> 0/1 vector (one entry per data row),
            in sorted level order, reference excluded
    """
    source: str
    reference: str | None
    categories: tuple[str, ...]
    columns: dict[str, NDArray[np.floating[Any]]]

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(self.columns)

    @property
    def n_rows(self) -> int:
        for vector in self.columns.values():
            return len(vector)
        return 0


def indicator_name(source: str, category: str) -> str:
    """Column name of the indicator for `category` of `source`."""
    return f"{source}_{category}"


def encode_categorical(
    table: Table,
    column: str,
    *,
    reference: str | None = None,
) -> CategoricalEncoding:
    """
    Treatment-code one column of a table.

    Args:
        table: Source table
        column: Name of the categorical column
        reference: Level to leave out. Defaults to the first level in
            sorted order.

    Returns:
        CategoricalEncoding with one 0/1 vector per non-reference level.
        A column with no non-empty values yields an encoding without
        indicator columns.

    Raises:
        ColumnNotFoundError: If the column is not in the header
        InsufficientDataError: If the table has no data rows
        ValidationError: If `reference` is not one of the column's levels

    Example:
        >>> enc = encode_categorical(table, 'Category')
        >>> enc.reference
        'A'
        >>> enc.column_names
        ('Category_B', 'Category_C')
    """
    idx = table.column_index(column)
    if table.n_rows < 1:
        raise InsufficientDataError(
            f"{column}: table needs a header and at least 1 data row, "
            f"got {table.n_rows + 1} row(s)",
            n_rows=table.n_rows,
            required=1,
        )

    cells = [_clean(table.cell(r, idx)) for r in range(table.n_rows)]
    categories = sorted({c for c in cells if c})

    if reference is None:
        # No levels, no indicators
        reference = categories[0] if categories else None
    elif reference not in categories:
        raise ValidationError(
            f"{column}: reference {reference!r} is not a level; levels are {categories}"
        )

    cell_arr = np.array(cells, dtype=object)
    columns: dict[str, NDArray[np.floating[Any]]] = {}
    for level in categories:
        if level == reference:
            continue
        columns[indicator_name(column, level)] = (cell_arr == level).astype(np.float64)

    return CategoricalEncoding(
        source=column,
        reference=reference,
        categories=tuple(categories),
        columns=columns,
    )


def detect_categorical_columns(
    table: Table,
    *,
    sample_size: int = DETECTION_SAMPLE_SIZE,
) -> dict[str, list[str]]:
    """
    Guess which columns hold categorical data.

    Looks at the first `sample_size` data rows. A column qualifies when
    at least one sampled value is non-numeric and it has between
    MIN_LEVELS and MAX_LEVELS distinct non-empty values.

    Returns:
        {column: sorted sampled levels}, in header order
    """
    n_sample = min(sample_size, table.n_rows)
    detected: dict[str, list[str]] = {}

    for idx, name in enumerate(table.header):
        values = {
            v for v in (_clean(table.cell(r, idx)) for r in range(n_sample)) if v
        }
        if not MIN_LEVELS <= len(values) <= MAX_LEVELS:
            continue
        if all(parse_number(v) is not None for v in values):
            continue
        detected[name] = sorted(values)

    return detected


def _clean(cell: str | None) -> str:
    return '' if cell is None else cell.strip()
