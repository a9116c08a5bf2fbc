"""
Regression Design.

Design turns a Table plus a column selection into the numeric X matrix
and y vector a solver needs. It knows it's building a regression; Table
doesn't.

Rows whose response or any raw predictor cell is not a number are
dropped whole (no imputation). Indicator columns from categorical
encodings are looked up by each row's original position, so dropping a
row never shifts another row's categories.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyols.core.exceptions import (
    ColumnNotFoundError,
    DimensionError,
    ValidationError,
)
from pyols.core.table import Table, parse_number
from pyols.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_consistent_length,
    check_min_samples,
)
from pyols.regression.encoding import CategoricalEncoding, indicator_name

# An encoding is either the encoder's output or a plain mapping of
# indicator (or level) name -> 0/1 vector
EncodingSpec = Union[CategoricalEncoding, Mapping[str, Sequence[float]]]

# Fewest retained rows a design may have
MIN_ROWS = 2


@dataclass(frozen=True)
class Design:
    """
    Regression design matrix and response.

    Immutable after construction. Row i of X and y come from the same
    source row, recorded in row_indices.

    Construction:
        Design.from_table(table, y='Score', x=['Hours'])
        Design.from_table(table, y='Score', x=['Hours', 'Category'],
                          encodings={'Category': encode_categorical(table, 'Category')})
        Design.from_arrays(X, y)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    column_names: tuple[str, ...]
    y_name: str
    row_indices: tuple[int, ...]
    dropped_rows: tuple[int, ...] = ()
    skipped_sources: tuple[str, ...] = ()
    _source: Table | None = field(default=None, repr=False)

    @classmethod
    def from_table(
        cls,
        table: Table,
        y: str,
        x: Sequence[str],
        *,
        encodings: Mapping[str, EncodingSpec] | None = None,
        stacklevel: int = 2,
    ) -> Design:
        """
        Build a Design from a Table.

        Args:
            table: Parsed table
            y: Response column
            x: Predictor names, in the order their slopes should appear.
                Each is a header column, an indicator name produced by one
                of `encodings`, or the name of an encoded source column.
            encodings: source column -> its categorical encoding. Every
                indicator column of every resolvable source is included,
                after the raw predictors, in the order sources are given
                here.
            stacklevel: Passed to warnings.warn for skipped encodings, so
                wrappers can point the warning at their own caller

        Returns:
            Design ready for fitting

        Raises:
            ColumnNotFoundError: If y or a raw predictor is not in the header,
                or an x name matches neither a column nor an indicator
            DimensionError: If an indicator vector doesn't have one entry
                per data row
            InsufficientDataError: If fewer than 2 rows survive filtering
        """
        if isinstance(x, str):
            x = [x]
        duplicates = sorted({name for name in x if list(x).count(name) > 1})
        if duplicates:
            raise ValidationError(f"x: duplicate predictor names {duplicates}")

        y_idx = table.column_index(y)

        # === Resolve categorical blocks ===
        indicators: list[tuple[str, NDArray[np.floating[Any]]]] = []
        encoded_sources: set[str] = set()
        skipped: list[str] = []
        for source, spec in (encodings or {}).items():
            if source not in table:
                skipped.append(source)
                continue
            encoded_sources.add(source)
            indicators.extend(_indicator_columns(source, spec, table.n_rows))

        if skipped:
            warnings.warn(
                f"Ignoring encodings for columns not in the table: {skipped}",
                RuntimeWarning,
                stacklevel=stacklevel,
            )

        indicator_names = {name for name, _ in indicators}

        # === Partition predictors ===
        raw: list[tuple[str, int]] = []
        for name in x:
            if name in table and name not in encoded_sources:
                raw.append((name, table.column_index(name)))
            elif name in encoded_sources or name in indicator_names:
                continue
            else:
                raise ColumnNotFoundError(
                    f"Predictor {name!r} is neither a table column nor an "
                    f"indicator column. Available: {list(table.header)}",
                    column=name,
                    available=table.header,
                )

        # === Read rows ===
        X_rows: list[list[float]] = []
        y_vals: list[float] = []
        kept: list[int] = []
        dropped: list[int] = []

        for r in range(table.n_rows):
            y_val = parse_number(table.cell(r, y_idx))
            if y_val is None:
                dropped.append(r)
                continue

            row: list[float] = []
            for _, col in raw:
                value = parse_number(table.cell(r, col))
                if value is None:
                    break
                row.append(value)
            else:
                row.extend(float(vector[r]) for _, vector in indicators)
                X_rows.append(row)
                y_vals.append(y_val)
                kept.append(r)
                continue

            dropped.append(r)

        check_min_samples(len(kept), MIN_ROWS, 'design')

        names = tuple(name for name, _ in raw) + tuple(name for name, _ in indicators)
        X_arr = np.array(X_rows, dtype=np.float64).reshape(len(kept), len(names))

        return cls(
            _X=X_arr,
            _y=np.array(y_vals, dtype=np.float64),
            column_names=names,
            y_name=y,
            row_indices=tuple(kept),
            dropped_rows=tuple(dropped),
            skipped_sources=tuple(skipped),
            _source=table,
        )

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        column_names: Sequence[str] | None = None,
        y_name: str = 'y',
    ) -> Design:
        """Build Design directly from numeric arrays."""
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))
        check_min_samples(X_arr.shape[0], MIN_ROWS, 'X')

        p = X_arr.shape[1]
        if column_names is None:
            column_names = [f'x{j + 1}' for j in range(p)]
        if len(column_names) != p:
            raise DimensionError(
                f"column_names: expected {p} names, got {len(column_names)}"
            )

        return cls(
            _X=X_arr,
            _y=y_arr,
            column_names=tuple(column_names),
            y_name=y_name,
            row_indices=tuple(range(X_arr.shape[0])),
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Predictor matrix (n x p), without the intercept column."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of retained observations."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of predictors (intercept excluded)."""
        return self._X.shape[1]

    @property
    def source(self) -> Table | None:
        """Original Table, if the design was built from one."""
        return self._source

    def augmented(self) -> NDArray[np.floating[Any]]:
        """D = [1 | X], the design matrix with its intercept column (n x (p+1))."""
        return np.column_stack([np.ones(self.n), self._X])

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Gram matrix D'D of the intercept-augmented design ((p+1) x (p+1))."""
        D = self.augmented()
        return D.T @ D

    def Xty(self) -> NDArray[np.floating[Any]]:
        """D'y for the intercept-augmented design ((p+1),)."""
        return self.augmented().T @ self._y


def _indicator_columns(
    source: str,
    spec: EncodingSpec,
    n_rows: int,
) -> list[tuple[str, NDArray[np.floating[Any]]]]:
    """
    Normalize one encoding into (indicator name, vector) pairs.

    For plain mappings, keys without the "{source}_" prefix are treated as
    level names and prefixed, empty vectors mark the reference level and
    are skipped, and columns are sorted by name.
    """
    if isinstance(spec, CategoricalEncoding):
        items = list(spec.columns.items())
    else:
        prefix = indicator_name(source, '')
        named = {
            key if key.startswith(prefix) else indicator_name(source, key): vector
            for key, vector in spec.items()
            if len(vector) > 0
        }
        items = sorted(named.items(), key=lambda item: item[0])

    columns = []
    for name, vector in items:
        vector = np.asarray(vector, dtype=np.float64)
        if vector.ndim != 1 or vector.shape[0] != n_rows:
            raise DimensionError(
                f"{name}: indicator has {vector.size} entries, "
                f"table has {n_rows} data rows"
            )
        columns.append((name, vector))
    return columns
