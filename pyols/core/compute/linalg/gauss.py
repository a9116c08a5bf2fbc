"""
Elimination kernels: Gaussian elimination and Gauss-Jordan inversion.

Both kernels pivot partially (the largest remaining magnitude in the
pivot column is swapped into place) and both follow the same policy for
degenerate pivots: the column is skipped instead of raising. The skipped
columns are reported back so callers can surface rank deficiency.

    - gaussian_solve: unknowns of skipped columns resolve to 0
    - gauss_jordan_inverse: rows/columns of skipped pivots are zeroed
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyols.core.compute.tolerances import DEFAULT_CONFIG
from pyols.core.validation import check_1d, check_square, check_consistent_length


@dataclass(frozen=True)
class GaussianSolution:
    """
    Solution of a square linear system.

    Attributes:
        x: Solution vector (m,)
        rank: Number of non-degenerate pivots
        degenerate_pivots: Columns whose pivot was numerically zero
    """
    x: NDArray[np.floating[Any]]
    rank: int
    degenerate_pivots: tuple[int, ...]

    @property
    def is_singular(self) -> bool:
        return len(self.degenerate_pivots) > 0


@dataclass(frozen=True)
class MatrixInverse:
    """
    Inverse of a square matrix.

    Attributes:
        inverse: The (m x m) inverse; rows and columns of degenerate
            pivots are zero
        rank: Number of non-degenerate pivots
        degenerate_pivots: Columns whose pivot fell below tolerance
    """
    inverse: NDArray[np.floating[Any]]
    rank: int
    degenerate_pivots: tuple[int, ...]

    @property
    def is_singular(self) -> bool:
        return len(self.degenerate_pivots) > 0


def _pivot_threshold(A: NDArray[np.floating[Any]], tol: float) -> float:
    """Scale tol by the largest diagonal magnitude of A (never below tol)."""
    if A.size == 0:
        return tol
    return tol * max(1.0, float(np.max(np.abs(np.diag(A)))))


def _swap_in_pivot(M: NDArray[np.floating[Any]], k: int) -> None:
    """Move the row with the largest |M[i, k]|, i >= k, to row k (in place)."""
    pivot_row = k + int(np.argmax(np.abs(M[k:, k])))
    if pivot_row != k:
        M[[k, pivot_row]] = M[[pivot_row, k]]


def gaussian_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    *,
    pivot_tol: float = DEFAULT_CONFIG.pivot_tol,
) -> GaussianSolution:
    """
    Solve Ax = b by Gaussian elimination with partial pivoting.

    Forward elimination runs on the augmented matrix [A | b]. When the
    best available pivot for column k has magnitude <= pivot_tol times
    the largest diagonal magnitude of A (or pivot_tol itself when that
    is below 1), column
    k is left as is and elimination moves on; back substitution then
    sets x[k] = 0. This gives a best-effort answer for singular systems
    (e.g. perfectly collinear predictors) rather than an error.

    Args:
        A: Square coefficient matrix (m x m)
        b: Right-hand side (m,)
        pivot_tol: Pivot magnitude treated as zero, relative to the
            largest diagonal entry of A

    Returns:
        GaussianSolution with x, rank and the degenerate columns

    Raises:
        DimensionError: If A is not square or b doesn't match A
    """
    A = np.asarray(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    check_square(A, 'A')
    check_1d(b, 'b')
    check_consistent_length(A, b, names=('A', 'b'))

    m = A.shape[0]
    M = np.column_stack([A, b])
    threshold = _pivot_threshold(A, pivot_tol)
    degenerate: list[int] = []

    # Forward elimination
    for k in range(m):
        _swap_in_pivot(M, k)
        pivot = M[k, k]
        if abs(pivot) <= threshold:
            degenerate.append(k)
            continue
        factors = M[k + 1:, k] / pivot
        M[k + 1:, k:] -= np.outer(factors, M[k, k:])

    # Back substitution
    x = np.zeros(m, dtype=np.float64)
    for i in range(m - 1, -1, -1):
        pivot = M[i, i]
        if abs(pivot) <= threshold:
            continue
        x[i] = (M[i, m] - M[i, i + 1:m] @ x[i + 1:]) / pivot

    return GaussianSolution(
        x=x,
        rank=m - len(degenerate),
        degenerate_pivots=tuple(degenerate),
    )


def gauss_jordan_inverse(
    A: NDArray[np.floating[Any]],
    *,
    pivot_tol: float = DEFAULT_CONFIG.inverse_pivot_tol,
) -> MatrixInverse:
    """
    Invert a square matrix by Gauss-Jordan elimination.

    Augments A with the identity, then for each column: pivots partially,
    normalizes the pivot row, and clears the column from every other row.
    The right half ends up holding A⁻¹.

    A column whose pivot is below pivot_tol, scaled by the largest
    diagonal magnitude of A, is skipped. The corresponding
    row and column of the result are zeroed, so the degenerate dimension
    contributes a zero variance downstream instead of garbage.

    Args:
        A: Square matrix (m x m)
        pivot_tol: Pivot magnitude below which a column is skipped,
            relative to the largest diagonal entry of A

    Returns:
        MatrixInverse with the inverse, rank and the degenerate columns

    Raises:
        DimensionError: If A is not square
    """
    A = np.asarray(A, dtype=np.float64)
    check_square(A, 'A')

    m = A.shape[0]
    aug = np.hstack([A, np.eye(m)])
    threshold = _pivot_threshold(A, pivot_tol)
    degenerate: list[int] = []

    for k in range(m):
        _swap_in_pivot(aug, k)
        pivot = aug[k, k]
        if abs(pivot) < threshold:
            degenerate.append(k)
            continue
        aug[k] /= pivot
        others = np.arange(m) != k
        aug[others] -= np.outer(aug[others, k], aug[k])

    inverse = aug[:, m:].copy()
    if degenerate:
        inverse[degenerate, :] = 0.0
        inverse[:, degenerate] = 0.0

    return MatrixInverse(
        inverse=inverse,
        rank=m - len(degenerate),
        degenerate_pivots=tuple(degenerate),
    )
