"""
Linear algebra kernels for PyOLS.

All functions follow these conventions:
    - Inputs are converted to float64 NumPy arrays and shape-checked
    - Each operation returns a structured result dataclass
    - Degenerate pivots are reported, not raised

Submodules:
    gauss: Gaussian elimination solve and Gauss-Jordan inverse
"""

from pyols.core.compute.linalg.gauss import (
    GaussianSolution,
    MatrixInverse,
    gaussian_solve,
    gauss_jordan_inverse,
)

__all__ = [
    "GaussianSolution",
    "MatrixInverse",
    "gaussian_solve",
    "gauss_jordan_inverse",
]
