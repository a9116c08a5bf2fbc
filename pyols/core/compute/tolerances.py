"""
Numerical tolerances for PyOLS.

Two kinds of settings live here:
- SolverConfig: the thresholds the elimination kernels and the incomplete
  beta evaluation run with. Pass a custom instance to fit() to override.
- ToleranceTier: how closely two results must agree to count as equal.
  Used by the test suite when checking against closed-form answers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """
    Thresholds for the numerical kernels.

    Attributes:
        pivot_tol: Pivot magnitude, relative to the largest diagonal entry
            of the Gram matrix, at or below which Gaussian elimination
            treats a column as degenerate (its unknown resolves to 0).
        inverse_pivot_tol: Relative pivot magnitude below which
            Gauss-Jordan inversion skips a column (its variance resolves
            to 0).
        beta_tol: Convergence tolerance of the incomplete beta continued
            fraction.
        beta_max_iter: Iteration cap of the continued fraction.
    """
    pivot_tol: float = 1e-12
    inverse_pivot_tol: float = 1e-10
    beta_tol: float = 1e-12
    beta_max_iter: int = 100


DEFAULT_CONFIG = SolverConfig()


@dataclass(frozen=True)
class ToleranceTier:
    """How closely two results must agree to count as equal."""
    rtol: float
    atol: float
    name: str
    description: str


# Identities that hold by construction (predictions, CI symmetry)
EXACT = ToleranceTier(
    rtol=0.0,
    atol=1e-10,
    name='exact',
    description='Algebraic identities, agree to round-off',
)

# Normal-equation estimates vs. closed-form OLS
CLOSED_FORM = ToleranceTier(
    rtol=0.0,
    atol=1e-6,
    name='closed_form',
    description='Normal equations vs. closed-form OLS formulas',
)

# Continued-fraction distribution functions vs. a reference library
DISTRIBUTION = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='distribution',
    description='Incomplete beta / Student-t vs. reference implementation',
)
