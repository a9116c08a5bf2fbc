"""
Shared numeric infrastructure for PyOLS.

Domain code (regression/) builds on these kernels; nothing in here knows
about tables, column names or fit results.

Submodules:
    linalg: Gaussian elimination and Gauss-Jordan inversion
    distributions: Incomplete beta, Student-t CDF, critical values
    tolerances: Solver thresholds and comparison tiers
    timing: Sectioned wall-clock Timer for backends
"""

from pyols.core.compute.tolerances import SolverConfig, DEFAULT_CONFIG
from pyols.core.compute.distributions import (
    regularized_incomplete_beta,
    student_t_cdf,
    two_tailed_p_value,
    t_critical_95,
)

__all__ = [
    # Configuration
    "SolverConfig",
    "DEFAULT_CONFIG",
    # Distributions
    "regularized_incomplete_beta",
    "student_t_cdf",
    "two_tailed_p_value",
    "t_critical_95",
]
