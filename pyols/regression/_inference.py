"""
Per-coefficient inference for OLS fits.

Given the residual sum of squares and (D'D)⁻¹, produces standard errors,
t statistics, two-sided p-values and 95% confidence intervals for the
intercept and every slope. Nothing returned here is ever NaN.
"""

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from pyols.core.compute.tolerances import SolverConfig, DEFAULT_CONFIG
from pyols.core.compute.distributions import two_tailed_p_value, t_critical_95

INTERCEPT = 'Intercept'


@dataclass(frozen=True)
class CoefficientStats:
    """Inferential statistics for one coefficient."""
    coefficient: float
    standard_error: float
    t_stat: float
    p_value: float
    ci95_lower: float
    ci95_upper: float


def residual_variance(n: int, p: int, rss: float) -> float:
    """
    Mean squared error of the residuals.

    rss / (n - p - 1), falling back to rss / (n - 1) when the residual
    degrees of freedom are exhausted.
    """
    df = n - p - 1
    if df > 0:
        return rss / df
    if n > 1:
        return rss / (n - 1)
    return 0.0


def coefficient_statistics(
    n: int,
    p: int,
    rss: float,
    xtx_inv: NDArray[np.floating[Any]],
    intercept: float,
    slopes: Sequence[float],
    names: Sequence[str],
    *,
    config: SolverConfig = DEFAULT_CONFIG,
) -> dict[str, CoefficientStats]:
    """
    Standard errors, t statistics, p-values and 95% CIs.

    Args:
        n: Retained observations
        p: Predictors, intercept excluded
        rss: Residual sum of squares
        xtx_inv: (D'D)⁻¹ for the intercept-augmented design ((p+1) x (p+1))
        intercept: Fitted intercept
        slopes: Fitted slopes (p,)
        names: Predictor names (p,), aligned with slopes
        config: Thresholds for the p-value evaluation

    Returns:
        {'Intercept': ..., name: ...} in coefficient order
    """
    df = n - p - 1
    mse = residual_variance(n, p, rss)
    t_crit = t_critical_95(df)

    coefficients = [float(intercept), *(float(b) for b in slopes)]
    labels = [INTERCEPT, *names]

    stats: dict[str, CoefficientStats] = {}
    for i, (label, coef) in enumerate(zip(labels, coefficients)):
        # Round-off can push a zero variance slightly negative
        variance = max(mse * float(xtx_inv[i, i]), 0.0)
        se = math.sqrt(variance)
        t_stat = coef / se if se > 0 else 0.0
        if not math.isfinite(t_stat):
            t_stat = 0.0
        margin = t_crit * se
        stats[label] = CoefficientStats(
            coefficient=coef,
            standard_error=se,
            t_stat=t_stat,
            p_value=two_tailed_p_value(t_stat, df, config=config),
            ci95_lower=coef - margin,
            ci95_upper=coef + margin,
        )
    return stats
