"""
Goodness-of-fit summary for OLS fits.

R², adjusted R², multiple R and residual standard error, with the small-
sample and constant-response cases mapped to 0 instead of NaN.
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class GoodnessOfFit:
    rss: float
    tss: float
    r_squared: float
    adjusted_r_squared: float
    multiple_r: float
    residual_std_error: float


def predict(
    X: NDArray[np.floating[Any]],
    intercept: float,
    slopes: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """intercept + X @ slopes, one prediction per row."""
    return intercept + X @ slopes


def goodness_of_fit(
    y: NDArray[np.floating[Any]],
    predictions: NDArray[np.floating[Any]],
    p: int,
) -> GoodnessOfFit:
    """
    Summarize how well predictions track y.

    Args:
        y: Observed response (n,)
        predictions: Fitted values (n,)
        p: Number of predictors, intercept excluded
    """
    n = len(y)
    residuals = y - predictions
    rss = float(residuals @ residuals)
    tss = float(np.sum((y - np.mean(y)) ** 2))

    r_squared = 0.0 if tss == 0 else 1.0 - rss / tss
    r_squared = _finite_or_zero(r_squared)

    if n > p + 1:
        adjusted = 1.0 - (1.0 - r_squared) * (n - 1) / (n - p - 1)
        rse = math.sqrt(rss / (n - p - 1))
    else:
        adjusted = r_squared
        rse = 0.0

    return GoodnessOfFit(
        rss=rss,
        tss=tss,
        r_squared=r_squared,
        adjusted_r_squared=_finite_or_zero(adjusted),
        multiple_r=math.sqrt(abs(r_squared)),
        residual_std_error=rse,
    )


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0
