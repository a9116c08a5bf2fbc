"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.result import Result
from pyols.regression._inference import CoefficientStats, INTERCEPT

if TYPE_CHECKING:
    from pyols.regression.design import Design


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. Everything a caller
    renders or stores is here; nothing is recomputed afterwards.
    """
    intercept: float
    slopes: dict[str, float]
    coefficients: NDArray[np.floating[Any]]
    predictions: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    tss: float
    r_squared: float
    adjusted_r_squared: float
    multiple_r: float
    residual_std_error: float
    rank: int
    df_residual: int
    rank_deficient: bool
    coefficient_stats: dict[str, CoefficientStats] | None = None


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides accessors for every fit output,
    an R-style summary, and a plain-data record for renderers and history.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    @property
    def intercept(self) -> float:
        return self._result.params.intercept

    @property
    def slopes(self) -> dict[str, float]:
        """Predictor name -> slope, in design-column order."""
        return self._result.params.slopes

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Intercept followed by slopes."""
        return self._result.params.coefficients

    @property
    def x_columns(self) -> tuple[str, ...]:
        return self._design.column_names

    @property
    def y_column(self) -> str:
        return self._design.y_name

    @property
    def predictions(self) -> NDArray[np.floating[Any]]:
        """Fitted values, aligned with the retained rows."""
        return self._result.params.predictions

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.predictions

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def multiple_r(self) -> float:
        return self._result.params.multiple_r

    @property
    def residual_std_error(self) -> float:
        return self._result.params.residual_std_error

    @property
    def coefficient_stats(self) -> dict[str, CoefficientStats] | None:
        """'Intercept' / predictor name -> CoefficientStats, or None if not computed."""
        return self._result.params.coefficient_stats

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def rank_deficient(self) -> bool:
        return self._result.params.rank_deficient

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n_observations(self) -> int:
        return self._design.n

    @property
    def row_indices(self) -> tuple[int, ...]:
        """Source data-row positions of the retained observations."""
        return self._design.row_indices

    @property
    def dropped_rows(self) -> tuple[int, ...]:
        return self._design.dropped_rows

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-data record of the fit.

        Uses the record's external key names so it can be handed to a
        renderer or stored and replayed as is.
        """
        record: dict[str, Any] = {
            'yColumn': self.y_column,
            'xColumns': list(self.x_columns),
            'intercept': self.intercept,
            'slopes': dict(self.slopes),
            'predictions': self.predictions.tolist(),
            'rSquared': self.r_squared,
            'adjustedRSquared': self.adjusted_r_squared,
            'multipleR': self.multiple_r,
            'residualStandardError': self.residual_std_error,
            'rankDeficient': self.rank_deficient,
        }
        if self.coefficient_stats is not None:
            record['coefficientStats'] = {
                name: {
                    'coefficient': s.coefficient,
                    'standardError': s.standard_error,
                    'tStat': s.t_stat,
                    'pValue': s.p_value,
                    'ci95Lower': s.ci95_lower,
                    'ci95Upper': s.ci95_upper,
                }
                for name, s in self.coefficient_stats.items()
            }
        return record

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 78,
            f"Response: {self.y_column}",
            f"Observations: {self.n_observations} ({len(self.dropped_rows)} dropped)",
            f"Predictors: {len(self.x_columns)}",
            f"Rank: {self.rank}{' (rank-deficient)' if self.rank_deficient else ''}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Multiple R: {self.multiple_r:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} on {self.df_residual} DF",
            "",
            "Coefficients:",
            "-" * 78,
        ]

        if self.coefficient_stats is None:
            lines.append(f"{'':<20} {'Estimate':>14}")
            lines.append(f"{INTERCEPT:<20} {self.intercept:>14.6f}")
            for name, slope in self.slopes.items():
                lines.append(f"{name:<20} {slope:>14.6f}")
        else:
            lines.append(
                f"{'':<20} {'Estimate':>12} {'Std.Error':>11} {'t value':>9} "
                f"{'Pr(>|t|)':>10} {'95% CI':>11}"
            )
            for name, s in self.coefficient_stats.items():
                lines.append(
                    f"{name:<20} {s.coefficient:>12.6f} {s.standard_error:>11.6f} "
                    f"{s.t_stat:>9.3f} {_format_p(s.p_value):>10} "
                    f"[{s.ci95_lower:.4f}, {s.ci95_upper:.4f}] "
                    f"{_significance_stars(s.p_value)}"
                )
            lines.append("---")
            lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")

        lines.append("-" * 78)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n_observations}, p={len(self.x_columns)}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )


def _format_p(p: float) -> str:
    return f"{p:.4f}" if p >= 0.0001 else "<.0001"


def _significance_stars(p: float) -> str:
    if p < 0.001:
        return '***'
    if p < 0.01:
        return '**'
    if p < 0.05:
        return '*'
    if p < 0.1:
        return '.'
    return ''
