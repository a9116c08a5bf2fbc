"""
CPU backend for linear regression.

Solves the normal equations (D'D) β = D'y with Gaussian elimination and
gets (D'D)⁻¹ for the coefficient variances with Gauss-Jordan elimination,
where D = [1 | X].
"""

import warnings
from typing import Any

from pyols.core.result import Result
from pyols.core.exceptions import SingularMatrixError
from pyols.core.compute.tolerances import SolverConfig, DEFAULT_CONFIG
from pyols.core.compute.timing import Timer
from pyols.core.compute.linalg import gaussian_solve, gauss_jordan_inverse
from pyols.regression.design import Design
from pyols.regression.solution import LinearParams
from pyols.regression._aggregate import predict, goodness_of_fit
from pyols.regression._inference import coefficient_statistics


class CPUGaussBackend:
    """
    CPU backend using Gaussian elimination on the normal equations.

    Degenerate pivots (perfectly collinear predictors, constant columns)
    do not raise by default: the affected coefficients come out as 0 and
    their variances as 0. The result is flagged rank_deficient and carries
    a warning so the condition is never silent.
    """

    def __init__(
        self,
        config: SolverConfig = DEFAULT_CONFIG,
        *,
        inference: bool = True,
        strict: bool = False,
    ):
        """
        Args:
            config: Numerical thresholds
            inference: If False, skip (D'D)⁻¹ and coefficient statistics
            strict: If True, raise SingularMatrixError on rank deficiency
                instead of returning the zero-fallback solution
        """
        self._config = config
        self._inference = inference
        self._strict = strict

    @property
    def name(self) -> str:
        return 'cpu_gauss'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Fit OLS by the normal equations.

        Algorithm:
            1. Form A = D'D and b = D'y
            2. Solve A β = b (Gaussian elimination, partial pivoting)
            3. Predictions, residuals and goodness of fit
            4. (Optional) A⁻¹ by Gauss-Jordan, then coefficient statistics

        Args:
            design: Validated regression design

        Returns:
            Result containing LinearParams

        Raises:
            SingularMatrixError: If strict and D'D is rank-deficient
        """
        timer = Timer()
        timer.start()

        n, p = design.n, design.p
        expected_rank = p + 1

        # === Normal Equations ===
        with timer.section('normal_equations'):
            A = design.XtX()
            b = design.Xty()
            solution = gaussian_solve(A, b, pivot_tol=self._config.pivot_tol)

        intercept = float(solution.x[0])
        slope_arr = solution.x[1:].copy()

        # === Predictions and Fit ===
        with timer.section('statistics'):
            predictions = predict(design.X, intercept, slope_arr)
            residuals = design.y - predictions
            gof = goodness_of_fit(design.y, predictions, p)

        # === Inference ===
        rank = solution.rank
        inverse_degenerate: tuple[int, ...] = ()
        coefficient_stats = None
        if self._inference:
            with timer.section('inference'):
                inverse = gauss_jordan_inverse(A, pivot_tol=self._config.inverse_pivot_tol)
                rank = min(rank, inverse.rank)
                inverse_degenerate = inverse.degenerate_pivots
                coefficient_stats = coefficient_statistics(
                    n, p, gof.rss, inverse.inverse,
                    intercept, slope_arr, design.column_names,
                    config=self._config,
                )

        rank_deficient = rank < expected_rank
        if self._strict and rank_deficient:
            raise SingularMatrixError(
                f"Normal equations are rank-deficient: rank={rank}, "
                f"expected={expected_rank}. This indicates perfect multicollinearity.",
                matrix_name="X'X",
                rank=rank,
                expected_rank=expected_rank,
            )

        result_warnings: list[str] = []
        if rank_deficient:
            names = ['Intercept', *design.column_names]
            aliased = [names[i] for i in solution.degenerate_pivots]
            message = (
                f"Design is rank-deficient (rank {rank} of {expected_rank}); "
                f"coefficients set to 0: {aliased}"
            )
            result_warnings.append(message)
            warnings.warn(message, RuntimeWarning, stacklevel=3)
        if design.dropped_rows:
            result_warnings.append(
                f"Dropped {len(design.dropped_rows)} row(s) with non-numeric values"
            )

        timer.stop()

        params = LinearParams(
            intercept=intercept,
            slopes={name: float(v) for name, v in zip(design.column_names, slope_arr)},
            coefficients=solution.x,
            predictions=predictions,
            residuals=residuals,
            rss=gof.rss,
            tss=gof.tss,
            r_squared=gof.r_squared,
            adjusted_r_squared=gof.adjusted_r_squared,
            multiple_r=gof.multiple_r,
            residual_std_error=gof.residual_std_error,
            rank=rank,
            df_residual=n - p - 1,
            rank_deficient=rank_deficient,
            coefficient_stats=coefficient_stats,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': rank,
            'rank_deficient': rank_deficient,
            'degenerate_pivots': solution.degenerate_pivots,
            'inverse_degenerate_pivots': inverse_degenerate,
            'n_dropped': len(design.dropped_rows),
            'skipped_sources': design.skipped_sources,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(result_warnings),
        )
