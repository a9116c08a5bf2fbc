"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from typing import Literal, Mapping, Sequence, Union
from numpy.typing import ArrayLike

from pyols.core.compute.tolerances import SolverConfig, DEFAULT_CONFIG
from pyols.core.table import Table
from pyols.core.validation import check_min_samples
from pyols.regression.design import Design, EncodingSpec
from pyols.regression.solution import LinearSolution
from pyols.regression.backends.cpu import CPUGaussBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gauss']


def fit(
    data: Union[Design, Table, ArrayLike],
    y: Union[str, ArrayLike, None] = None,
    x: Union[Sequence[str], None] = None,
    *,
    encodings: Mapping[str, EncodingSpec] | None = None,
    inference: bool = True,
    strict: bool = False,
    backend: BackendChoice = 'auto',
    config: SolverConfig = DEFAULT_CONFIG,
) -> LinearSolution:
    """
    Fit a linear regression model with an intercept.

    Solves the ordinary least squares problem:
        min_β ||y - Dβ||²,  D = [1 | X]

    This is the primary public API for linear regression. Input
    validation, design construction, backend selection and result
    wrapping all happen here.

    Args:
        data: One of
            - a Table, with `y` the response column and `x` the predictors
            - a prebuilt Design (y and x must be omitted)
            - an array-like X (n x p), with `y` an array-like response
        y: Response column name (Table) or response values (arrays)
        x: Predictor names (Table only): header columns, indicator
            columns, or encoded source columns
        encodings: source column -> CategoricalEncoding (or plain mapping
            of indicator name -> 0/1 vector). Table only.
        inference: Compute standard errors, t statistics, p-values and CIs
        strict: Raise SingularMatrixError instead of returning the
            zero-fallback solution when the design is rank-deficient
        backend: Computational backend ('auto', 'cpu', 'cpu_gauss')
        config: Numerical thresholds

    Returns:
        LinearSolution with coefficients, fit statistics and summary methods

    Raises:
        ColumnNotFoundError: If a requested column is absent from the table
        InsufficientDataError: If fewer than p + 2 usable rows remain
        ValidationError: If inputs are otherwise invalid
        SingularMatrixError: If strict and the design is rank-deficient

    Example:
        >>> from pyols import Table, fit, encode_categorical
        >>> table = Table.from_file('scores.csv')
        >>> result = fit(table, 'Score', ['Hours'])
        >>> result.slopes
        {'Hours': 9.787878...}
        >>> enc = encode_categorical(table, 'Category')
        >>> result = fit(table, 'Score', ['Hours', 'Category'],
        ...              encodings={'Category': enc})
        >>> print(result.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    if isinstance(data, Design):
        if y is not None or x is not None or encodings is not None:
            raise ValueError("y, x and encodings must be omitted when passing a Design")
        design = data
    elif isinstance(data, Table):
        if not isinstance(y, str) or x is None:
            raise ValueError("y (column name) and x (column names) required with a Table")
        design = Design.from_table(data, y, x, encodings=encodings, stacklevel=3)
    else:
        if y is None:
            raise ValueError("y required when data is an array")
        if encodings is not None:
            raise ValueError("encodings only apply to Table input")
        design = Design.from_arrays(data, y, column_names=x)

    check_min_samples(design.n, design.p + 2, 'design')

    # === Select Backend ===
    backend_impl = _get_backend(backend, config=config, inference=inference, strict=strict)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)


def _get_backend(
    choice: BackendChoice,
    *,
    config: SolverConfig,
    inference: bool,
    strict: bool,
):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_gauss'):
        return CPUGaussBackend(config, inference=inference, strict=strict)
    raise ValueError(f"Unknown backend: {choice!r}")
