"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyols.core.table import Table


HOURS = [2, 3, 4, 5, 6, 7, 8, 1, 9, 10]
SCORES = [65, 75, 85, 95, 105, 115, 125, 50, 130, 140]
TWO_LEVELS = ['A', 'B', 'A', 'B', 'A', 'B', 'A', 'A', 'A', 'B']
THREE_LEVELS = ['A', 'B', 'C', 'B', 'A', 'C', 'A', 'C', 'B', 'A']


def _table(*columns):
    header, *data = zip(*columns)
    rows = [list(header)] + [[str(v) for v in row] for row in data]
    return Table.from_rows(rows)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def hours_table():
    """Hours/Score study table with a two-level Category column."""
    return _table(
        ('Hours', *HOURS),
        ('Score', *SCORES),
        ('Category', *TWO_LEVELS),
    )


@pytest.fixture
def three_level_table():
    """Hours/Score study table with a three-level Category column."""
    return _table(
        ('Hours', *HOURS),
        ('Score', *SCORES),
        ('Category', *THREE_LEVELS),
    )


@pytest.fixture
def hours_xy():
    """Scenario data as arrays: (x, y)."""
    return np.array(HOURS, dtype=float), np.array(SCORES, dtype=float)


@pytest.fixture
def simple_regression_data(rng):
    """Three-predictor dataset with known coefficients and low noise."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = 3.0 + X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data():
    """Small integer dataset whose third column duplicates the second."""
    x1 = np.array([1, 2, 3, 4, 5, 6, 7, 8], dtype=float)
    x2 = np.array([2, 1, 4, 3, 6, 5, 8, 7], dtype=float)
    X = np.column_stack([x1, x2, x2])
    y = np.array([3, 4, 8, 9, 12, 13, 17, 16], dtype=float)
    return X, y


@pytest.fixture
def scaled_collinear_data(rng):
    """Large-magnitude predictor with an exact multiple of itself as a second column."""
    x1 = rng.uniform(0.0, 1000.0, 40)
    X = np.column_stack([x1, 0.3 * x1])
    y = 1.0 + 2.0 * x1 + rng.standard_normal(40)
    return X, y
