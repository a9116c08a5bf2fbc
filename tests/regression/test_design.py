"""
Tests for Design construction from tables and arrays.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal, assert_allclose

from pyols.core.exceptions import (
    ColumnNotFoundError,
    DimensionError,
    InsufficientDataError,
    ValidationError,
)
from pyols.core.table import Table
from pyols.regression import Design, encode_categorical


@pytest.fixture
def messy_table():
    """Rows 1 (bad y) and 3 (bad x) must be dropped."""
    return Table.from_rows([
        ['x', 'y', 'g'],
        ['1', '10', 'a'],
        ['2', 'n/a', 'b'],
        ['3', '14', 'b'],
        ['oops', '16', 'c'],
        ['5', '18', 'c'],
        ['6', '21', 'a'],
    ])


class TestFromTable:

    def test_study_table_shape(self, hours_table):
        assert hours_table.header == ('Hours', 'Score', 'Category')
        assert hours_table.n_rows == 10
        assert hours_table.rows[0] == ('2', '65', 'A')

    def test_single_predictor(self, hours_table):
        design = Design.from_table(hours_table, 'Score', ['Hours'])
        assert design.n == 10
        assert design.p == 1
        assert design.column_names == ('Hours',)
        assert design.y_name == 'Score'
        assert_array_equal(design.X[:, 0], [2, 3, 4, 5, 6, 7, 8, 1, 9, 10])
        assert design.dropped_rows == ()
        assert design.source is hours_table

    def test_rows_with_bad_cells_dropped(self, messy_table):
        design = Design.from_table(messy_table, 'y', ['x'])
        assert design.row_indices == (0, 2, 4, 5)
        assert design.dropped_rows == (1, 3)
        assert_array_equal(design.y, [10, 14, 18, 21])
        assert_array_equal(design.X[:, 0], [1, 3, 5, 6])

    def test_indicators_use_original_row_positions(self, messy_table):
        enc = encode_categorical(messy_table, 'g')
        design = Design.from_table(messy_table, 'y', ['x', 'g'], encodings={'g': enc})
        assert design.column_names == ('x', 'g_b', 'g_c')
        # retained rows 0, 2, 4, 5 have levels a, b, c, a
        assert_array_equal(design.X[:, 1], [0, 1, 0, 0])
        assert_array_equal(design.X[:, 2], [0, 0, 1, 0])

    def test_row_alignment(self, messy_table):
        design = Design.from_table(messy_table, 'y', ['x'])
        for i, r in enumerate(design.row_indices):
            assert design.y[i] == float(messy_table.cell(r, 1))
            assert design.X[i, 0] == float(messy_table.cell(r, 0))

    def test_synthetic_names_in_x(self, hours_table):
        enc = encode_categorical(hours_table, 'Category')
        design = Design.from_table(
            hours_table, 'Score', ['Hours', 'Category_B'],
            encodings={'Category': enc},
        )
        assert design.column_names == ('Hours', 'Category_B')
        assert 'Category_A' not in design.column_names

    def test_raw_columns_precede_indicators(self, three_level_table):
        enc = encode_categorical(three_level_table, 'Category')
        design = Design.from_table(
            three_level_table, 'Score', ['Category', 'Hours'],
            encodings={'Category': enc},
        )
        assert design.column_names == ('Hours', 'Category_B', 'Category_C')

    def test_sources_in_declared_order(self):
        table = Table.from_rows([
            ['y', 'u', 'v'],
            ['1', 'p', 'k'], ['2', 'q', 'j'], ['3', 'p', 'j'], ['5', 'q', 'k'],
        ])
        encodings = {
            'v': encode_categorical(table, 'v'),
            'u': encode_categorical(table, 'u'),
        }
        design = Design.from_table(table, 'y', [], encodings=encodings)
        assert design.column_names == ('v_k', 'u_q')

    def test_plain_mapping_encoding(self, hours_table):
        dummies = {
            'A': [],
            'B': [0, 1, 0, 1, 0, 1, 0, 0, 0, 1],
        }
        design = Design.from_table(
            hours_table, 'Score', ['Hours', 'Category_B'],
            encodings={'Category': dummies},
        )
        assert design.column_names == ('Hours', 'Category_B')
        assert_array_equal(design.X[:, 1], dummies['B'])

    def test_plain_mapping_keys_sorted(self, three_level_table):
        enc = encode_categorical(three_level_table, 'Category')
        reversed_mapping = {
            name: enc.columns[name] for name in reversed(enc.column_names)
        }
        design = Design.from_table(
            three_level_table, 'Score', ['Hours'],
            encodings={'Category': reversed_mapping},
        )
        assert design.column_names == ('Hours', 'Category_B', 'Category_C')

    def test_unresolvable_source_skipped(self, hours_table):
        with pytest.warns(RuntimeWarning, match="Region") as record:
            design = Design.from_table(
                hours_table, 'Score', ['Hours'],
                encodings={'Region': {'Region_N': [1] * 10}},
            )
        assert record[0].filename == __file__
        assert design.column_names == ('Hours',)
        assert design.skipped_sources == ('Region',)

    def test_indicator_length_mismatch(self, hours_table):
        with pytest.raises(DimensionError):
            Design.from_table(
                hours_table, 'Score', ['Hours'],
                encodings={'Category': {'Category_B': [0, 1]}},
            )

    def test_missing_y(self, hours_table):
        with pytest.raises(ColumnNotFoundError) as exc_info:
            Design.from_table(hours_table, 'Grade', ['Hours'])
        assert exc_info.value.column == 'Grade'

    def test_missing_x(self, hours_table):
        with pytest.raises(ColumnNotFoundError):
            Design.from_table(hours_table, 'Score', ['Hours', 'Age'])

    def test_indicator_without_encoding(self, hours_table):
        with pytest.raises(ColumnNotFoundError):
            Design.from_table(hours_table, 'Score', ['Hours', 'Category_B'])

    def test_duplicate_predictors(self, hours_table):
        with pytest.raises(ValidationError, match="duplicate"):
            Design.from_table(hours_table, 'Score', ['Hours', 'Hours'])

    def test_too_few_rows_survive(self):
        table = Table.from_rows([['x', 'y'], ['1', '2'], ['a', '3'], ['4', '']])
        with pytest.raises(InsufficientDataError) as exc_info:
            Design.from_table(table, 'y', ['x'])
        assert exc_info.value.n_rows == 1
        assert exc_info.value.required == 2

    def test_ragged_rows_treated_as_missing(self):
        table = Table.from_rows([['x', 'y'], ['1', '2'], ['2'], ['3', '4'], ['4', '5', 'extra']])
        design = Design.from_table(table, 'y', ['x'])
        assert design.row_indices == (0, 2, 3)


class TestFromArrays:

    def test_basic(self, simple_regression_data):
        X, y, _ = simple_regression_data
        design = Design.from_arrays(X, y)
        assert design.n == 100
        assert design.p == 3
        assert design.column_names == ('x1', 'x2', 'x3')
        assert design.source is None

    def test_1d_x_promoted(self, hours_xy):
        x, y = hours_xy
        design = Design.from_arrays(x, y, column_names=['Hours'])
        assert design.X.shape == (10, 1)

    def test_name_count_mismatch(self, hours_xy):
        x, y = hours_xy
        with pytest.raises(DimensionError):
            Design.from_arrays(x, y, column_names=['a', 'b'])

    def test_non_finite_rejected(self, hours_xy):
        x, y = hours_xy
        y = y.copy()
        y[0] = np.nan
        with pytest.raises(ValidationError):
            Design.from_arrays(x, y)

    def test_length_mismatch(self, hours_xy):
        x, y = hours_xy
        with pytest.raises(DimensionError):
            Design.from_arrays(x, y[:-1])


class TestGram:

    def test_xtx_includes_intercept(self, hours_xy):
        x, y = hours_xy
        design = Design.from_arrays(x, y)
        D = np.column_stack([np.ones(10), x])
        assert_allclose(design.augmented(), D)
        assert_allclose(design.XtX(), D.T @ D)
        assert_allclose(design.Xty(), D.T @ y)
