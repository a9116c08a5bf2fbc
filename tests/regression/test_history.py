"""
Tests for FitHistory.
"""

from datetime import timezone

import pytest

from pyols import FitHistory, fit
from pyols.regression.history import MAX_HISTORY


def _record(i):
    return {'yColumn': 'y', 'xColumns': [f'x{i}'], 'rSquared': i / 100}


class TestFitHistory:

    def test_add_solution(self, hours_table):
        history = FitHistory()
        result = fit(hours_table, 'Score', ['Hours'])
        entry = history.add(result)
        assert len(history) == 1
        assert entry.y_column == 'Score'
        assert entry.x_columns == ['Hours']
        assert entry.r_squared == result.r_squared
        assert entry.record == result.to_dict()
        assert entry.timestamp.tzinfo == timezone.utc

    def test_newest_first(self):
        history = FitHistory()
        first = history.add(_record(1))
        second = history.add(_record(2))
        assert [e.id for e in history.entries()] == [second.id, first.id]
        assert history.last() is second

    def test_capped(self):
        history = FitHistory(max_entries=3)
        entries = [history.add(_record(i)) for i in range(5)]
        assert len(history) == 3
        assert [e.id for e in history.entries()] == [e.id for e in reversed(entries[2:])]
        assert history.get(entries[0].id) is None

    def test_default_cap(self):
        history = FitHistory()
        for i in range(MAX_HISTORY + 5):
            history.add(_record(i))
        assert len(history) == MAX_HISTORY

    def test_ids_unique(self):
        history = FitHistory()
        ids = {history.add(_record(i)).id for i in range(20)}
        assert len(ids) == 20

    def test_get(self):
        history = FitHistory()
        entry = history.add(_record(7))
        assert history.get(entry.id) is entry
        assert history.get('missing') is None

    def test_record_is_copied(self):
        history = FitHistory()
        record = _record(1)
        entry = history.add(record)
        record['yColumn'] = 'changed'
        assert entry.y_column == 'y'

    def test_nested_record_values_are_copied(self):
        history = FitHistory()
        record = _record(1)
        record['slopes'] = {'x1': 2.0}
        entry = history.add(record)
        record['xColumns'].append('x9')
        record['slopes']['x1'] = -1.0
        assert entry.x_columns == ['x1']
        assert entry.record['slopes'] == {'x1': 2.0}

    def test_entries_is_a_copy(self):
        history = FitHistory()
        history.add(_record(1))
        history.entries().clear()
        assert len(history) == 1

    def test_clear(self):
        history = FitHistory()
        history.add(_record(1))
        history.clear()
        assert len(history) == 0
        assert history.last() is None

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            FitHistory(max_entries=0)
