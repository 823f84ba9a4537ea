"""
Tests for the Series container: ordering, range queries and subsets.
"""

import numpy as np
import pytest

from engine.series import Sample, Series


def test_from_pairs_sorts_stably():
    s = Series.from_pairs([(30, 3.0), (10, 1.0), (20, 2.0), (10, 1.5)])
    assert s.pairs() == [(10, 1.0), (10, 1.5), (20, 2.0), (30, 3.0)]


def test_constructor_rejects_decreasing_timestamps():
    with pytest.raises(ValueError):
        Series([Sample(2, 1.0), Sample(1, 1.0)])


def test_numpy_views():
    s = Series.from_pairs([(1, 5.0), (2, 6.0)])
    assert s.timestamps().dtype == np.int64
    assert s.values().tolist() == [5.0, 6.0]


def test_between_is_inclusive():
    s = Series.from_pairs((t, float(t)) for t in range(0, 100, 10))
    assert s.between(20, 40) == [20.0, 30.0, 40.0]
    assert s.between(21, 29) == []


def test_subset_and_slice():
    s = Series.from_pairs((t, float(t)) for t in range(5))
    assert s.subset([3, 1]).pairs() == [(1, 1.0), (3, 3.0)]
    assert s[1:3] == Series([Sample(1, 1.0), Sample(2, 2.0)])
    assert s[0] == Sample(0, 0.0)
