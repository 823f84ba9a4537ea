"""
Tests for the IQR outlier filter and the neighbourhood noise filter.
"""

import numpy as np
import pytest

from engine.filters import filter_outliers, filter_values, iqr_mask, noise_mask, noise_metrics, quartiles, remove_noise


def test_iqr_excludes_only_the_extreme_value():
    values = [1, 2, 3, 4, 5, 6, 7, 8, 9, 100]
    kept = filter_values(values)
    excluded = [v for v, keep in zip(values, iqr_mask(values)) if not keep]
    assert excluded == [100]
    assert kept == [1, 2, 3, 4, 5, 6, 7, 8, 9]


def test_iqr_preserves_input_order():
    values = [9, 100, 1, 5, 3]
    assert filter_values(values + [4, 6]) == [9, 1, 5, 3, 4, 6]


def test_quartiles_use_half_split():
    assert quartiles([1, 2, 3, 4, 5, 6, 7, 8, 9, 100]) == (3.0, 8.0)
    # odd count excludes the median from both halves
    assert quartiles([1, 2, 3, 4, 5, 6, 7]) == (2.0, 6.0)
    assert quartiles([4.0]) == (4.0, 4.0)
    with pytest.raises(ValueError):
        quartiles([])


def test_filter_outliers_keeps_timestamps(series_factory):
    s = series_factory([10, 11, 12, 500, 11, 10])
    out = filter_outliers(s)
    assert out.timestamps().tolist() == [0, 1000, 2000, 4000, 5000]


def test_noise_metrics():
    metrics = noise_metrics(np.array([0.0, 0.0, 10.0, 0.0, 0.0]), window_size=3)
    assert metrics.tolist() == [0.0, 5.0, 10.0, 5.0, 0.0]


def test_noise_mask_threshold_mode():
    mask = noise_mask(np.array([0.0, 0.0, 10.0, 0.0, 0.0]), threshold=0.5, percentile=-1, window_size=3)
    assert mask.tolist() == [True, False, False, False, True]


def test_noise_mask_percentile_mode_when_threshold_negative():
    mask = noise_mask(np.array([0.0, 0.0, 10.0, 0.0, 0.0]), threshold=-1.0, percentile=0.8, window_size=3)
    assert mask.tolist() == [True, True, False, True, True]


def test_flat_series_is_entirely_stable(series_factory):
    s = series_factory([7.0] * 10)
    assert len(remove_noise(s, 0.5, -1, 31)) == 10


def test_single_sample_is_stable():
    assert noise_mask(np.array([3.0]), 0.5, -1, 31).tolist() == [True]
