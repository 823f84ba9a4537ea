import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.series import Series


def make_series(values, step_ms=1000, start_ms=0):
    return Series.from_pairs((start_ms + i * step_ms, v) for i, v in enumerate(values))


@pytest.fixture
def series_factory():
    return make_series


@pytest.fixture
def flat_series():
    return make_series([100.0] * 60)


@pytest.fixture
def spike_series():
    """100 samples of 100 ms with a five sample 1000 ms spike at indices 50-54."""
    values = [100.0] * 100
    for i in range(50, 55):
        values[i] = 1000.0
    return make_series(values)


@pytest.fixture
def noisy_spike_series():
    values = [100.0 + (i * 37) % 11 for i in range(200)]
    for i in list(range(50, 55)) + list(range(120, 125)):
        values[i] = 1000.0 + i
    return make_series(values)
