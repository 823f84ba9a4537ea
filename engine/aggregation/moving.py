"""
Centred moving average over a raw series, one aggregated point per raw sample.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np

from engine.series import Sample, Series


def window_average(values: np.ndarray, center: int, window_size: int) -> float:
    half = window_size // 2
    start = max(center - half, 0)
    end = min(center + half, values.size - 1)
    return float(np.sum(values[start:end + 1]) / (end - start + 1))


def moving_average(series: Series, window_size: int) -> Series:
    values = series.values()
    return Series(
        Sample(s.timestamp, window_average(values, i, window_size))
        for i, s in enumerate(series)
    )
