"""
Interquartile range outlier filter. Quartiles use the lower/upper half median split (the median itself is left out of both halves for odd counts), never linear interpolation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from engine.series import Series

IQR_FENCE_FACTOR = 1.5


def _median(sorted_vals: np.ndarray) -> float:
    n = sorted_vals.size
    mid = n // 2
    if n % 2:
        return float(sorted_vals[mid])
    return float((sorted_vals[mid - 1] + sorted_vals[mid]) / 2.0)


def quartiles(values: Sequence[float]) -> Tuple[float, float]:
    arr = np.sort(np.asarray(values, dtype=float))
    n = arr.size
    if n == 0:
        raise ValueError("quartiles of an empty value set are undefined")
    if n == 1:
        return float(arr[0]), float(arr[0])
    lower = arr[: n // 2]
    upper = arr[(n + 1) // 2:]
    return _median(lower), _median(upper)


def iqr_bounds(values: Sequence[float]) -> Tuple[float, float]:
    q1, q3 = quartiles(values)
    iqr = q3 - q1
    return q1 - IQR_FENCE_FACTOR * iqr, q3 + IQR_FENCE_FACTOR * iqr


def iqr_mask(values: Sequence[float]) -> np.ndarray:
    """True for every value inside the IQR fences, in input order."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return np.zeros(0, dtype=bool)
    lo, hi = iqr_bounds(arr)
    return (arr >= lo) & (arr <= hi)


def filter_values(values: Sequence[float]) -> List[float]:
    mask = iqr_mask(values)
    return [float(v) for v, keep in zip(values, mask) if keep]


def filter_outliers(series: Series) -> Series:
    mask = iqr_mask(series.values())
    return series.subset(np.flatnonzero(mask).tolist())
