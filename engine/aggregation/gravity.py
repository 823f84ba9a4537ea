"""
Centre-of-gravity weighting. Every sample gets a weight equal to its mean inverse distance to the neighbours in a narrow weight window, so points sitting in dense value clusters pull harder. The detection value at a sample is the weighted average over a wider centre-of-gravity window. Points whose weighted average is NaN or infinite are dropped.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

import numpy as np

from engine.series import Series


@dataclass(frozen=True)
class GravityPoint:
    index: int
    timestamp: int
    value: float


def neighbour_weights(values: np.ndarray, window_size: int) -> np.ndarray:
    n = values.size
    half = window_size // 2
    weights = np.full(n, np.nan, dtype=float)
    for j in range(n):
        lo = max(0, j - half)
        hi = min(n, j + half + 1)
        neighbours = np.concatenate((values[lo:j], values[j + 1:hi]))
        distances = np.abs(values[j] - neighbours)
        # identical neighbours would give an infinite inverse distance
        distances = distances[distances > 0]
        if distances.size:
            weights[j] = float(np.mean(1.0 / distances))
    return weights


def center_of_gravity(
    series: Series,
    weight_window_size: int,
    gravity_window_size: int,
) -> List[GravityPoint]:
    values = series.values()
    weights = neighbour_weights(values, weight_window_size)
    n = values.size
    half = gravity_window_size // 2

    points: List[GravityPoint] = []
    for i, sample in enumerate(series):
        lo = max(0, i - half)
        hi = min(n, i + half + 1)
        w = weights[lo:hi]
        total = float(np.sum(w))
        if total == 0.0 or math.isnan(total):
            continue
        cog = float(np.sum(values[lo:hi] * w)) / total
        if math.isnan(cog) or math.isinf(cog):
            continue
        points.append(GravityPoint(index=i, timestamp=sample.timestamp, value=cog))
    return points
