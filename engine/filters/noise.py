"""
Noise filter that drops locally unstable samples. Each sample is scored by its mean absolute difference to the neighbours inside a fixed window, the scores are normalised by the largest score, and only samples below a threshold survive. A negative threshold switches to percentile mode, where the threshold is read from the sorted normalised scores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math

import numpy as np

from engine.series import Series


def noise_metrics(values: np.ndarray, window_size: int) -> np.ndarray:
    n = values.size
    half = window_size // 2
    metrics = np.zeros(n, dtype=float)
    for i in range(n):
        lo = max(0, i - half)
        hi = min(n, i + half + 1)
        neighbours = np.concatenate((values[lo:i], values[i + 1:hi]))
        if neighbours.size == 0:
            # a lone sample has no neighbourhood and counts as stable
            continue
        metrics[i] = float(np.mean(np.abs(values[i] - neighbours)))
    return metrics


def _normalise(metrics: np.ndarray) -> np.ndarray:
    peak = float(metrics.max()) if metrics.size else 0.0
    if peak <= 0.0:
        return np.zeros_like(metrics)
    return metrics / peak


def noise_mask(
    values: np.ndarray,
    threshold: float,
    percentile: float,
    window_size: int,
) -> np.ndarray:
    """True for every sample whose normalised noise stays below the threshold."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return np.zeros(0, dtype=bool)
    relative = _normalise(noise_metrics(values, window_size))

    if threshold < 0:
        ranked = np.sort(relative)
        ix = int(math.floor(ranked.size * percentile))
        ix = min(max(ix, 0), ranked.size - 1)
        threshold = float(ranked[ix])

    return relative < threshold


def remove_noise(series: Series, threshold: float, percentile: float, window_size: int) -> Series:
    mask = noise_mask(series.values(), threshold, percentile, window_size)
    return series.subset(np.flatnonzero(mask).tolist())
