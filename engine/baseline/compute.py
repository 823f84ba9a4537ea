"""
Compute logic for baseline statistics over the filtered subset of a response time series and for the deviation threshold derived from them: the largest of mean + k * stdDev, mean + f * mean and mean + a fixed additive floor.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from config import DetectionConfig, settings
from engine.exceptions import InsufficientBaseline

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaselineStats:
    mean: float
    std_dev: float
    threshold: float
    sample_count: int = 0


def _mean_std(values: Sequence[float]) -> tuple[float, float]:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return math.nan, math.nan
    return float(np.mean(arr)), float(np.std(arr))


def deviation_threshold(
    mean: float,
    std_dev: float,
    deviation_factor: float,
    min_deviation_from_mean_factor: float,
    additive_floor: float | None = None,
) -> float:
    if additive_floor is None:
        additive_floor = settings.threshold_additive_floor
    threshold = max(
        mean + deviation_factor * std_dev,
        mean + min_deviation_from_mean_factor * mean,
    )
    return max(threshold, mean + additive_floor)


def compute(
    values: Sequence[float],
    config: DetectionConfig,
    deviation_factor: Optional[float] = None,
) -> BaselineStats:
    n = len(values)
    if settings.strict_baseline and n < 2:
        raise InsufficientBaseline(f"baseline needs at least 2 points, got {n}")

    if deviation_factor is None:
        deviation_factor = config.outlier_deviation_factor
    mean, std = _mean_std(values)
    threshold = deviation_threshold(mean, std, deviation_factor, config.min_deviation_from_mean_factor)
    if math.isnan(threshold):
        log.warning("baseline of %d point(s) yields a NaN threshold", n)
    else:
        log.debug("baseline mean=%.3f std=%.3f threshold=%.3f (n=%d)", mean, std, threshold, n)
    return BaselineStats(mean=mean, std_dev=std, threshold=threshold, sample_count=n)
