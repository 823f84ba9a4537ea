"""
The five hiccup detection strategies. Each one combines outlier filtering, noise filtering, a windowed aggregator, the threshold calculator and the segmenter in its own way, and the differences between them are intentional:

* moving average: IQR baseline, centred moving average signal, ``>=`` threshold.
* noise reduction: denoised series is both baseline and signal, ``>`` threshold.
* noise and outlier: a raw sample is inside when it survived noise filtering
  but was excluded by the IQR filter; the reported threshold is the largest
  IQR-retained value.
* bucket outlier: bucketed top-N means, hiccup bounds taken from bucket
  spans, raw statistics re-queried over the closed interval.
* centre of gravity: weighted signal with a fixed deviation factor.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from api.responses import Hiccup
from config import DetectionConfig, settings
from engine.aggregation import bucket_top_n, center_of_gravity, moving_average
from engine.baseline import BaselineStats, compute
from engine.enums import Strategy
from engine.exceptions import EmptyDetectionSeries
from engine.filters import iqr_mask, noise_mask
from engine.hiccups.segmenter import HiccupSegmenter
from engine.series import RangeQuery, Sample, Series


@dataclass(frozen=True)
class DetectionResult:
    strategy: Strategy
    hiccups: List[Hiccup]
    baseline: BaselineStats
    raw_series: Series
    detection_series: Series
    preprocessed_series: Series


def _noise_mask(series: Series, config: DetectionConfig) -> np.ndarray:
    return noise_mask(
        series.values(),
        config.noise_threshold,
        config.noise_percentile,
        config.noise_window_size,
    )


def _subset(series: Series, mask: np.ndarray) -> Series:
    return series.subset(np.flatnonzero(mask).tolist())


def moving_average_strategy(series: Series, config: DetectionConfig) -> DetectionResult:
    without_outliers = _subset(series, iqr_mask(series.values()))
    baseline = compute(without_outliers.values(), config)
    detection = moving_average(series, config.moving_average_window_size)

    segmenter = HiccupSegmenter(baseline, config.inter_hiccup_threshold_ms)
    for raw, point in zip(series, detection):
        segmenter.step(
            point.timestamp,
            processed=point.value,
            raw=raw.value,
            inside=point.value >= baseline.threshold,
        )

    return DetectionResult(
        strategy=Strategy.moving_average,
        hiccups=segmenter.finish(),
        baseline=baseline,
        raw_series=series,
        detection_series=detection,
        preprocessed_series=without_outliers,
    )


def noise_reduction_strategy(series: Series, config: DetectionConfig) -> DetectionResult:
    denoised = _subset(series, _noise_mask(series, config))
    baseline = compute(denoised.values(), config)

    segmenter = HiccupSegmenter(baseline, config.inter_hiccup_threshold_ms)
    for point in denoised:
        segmenter.step(
            point.timestamp,
            processed=point.value,
            raw=point.value,
            inside=point.value > baseline.threshold,
        )

    return DetectionResult(
        strategy=Strategy.noise_reduction,
        hiccups=segmenter.finish(),
        baseline=baseline,
        raw_series=series,
        detection_series=denoised,
        preprocessed_series=denoised,
    )


def noise_and_outlier_strategy(series: Series, config: DetectionConfig) -> DetectionResult:
    values = series.values()
    retained = iqr_mask(values)
    stable = _noise_mask(series, config)
    without_outliers = _subset(series, retained)
    denoised = _subset(series, stable)

    stats = compute(without_outliers.values(), config)
    peak = float(np.max(without_outliers.values())) if len(without_outliers) else float("nan")
    baseline = BaselineStats(
        mean=stats.mean,
        std_dev=stats.std_dev,
        threshold=peak,
        sample_count=stats.sample_count,
    )

    segmenter = HiccupSegmenter(baseline, config.inter_hiccup_threshold_ms)
    for i, sample in enumerate(series):
        # locally stable yet statistically extreme
        extreme = bool(stable[i]) and not bool(retained[i])
        segmenter.step(
            sample.timestamp,
            processed=sample.value,
            raw=sample.value,
            inside=extreme,
            may_open=sample.value > baseline.mean,
        )

    return DetectionResult(
        strategy=Strategy.noise_and_outlier,
        hiccups=segmenter.finish(),
        baseline=baseline,
        raw_series=series,
        detection_series=denoised,
        preprocessed_series=without_outliers,
    )


def bucket_outlier_strategy(
    series: Series,
    config: DetectionConfig,
    range_query: Optional[RangeQuery] = None,
) -> DetectionResult:
    if range_query is None:
        range_query = series.between

    buckets = bucket_top_n(series, config.moving_average_window_size, config.num_top_response_times)
    detection = Series(Sample(b.timestamp, b.value) for b in buckets)
    retained = Series(s for b in buckets for s in b.retained)
    baseline = compute([b.value for b in buckets], config)

    segmenter = HiccupSegmenter(baseline, config.inter_hiccup_threshold_ms, range_query=range_query)
    for bucket in buckets:
        segmenter.step(
            bucket.timestamp,
            processed=bucket.value,
            raw=bucket.value,
            inside=bucket.value >= baseline.threshold,
            start=bucket.start,
            end=bucket.end,
        )

    return DetectionResult(
        strategy=Strategy.bucket_outlier,
        hiccups=segmenter.finish(),
        baseline=baseline,
        raw_series=series,
        detection_series=detection,
        preprocessed_series=retained,
    )


def center_of_gravity_strategy(series: Series, config: DetectionConfig) -> DetectionResult:
    points = center_of_gravity(
        series,
        config.weight_calculation_window_size,
        config.center_of_gravity_window_size,
    )
    if not points:
        raise EmptyDetectionSeries(
            f"empty detection series: all {len(series)} centre of gravity point(s) were NaN or infinite"
        )

    detection = Series(Sample(p.timestamp, p.value) for p in points)
    baseline = compute(
        [p.value for p in points],
        config,
        deviation_factor=settings.center_of_gravity_deviation_factor,
    )

    segmenter = HiccupSegmenter(baseline, config.inter_hiccup_threshold_ms)
    for point in points:
        segmenter.step(
            point.timestamp,
            processed=point.value,
            raw=series[point.index].value,
            inside=point.value >= baseline.threshold,
        )

    return DetectionResult(
        strategy=Strategy.center_of_gravity,
        hiccups=segmenter.finish(),
        baseline=baseline,
        raw_series=series,
        detection_series=detection,
        preprocessed_series=detection,
    )
