"""
Bucketed top-N mean. The raw series is cut into contiguous buckets of a fixed sample count (the last one may be short). Each bucket is IQR filtered, its largest remaining values are averaged, and the sample at the median rank among them supplies the representative timestamp. The bucket's full timestamp span is kept so hiccup intervals can be rebuilt later.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from engine.filters.outliers import iqr_mask
from engine.series import Sample, Series


@dataclass(frozen=True)
class Bucket:
    timestamp: int
    value: float
    start: int
    end: int
    retained: Series


def _summarise(chunk: List[Sample], top_n: int) -> Bucket:
    mask = iqr_mask([s.value for s in chunk])
    retained = [s for s, keep in zip(chunk, mask) if keep]
    ranked = sorted(retained, key=lambda s: s.value)

    lo = len(ranked) - min(len(ranked), top_n)
    hi = len(ranked)
    top = ranked[lo:hi]
    median_rank = (hi - lo) // 2

    return Bucket(
        timestamp=top[median_rank].timestamp,
        value=float(np.sum([s.value for s in top]) / len(top)),
        start=min(s.timestamp for s in chunk),
        end=max(s.timestamp for s in chunk),
        retained=Series(retained),
    )


def bucket_top_n(series: Series, bucket_size: int, top_n: int) -> List[Bucket]:
    samples = list(series)
    return [
        _summarise(samples[i:i + bucket_size], top_n)
        for i in range(0, len(samples), bucket_size)
    ]
