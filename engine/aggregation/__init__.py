"""
Windowed aggregators that turn a raw response time series into a detection signal: centred moving average, bucketed top-N mean and inverse-distance centre of gravity.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.aggregation.buckets import Bucket, bucket_top_n
from engine.aggregation.gravity import GravityPoint, center_of_gravity, neighbour_weights
from engine.aggregation.moving import moving_average, window_average

__all__ = [
    "Bucket",
    "GravityPoint",
    "bucket_top_n",
    "center_of_gravity",
    "moving_average",
    "neighbour_weights",
    "window_average",
]
