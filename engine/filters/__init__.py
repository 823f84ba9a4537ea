"""
Filters that separate statistical outliers and locally unstable points from a response time series, producing the baselines used for threshold calibration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.filters.noise import noise_mask, noise_metrics, remove_noise
from engine.filters.outliers import filter_outliers, filter_values, iqr_bounds, iqr_mask, quartiles

__all__ = [
    "filter_outliers",
    "filter_values",
    "iqr_bounds",
    "iqr_mask",
    "noise_mask",
    "noise_metrics",
    "quartiles",
    "remove_noise",
]
