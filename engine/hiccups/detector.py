"""
Dispatcher selecting one of the five detection strategies by configuration key.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from config import DetectionConfig
from engine.enums import Strategy
from engine.hiccups.strategies import (
    DetectionResult,
    bucket_outlier_strategy,
    center_of_gravity_strategy,
    moving_average_strategy,
    noise_and_outlier_strategy,
    noise_reduction_strategy,
)
from engine.series import RangeQuery, Series

log = logging.getLogger(__name__)


def detect(
    series: Series,
    config: Optional[DetectionConfig] = None,
    strategy: Union[Strategy, str, None] = None,
    range_query: Optional[RangeQuery] = None,
) -> DetectionResult:
    if config is None:
        config = DetectionConfig()
    if not isinstance(strategy, Strategy):
        strategy = Strategy.from_key(strategy)

    log.debug("running %s over %d sample(s)", strategy.value, len(series))

    if strategy is Strategy.noise_reduction:
        result = noise_reduction_strategy(series, config)
    elif strategy is Strategy.noise_and_outlier:
        result = noise_and_outlier_strategy(series, config)
    elif strategy is Strategy.bucket_outlier:
        result = bucket_outlier_strategy(series, config, range_query=range_query)
    elif strategy is Strategy.center_of_gravity:
        result = center_of_gravity_strategy(series, config)
    else:
        result = moving_average_strategy(series, config)

    log.debug("%s found %d hiccup(s)", strategy.value, len(result.hiccups))
    return result
