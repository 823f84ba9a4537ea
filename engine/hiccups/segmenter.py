"""
Threshold-crossing state machine that cuts a detection signal into hiccups.

The segmenter starts ``outside``. A step whose sample is inside opens a hiccup
(snapshotting the baseline) and every further inside step moves its end. An
outside step closes the hiccup only once its timestamp lies more than the
inter-hiccup gap past the current end; until then the step still feeds the
running sums. A hiccup left open at the end of the signal is finalised by
``finish``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from api.responses import Hiccup
from engine.baseline import BaselineStats
from engine.enums import SegmenterState
from engine.series import RangeQuery

log = logging.getLogger(__name__)


@dataclass
class RunningSums:
    count: int = 0
    raw_sum: float = 0.0
    raw_max: float = -math.inf
    processed_sum: float = 0.0
    processed_max: float = -math.inf

    def add(self, raw: float, processed: float) -> None:
        self.count += 1
        self.raw_sum += raw
        self.processed_sum += processed
        if raw > self.raw_max:
            self.raw_max = raw
        if processed > self.processed_max:
            self.processed_max = processed


class HiccupSegmenter:
    """Builds hiccups from a time ordered stream of detection points.

    When ``range_query`` is given, raw statistics of a closed hiccup are read
    back from it over ``[start, end]`` instead of from the running sums.
    """

    def __init__(
        self,
        baseline: BaselineStats,
        inter_hiccup_threshold_ms: int,
        range_query: Optional[RangeQuery] = None,
    ) -> None:
        self.baseline = baseline
        self.inter_hiccup_threshold_ms = inter_hiccup_threshold_ms
        self.range_query = range_query
        self.state = SegmenterState.outside
        self.hiccups: List[Hiccup] = []
        self._sums = RunningSums()
        self._start = 0
        self._end = 0

    def step(
        self,
        timestamp: int,
        processed: float,
        raw: float,
        inside: bool,
        may_open: bool = True,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> None:
        if self.state is SegmenterState.outside:
            if inside and may_open:
                self._open(timestamp if start is None else start)
                self._end = timestamp if end is None else end
                self._sums.add(raw, processed)
            return

        if inside:
            self._end = timestamp if end is None else end
            self._sums.add(raw, processed)
        elif timestamp - self._end > self.inter_hiccup_threshold_ms:
            self._close()
        else:
            self._sums.add(raw, processed)

    def finish(self) -> List[Hiccup]:
        if self.state is SegmenterState.inside_hiccup:
            self._close()
        return self.hiccups

    def _open(self, start: int) -> None:
        self.state = SegmenterState.inside_hiccup
        self._start = start
        self._sums = RunningSums()
        log.debug("hiccup opened at %d (threshold %.3f)", start, self.baseline.threshold)

    def _raw_stats(self) -> tuple[float, float]:
        if self.range_query is None:
            return self._sums.raw_sum / self._sums.count, self._sums.raw_max
        raw = np.asarray(self.range_query(self._start, self._end), dtype=float)
        if raw.size == 0:
            return math.nan, math.nan
        return float(np.mean(raw)), float(np.max(raw))

    def _close(self) -> None:
        avg_raw, max_raw = self._raw_stats()
        sums = self._sums
        hiccup = Hiccup(
            start_timestamp=self._start,
            end_timestamp=self._end,
            avg_raw_response_time=avg_raw,
            max_raw_response_time=max_raw,
            avg_processed_value=sums.processed_sum / sums.count,
            max_processed_value=sums.processed_max,
            baseline_mean=self.baseline.mean,
            baseline_std_dev=self.baseline.std_dev,
            threshold_at_detection=self.baseline.threshold,
        )
        self.hiccups.append(hiccup)
        self.state = SegmenterState.outside
        log.debug("hiccup closed [%d, %d]", hiccup.start_timestamp, hiccup.end_timestamp)
