"""
DB versus client throughput comparison.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from api.responses import ThroughputComparison
from config import settings
from engine.correlation.db_activity import DBSample, RequestEvent

log = logging.getLogger(__name__)


def _per_second(amount: float, span_ms: int) -> float:
    if span_ms <= 0:
        return float("nan")
    return amount * 1000.0 / span_ms


def compare_throughput(
    requests: Sequence[RequestEvent],
    db_samples: Sequence[DBSample],
    ratio_threshold: Optional[float] = None,
) -> ThroughputComparison:
    if ratio_threshold is None:
        ratio_threshold = settings.db_throughput_ratio_threshold

    if not requests:
        nan = float("nan")
        return ThroughputComparison(client_throughput=nan, db_throughput=nan, ratio=nan, detected=False)

    first = min(r.start for r in requests)
    last = max(r.end for r in requests)
    client = _per_second(len(requests), last - first)

    inside = sorted((s for s in db_samples if first <= s.timestamp <= last), key=lambda s: s.timestamp)
    if len(inside) >= 2:
        db = _per_second(inside[-1].query_count - inside[0].query_count, inside[-1].timestamp - inside[0].timestamp)
    else:
        db = float("nan")

    ratio = db / client if client > 0 else float("nan")
    # NaN compares False, so missing data never yields a finding
    detected = bool(db >= ratio_threshold * client)
    log.debug("throughput client=%.3f/s db=%.3f/s ratio=%.3f", client, db, ratio)
    return ThroughputComparison(client_throughput=client, db_throughput=db, ratio=ratio, detected=detected)
