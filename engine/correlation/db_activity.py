"""
Sweep-line attribution of database operations to application requests.

Request events and cumulative DB query counter samples are both sorted by
time. A single cursor walks the DB samples forward. For each inner request
(the first and last request are never attributed) the last sample before the
request start and the first sample at or after the request end bracket the
request, and the counter delta between them is credited to the request's
operation. A request is skipped whenever its bracket could contain work of a
neighbouring request.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from api.responses import DBOverheadReport, PerOperationDBStat
from config import settings

log = logging.getLogger(__name__)

_SEPARATOR = "*" * 54


@dataclass(frozen=True)
class RequestEvent:
    start: int
    end: int
    operation: str


@dataclass(frozen=True)
class DBSample:
    timestamp: int
    query_count: int


def attribute_db_operations(
    requests: Sequence[RequestEvent],
    db_samples: Sequence[DBSample],
    into: Optional[Dict[str, List[int]]] = None,
) -> Dict[str, List[int]]:
    """Attributed query counts per operation, in request order."""
    counts: Dict[str, List[int]] = into if into is not None else defaultdict(list)
    ix = 0
    n_db = len(db_samples)

    for i in range(1, len(requests) - 1):
        prev_end = requests[i - 1].end
        current = requests[i]
        following_start = requests[i + 1].start

        while ix < n_db and db_samples[ix].timestamp < current.start:
            ix += 1
        if ix == 0:
            continue
        ix -= 1
        before = db_samples[ix]
        if prev_end >= before.timestamp:
            continue

        while ix < n_db and db_samples[ix].timestamp < current.end:
            ix += 1
        if ix >= n_db:
            break
        after = db_samples[ix]
        if following_start <= after.timestamp:
            continue

        delta = after.query_count - before.query_count
        if delta > 0:
            counts.setdefault(current.operation, []).append(delta)

    return dict(counts)


def operation_stats(operation: str, counts: Sequence[int]) -> PerOperationDBStat:
    arr = np.asarray(counts, dtype=float)
    mean = float(np.mean(arr))
    lo = int(min(counts))
    hi = int(max(counts))
    detected = (
        mean >= settings.db_overhead_mean_queries_threshold
        or (hi - lo) >= settings.db_overhead_range_threshold
    )
    return PerOperationDBStat(
        operation_name=operation,
        mean_queries_per_transaction=mean,
        min_queries=lo,
        max_queries=hi,
        sample_count=len(counts),
        detected=detected,
    )


def analyze_db_overhead(
    requests: Iterable[RequestEvent],
    db_samples_by_process: Mapping[str, Sequence[DBSample]],
    excluded_operations: Optional[Iterable[str]] = None,
) -> DBOverheadReport:
    if excluded_operations is None:
        excluded_operations = settings.db_excluded_operations
    excluded = set(excluded_operations)

    selected = sorted(
        (r for r in requests if r.operation not in excluded),
        key=lambda r: r.start,
    )

    counts: Dict[str, List[int]] = {}
    for process_id, samples in db_samples_by_process.items():
        ordered = sorted(samples, key=lambda s: s.timestamp)
        attribute_db_operations(selected, ordered, into=counts)
        log.debug("attributed DB samples of process %s", process_id)

    stats = [operation_stats(op, vals) for op, vals in sorted(counts.items())]
    messages: List[str] = []
    for stat in stats:
        messages.extend([
            _SEPARATOR,
            f"Transaction: {stat.operation_name}",
            f"Queries per Transaction: {stat.mean_queries_per_transaction}",
            f"Range of Number of Queries: {stat.min_queries} to {stat.max_queries}",
        ])

    return DBOverheadReport(
        detected=any(s.detected for s in stats),
        stats=stats,
        messages=messages,
    )
