"""
Per user-count lock statistics for one DB process.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np

from api.responses import LockStatistics, LockStatisticsRow

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LockSample:
    num_users: int
    lock_waits: float
    lock_time: float


def _lock_time(waits: np.ndarray, times: np.ndarray) -> float:
    span = float(np.max(waits) - np.min(waits))
    if span == 0.0:
        return float("nan")
    return float(np.max(times) - np.min(times)) / span


def lock_statistics(process_id: str, samples: Iterable[LockSample]) -> LockStatistics:
    """Group lock samples by user count, one row per distinct count in ascending order.

    ``lock_waits`` is the mean number of lock waits in the group. ``lock_time``
    is the growth of the cumulative lock time divided by the growth of the
    cumulative lock wait counter, i.e. the average time spent per lock wait,
    and is NaN when no lock wait happened within the group.
    """
    groups: Dict[int, List[LockSample]] = defaultdict(list)
    for s in samples:
        groups[int(s.num_users)].append(s)

    rows: List[LockStatisticsRow] = []
    for users in sorted(groups):
        group = groups[users]
        waits = np.asarray([s.lock_waits for s in group], dtype=float)
        times = np.asarray([s.lock_time for s in group], dtype=float)
        rows.append(
            LockStatisticsRow(
                num_users=users,
                lock_waits=float(np.mean(waits)),
                lock_time=_lock_time(waits, times),
            )
        )

    log.debug("lock statistics for process %s: %d user count(s)", process_id, len(rows))
    return LockStatistics(process_id=process_id, rows=rows)
