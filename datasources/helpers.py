"""
Conversions from measurement records to the engine's input types.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from datasources.base import (
    DB_STATISTICS,
    LOCK_TIME,
    NUM_LOCK_WAITS,
    NUM_QUERIES,
    NUM_USERS,
    OPERATION,
    PROCESS_ID,
    RESPONSE_TIME,
    RESPONSE_TIME_VALUE,
    TIMESTAMP,
)
from datasources.dataset import Dataset, Selection
from datasources.exceptions import InvalidQuery
from engine.correlation import DBSample, LockSample, RequestEvent
from engine.series import RangeQuery, Series


def _field(record, key):
    try:
        return record[key]
    except KeyError as e:
        raise InvalidQuery(f"record has no field {key!r}") from e


def to_series(dataset: Dataset) -> Series:
    return Series.from_pairs(
        (int(_field(r, TIMESTAMP)), float(_field(r, RESPONSE_TIME_VALUE)))
        for r in dataset.kind(RESPONSE_TIME)
    )


def to_request_events(dataset: Dataset) -> List[RequestEvent]:
    events = []
    for r in dataset.kind(RESPONSE_TIME):
        start = int(_field(r, TIMESTAMP))
        events.append(RequestEvent(start, start + int(_field(r, RESPONSE_TIME_VALUE)), str(_field(r, OPERATION))))
    events.sort(key=lambda e: e.start)
    return events


def to_db_samples(dataset: Dataset) -> Dict[str, List[DBSample]]:
    """DB samples grouped by process id, each group sorted by timestamp."""
    grouped: Dict[str, List[DBSample]] = {}
    for r in dataset.kind(DB_STATISTICS):
        sample = DBSample(int(_field(r, TIMESTAMP)), int(_field(r, NUM_QUERIES)))
        grouped.setdefault(str(_field(r, PROCESS_ID)), []).append(sample)
    for samples in grouped.values():
        samples.sort(key=lambda s: s.timestamp)
    return grouped


def to_lock_samples(dataset: Dataset) -> Dict[str, List[LockSample]]:
    grouped: Dict[str, List[LockSample]] = {}
    for r in dataset.kind(DB_STATISTICS):
        sample = LockSample(
            num_users=int(_field(r, NUM_USERS)),
            lock_waits=float(_field(r, NUM_LOCK_WAITS)),
            lock_time=float(_field(r, LOCK_TIME)),
        )
        grouped.setdefault(str(_field(r, PROCESS_ID)), []).append(sample)
    return grouped


def range_query(dataset: Dataset) -> RangeQuery:
    """Closed-interval response time lookup backed by a dataset."""
    rt = dataset.kind(RESPONSE_TIME)

    def query(start: int, end: int) -> Sequence[float]:
        hits = Selection().between(TIMESTAMP, start, end).apply_to(rt)
        return hits.values(RESPONSE_TIME_VALUE, float)

    return query
