"""
Tests for the in-memory dataset, selections and record conversions.
"""

import pytest

from datasources.base import DB_STATISTICS, RESPONSE_TIME
from datasources.dataset import Dataset, Selection
from datasources.exceptions import InvalidQuery
from datasources.helpers import range_query, to_db_samples, to_lock_samples, to_request_events, to_series
from engine.correlation import DBSample


def _rt(ts, rt, op):
    return {"kind": RESPONSE_TIME, "timestamp": ts, "responseTime": rt, "operation": op}


def _db(ts, queries, pid, users=10, waits=0, lock_time=0):
    return {
        "kind": DB_STATISTICS,
        "timestamp": ts,
        "numQueries": queries,
        "processId": pid,
        "numUsers": users,
        "numLockWaits": waits,
        "lockTime": lock_time,
    }


DATA = Dataset([
    _rt(30, 5, "b"),
    _rt(10, 7, "a"),
    _rt(20, 9, "a"),
    _db(15, 4, "p2"),
    _db(5, 1, "p1"),
    _db(25, 3, "p1"),
])


def test_selection_chain():
    hits = Selection().select("kind", RESPONSE_TIME).unequal("operation", "b").between("timestamp", 0, 15).apply_to(DATA)
    assert hits.values("timestamp") == [10]


def test_selection_ignores_records_without_field():
    assert len(Selection().select("operation", "a").apply_to(DATA)) == 2


def test_empty_range_is_invalid():
    with pytest.raises(InvalidQuery):
        Selection().between("timestamp", 5, 1)


def test_value_set_and_values():
    assert DATA.value_set("operation") == {"a", "b"}
    with pytest.raises(InvalidQuery):
        DATA.values("operation")


def test_to_series_sorts_response_times():
    assert to_series(DATA).pairs() == [(10, 7.0), (20, 9.0), (30, 5.0)]


def test_request_events_span_the_response_time():
    events = to_request_events(DATA)
    assert [(e.start, e.end, e.operation) for e in events] == [(10, 17, "a"), (20, 29, "a"), (30, 35, "b")]


def test_db_samples_grouped_by_process():
    grouped = to_db_samples(DATA)
    assert grouped["p1"] == [DBSample(5, 1), DBSample(25, 3)]
    assert grouped["p2"] == [DBSample(15, 4)]


def test_lock_samples():
    grouped = to_lock_samples(Dataset([_db(1, 1, "p", users=5, waits=2, lock_time=40)]))
    [sample] = grouped["p"]
    assert (sample.num_users, sample.lock_waits, sample.lock_time) == (5, 2.0, 40.0)


def test_missing_field_is_invalid_query():
    with pytest.raises(InvalidQuery):
        to_series(Dataset([{"kind": RESPONSE_TIME, "timestamp": 1}]))


def test_range_query_reads_response_times():
    query = range_query(DATA)
    assert sorted(query(10, 20)) == [7.0, 9.0]
