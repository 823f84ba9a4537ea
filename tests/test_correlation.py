"""
Tests for DB activity attribution, lock statistics and the throughput comparison.
"""

import math

import pytest

from config import settings
from engine.correlation import (
    DBSample,
    LockSample,
    RequestEvent,
    analyze_db_overhead,
    attribute_db_operations,
    compare_throughput,
    lock_statistics,
    operation_stats,
)

DB = [DBSample(5, 0), DBSample(15, 3), DBSample(25, 3), DBSample(35, 8), DBSample(45, 8)]


def _requests(*intervals, op="op"):
    return [RequestEvent(s, e, op) for s, e in intervals]


def test_middle_request_is_attributed():
    counts = attribute_db_operations(_requests((0, 10), (20, 30), (40, 50)), DB)
    assert counts == {"op": [5]}


def test_first_and_last_requests_are_never_attributed():
    assert attribute_db_operations(_requests((0, 10), (40, 50)), DB) == {}


def test_ambiguous_left_edge_is_skipped():
    # previous request ends after the before sample
    assert attribute_db_operations(_requests((0, 16), (20, 30), (40, 50)), DB) == {}


def test_ambiguous_right_edge_is_skipped():
    # next request starts before the after sample
    assert attribute_db_operations(_requests((0, 10), (20, 30), (34, 50)), DB) == {}


def test_request_without_preceding_sample_is_skipped():
    late = [DBSample(100, 0), DBSample(200, 5)]
    assert attribute_db_operations(_requests((0, 10), (20, 30), (40, 50)), late) == {}


def test_sweep_stops_past_last_sample():
    short = [DBSample(5, 0), DBSample(15, 3)]
    assert attribute_db_operations(_requests((0, 10), (20, 30), (40, 50)), short) == {}


def test_zero_deltas_are_not_recorded():
    flat = [DBSample(5, 3), DBSample(15, 3), DBSample(35, 3), DBSample(45, 3)]
    assert attribute_db_operations(_requests((0, 10), (20, 30), (40, 50)), flat) == {}


def test_operation_stats_detects_wide_range():
    stat = operation_stats("checkout", [1, 2, 2, 3, 10])
    assert stat.mean_queries_per_transaction == pytest.approx(3.6)
    assert stat.query_range == 9
    assert stat.detected


def test_operation_stats_quiet_operation():
    stat = operation_stats("home", [2, 2, 2])
    assert stat.mean_queries_per_transaction == 2.0
    assert not stat.detected


def test_operation_stats_thresholds_are_settings(monkeypatch):
    monkeypatch.setattr(settings, "db_overhead_mean_queries_threshold", 1.0)
    assert operation_stats("home", [2, 2, 2]).detected


def test_analyze_db_overhead_excludes_bookkeeping_operations():
    requests = [
        RequestEvent(0, 10, "login"),
        RequestEvent(20, 30, "Action_Transaction"),
        RequestEvent(40, 50, "search"),
        RequestEvent(60, 70, "login"),
    ]
    db = [DBSample(5, 0), DBSample(35, 2), DBSample(55, 9), DBSample(65, 9), DBSample(75, 10)]
    report = analyze_db_overhead(requests, {"p1": db})

    [stat] = report.stats
    assert stat.operation_name == "search"
    assert stat.min_queries == stat.max_queries == 7
    assert report.detected
    assert "Transaction: search" in report.messages


def test_analyze_db_overhead_runs_per_process():
    requests = _requests((0, 10), (20, 30), (40, 50))
    report = analyze_db_overhead(requests, {"a": DB, "b": DB}, excluded_operations=[])
    [stat] = report.stats
    assert stat.sample_count == 2
    assert stat.mean_queries_per_transaction == 5.0
    assert report.detected


def test_lock_statistics_groups_by_user_count():
    samples = [
        LockSample(10, 2, 100),
        LockSample(5, 1, 50),
        LockSample(10, 4, 300),
        LockSample(5, 1, 60),
    ]
    stats = lock_statistics("p1", samples)
    assert [r.num_users for r in stats.rows] == [5, 10]
    assert stats.rows[0].lock_waits == 1.0
    assert math.isnan(stats.rows[0].lock_time)
    assert stats.rows[1].lock_waits == 3.0
    assert stats.rows[1].lock_time == 100.0


def test_throughput_comparison():
    requests = [RequestEvent(i * 1000, i * 1000 + 500, "op") for i in range(10)]
    db = [DBSample(0, 0), DBSample(9000, 1000), DBSample(20000, 5000)]
    cmp = compare_throughput(requests, db)
    assert cmp.client_throughput == pytest.approx(10 * 1000 / 9500)
    assert cmp.db_throughput == pytest.approx(1000 * 1000 / 9000)
    assert cmp.detected


def test_throughput_without_db_samples_is_not_detected():
    cmp = compare_throughput([RequestEvent(0, 10, "op")], [])
    assert not cmp.detected
    assert math.isnan(cmp.db_throughput)


def test_skipped_requests_do_not_disturb_later_attribution():
    requests = [
        RequestEvent(0, 10, "a"),
        RequestEvent(20, 30, "b"),
        RequestEvent(34, 50, "c"),
        RequestEvent(60, 70, "d"),
        RequestEvent(80, 90, "e"),
    ]
    db = [DBSample(t, t) for t in range(5, 100, 10)]
    # "b" is ambiguous on its right edge, "c" on its left edge
    assert attribute_db_operations(requests, db) == {"d": [75 - 55]}
