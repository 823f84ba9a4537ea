"""
Tests for the semicolon-delimited CSV exports.
"""

from api.responses import LockStatistics, LockStatisticsRow
from config import settings
from datasources.base import RESPONSE_TIME
from datasources.dataset import Dataset
from engine import analyzer
from services.export_service import export_analysis, export_lock_statistics


def _spike_dataset():
    values = [100.0] * 100
    for i in range(50, 55):
        values[i] = 1000.0
    return Dataset(
        {"kind": RESPONSE_TIME, "timestamp": i * 1000, "responseTime": v, "operation": "checkout"}
        for i, v in enumerate(values)
    )


def test_export_analysis_writes_operation_files(tmp_path):
    analysis = analyzer.run(_spike_dataset())
    written = export_analysis(analysis, tmp_path)

    names = {p.name for p in written}
    assert names == {
        "thresholds_0.csv",
        "hiccups_0.csv",
        "noiseReduced-0.csv",
        "ResponseTimeSeries-0.csv",
        "detection-0.csv",
        "operation.info",
    }

    hiccups = (tmp_path / "hiccups_0.csv").read_text().splitlines()
    assert hiccups[0] == '"starttime";"endtime";"maxHeight";"avgHeight";"maxPreproccedHeight";"avgPreproccedHeight"'
    assert hiccups[1].startswith('"45000";"59000";"1000.0";')
    assert len(hiccups) == 2

    thresholds = (tmp_path / "thresholds_0.csv").read_text().splitlines()
    assert thresholds == ["mean;threshold", "100.0;150.0"]

    series = (tmp_path / "ResponseTimeSeries-0.csv").read_text().splitlines()
    assert series[0] == "timestamp;responsetime"
    assert series[1] == "0;100.0"
    assert len(series) == 101

    assert (tmp_path / "operation.info").read_text() == "0 - checkout\n"


def test_export_defaults_to_configured_directory(tmp_path, monkeypatch):
    target = tmp_path / "results"
    monkeypatch.setattr(settings, "export_dir", str(target))
    export_analysis(analyzer.run(_spike_dataset()))
    assert (target / "operation.info").exists()


def test_export_lock_statistics(tmp_path):
    stats = LockStatistics(
        process_id="p1",
        rows=[
            LockStatisticsRow(num_users=5, lock_waits=1.0, lock_time=float("nan")),
            LockStatisticsRow(num_users=10, lock_waits=3.0, lock_time=100.0),
        ],
    )
    waits, times = export_lock_statistics(stats, tmp_path)
    assert waits.name == "LockWaits-p1.csv"
    assert waits.read_text().splitlines() == ["NumUsers;LockWaits", "5;1.0", "10;3.0"]
    assert times.read_text().splitlines() == ["NumUsers;LockTime", "5;nan", "10;100.0"]
