"""
Analyze service wiring request payloads to the hiccup and DB overhead engines.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

from typing import List

from api.requests import AnalyzeRequest, DBOverheadRequest, DetectRequest, LockRequest
from api.responses import (
    BaselineModel,
    DBOverheadReport,
    DetectionResponse,
    HiccupAnalysisReport,
    LockStatistics,
)
from config import DetectionConfig, settings, strategy_key
from datasources.base import DB_STATISTICS
from datasources.dataset import Dataset
from datasources.exceptions import EmptyDataset
from datasources.helpers import to_db_samples, to_lock_samples, to_request_events
from engine import analyzer
from engine.correlation import analyze_db_overhead, compare_throughput, lock_statistics
from engine.hiccups import detect
from engine.series import Series
from services.export_service import export_analysis, export_lock_statistics


def _config(props) -> DetectionConfig:
    return DetectionConfig.from_properties(props)


def run_detection(req: DetectRequest) -> DetectionResponse:
    series = Series.from_pairs(req.samples)
    result = detect(series, _config(req.properties), strategy_key(req.properties))
    b = result.baseline
    return DetectionResponse(
        strategy=result.strategy.value,
        baseline=BaselineModel(mean=b.mean, std_dev=b.std_dev, threshold=b.threshold, sample_count=b.sample_count),
        hiccups=result.hiccups,
        detection_series=result.detection_series.pairs(),
        preprocessed_series=result.preprocessed_series.pairs(),
    )


def run_analysis(req: AnalyzeRequest) -> HiccupAnalysisReport:
    analysis = analyzer.run(Dataset(req.records), _config(req.properties), strategy_key(req.properties))
    if req.export:
        export_analysis(analysis)
    return analysis.to_report()


def _db_dataset(records) -> Dataset:
    dataset = Dataset(records)
    if len(dataset.kind(DB_STATISTICS)) == 0:
        raise EmptyDataset("no DB statistics records in request")
    return dataset


def run_db_overhead(req: DBOverheadRequest) -> DBOverheadReport:
    dataset = _db_dataset(req.records)
    requests = to_request_events(dataset)
    db_samples = to_db_samples(dataset)
    report = analyze_db_overhead(requests, db_samples, excluded_operations=req.excluded_operations)

    excluded = set(settings.db_excluded_operations if req.excluded_operations is None else req.excluded_operations)
    selected = [r for r in requests if r.operation not in excluded]
    report.throughput = {pid: compare_throughput(selected, db_samples[pid]) for pid in sorted(db_samples)}
    return report


def run_lock_statistics(req: LockRequest) -> List[LockStatistics]:
    grouped = to_lock_samples(_db_dataset(req.records))
    out = [lock_statistics(pid, grouped[pid]) for pid in sorted(grouped)]
    if req.export:
        for stats in out:
            export_lock_statistics(stats)
    return out
