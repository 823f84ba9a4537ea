"""
Response models for API endpoints and internal data structures.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, model_serializer


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, tuple):
        return tuple(_coerce(v) for v in obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class Hiccup(NpModel):

    start_timestamp: int
    end_timestamp: int
    avg_raw_response_time: float
    max_raw_response_time: float
    avg_processed_value: float
    max_processed_value: float
    baseline_mean: float
    baseline_std_dev: float
    threshold_at_detection: float

    model_config = {"frozen": True}

    @property
    def duration_ms(self) -> int:
        return self.end_timestamp - self.start_timestamp


class BaselineModel(NpModel):

    mean: float
    std_dev: float
    threshold: float
    sample_count: int = 0


class DetectionResponse(NpModel):

    strategy: str
    baseline: BaselineModel
    hiccups: List[Hiccup]
    detection_series: List[Tuple[int, float]] = Field(default_factory=list)
    preprocessed_series: List[Tuple[int, float]] = Field(default_factory=list)


class HiccupSummary(NpModel):

    operation: str
    hiccup_count: int
    avg_peak_height: float
    frequency_per_second: Optional[float] = None
    baseline_mean: float
    baseline_std_dev: float
    threshold: float


class OperationReport(NpModel):

    index: int
    operation: str
    strategy: str
    baseline: Optional[BaselineModel] = None
    hiccups: List[Hiccup] = Field(default_factory=list)
    summary: Optional[HiccupSummary] = None
    error: Optional[str] = None


class HiccupAnalysisReport(NpModel):

    detected: bool
    operations: List[OperationReport] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)


class PerOperationDBStat(NpModel):

    operation_name: str
    mean_queries_per_transaction: float
    min_queries: int
    max_queries: int
    sample_count: int = 0
    detected: bool = False

    @property
    def query_range(self) -> int:
        return self.max_queries - self.min_queries


class ThroughputComparison(NpModel):

    client_throughput: float
    db_throughput: float
    ratio: float
    detected: bool


class DBOverheadReport(NpModel):

    detected: bool
    stats: List[PerOperationDBStat] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    # keyed by DB process id
    throughput: Dict[str, ThroughputComparison] = Field(default_factory=dict)


class LockStatisticsRow(NpModel):

    num_users: int
    lock_waits: float
    lock_time: float


class LockStatistics(NpModel):

    process_id: str
    rows: List[LockStatisticsRow] = Field(default_factory=list)
