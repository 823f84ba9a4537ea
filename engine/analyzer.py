from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Union

import numpy as np

from api.responses import (
    BaselineModel,
    HiccupAnalysisReport,
    HiccupSummary,
    OperationReport,
)
from config import DetectionConfig
from datasources.base import OPERATION, RESPONSE_TIME
from datasources.dataset import Dataset, Selection
from datasources.helpers import range_query, to_series
from engine.enums import Strategy
from engine.exceptions import HiccupDetectionError
from engine.hiccups import DetectionResult, detect

log = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Warning: No data available for conducting response time hiccup analysis!"


@dataclasses.dataclass
class OperationHiccupReport:
    index: int
    operation: str
    strategy: Strategy
    result: Optional[DetectionResult] = None
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.result is None


@dataclasses.dataclass
class HiccupAnalysis:
    detected: bool = False
    operations: List[OperationHiccupReport] = dataclasses.field(default_factory=list)
    messages: List[str] = dataclasses.field(default_factory=list)

    def to_report(self) -> HiccupAnalysisReport:
        return HiccupAnalysisReport(
            detected=self.detected,
            operations=[_operation_report(op) for op in self.operations],
            messages=list(self.messages),
        )


def summarize(operation: str, result: DetectionResult) -> Optional[HiccupSummary]:
    hiccups = result.hiccups
    if not hiccups:
        return None
    peaks = np.asarray([h.max_raw_response_time for h in hiccups], dtype=float)
    frequency = None
    if len(hiccups) > 1:
        span = max(h.end_timestamp for h in hiccups) - min(h.start_timestamp for h in hiccups)
        if span > 0:
            frequency = 1000.0 * (len(hiccups) - 1) / span
    return HiccupSummary(
        operation=operation,
        hiccup_count=len(hiccups),
        avg_peak_height=float(np.mean(peaks)),
        frequency_per_second=frequency,
        baseline_mean=hiccups[0].baseline_mean,
        baseline_std_dev=hiccups[0].baseline_std_dev,
        threshold=hiccups[0].threshold_at_detection,
    )


def summary_messages(summary: HiccupSummary) -> List[str]:
    messages = [
        f"{summary.hiccup_count} response time hiccups have been detected!",
        f"Operation: {summary.operation}",
        f"Average peak height: {summary.avg_peak_height} [ms]",
    ]
    if summary.frequency_per_second is not None:
        messages.append(f"Average hiccup frequence: {summary.frequency_per_second} [1/s]")
    messages.extend([
        f"Average response time (excluding outliers): {summary.baseline_mean} [ms]",
        f"Standard deviation of response times (excluding outliers): {summary.baseline_std_dev} [ms]",
        f"Hiccup detection threshold: {summary.threshold} [ms]",
    ])
    return messages


def _operation_report(op: OperationHiccupReport) -> OperationReport:
    if op.result is None:
        return OperationReport(index=op.index, operation=op.operation, strategy=op.strategy.value, error=op.error)
    b = op.result.baseline
    return OperationReport(
        index=op.index,
        operation=op.operation,
        strategy=op.strategy.value,
        baseline=BaselineModel(mean=b.mean, std_dev=b.std_dev, threshold=b.threshold, sample_count=b.sample_count),
        hiccups=op.result.hiccups,
        summary=summarize(op.operation, op.result),
    )


def run(
    dataset: Dataset,
    config: Optional[DetectionConfig] = None,
    strategy: Union[Strategy, str, None] = None,
) -> HiccupAnalysis:
    """Detect hiccups separately for every operation of a response time dataset.

    Operations are visited in sorted order and numbered from 0. A detection
    failure for one operation is logged and recorded, and the remaining
    operations are still analysed; the failed operation keeps its number.
    """
    if config is None:
        config = DetectionConfig()
    if not isinstance(strategy, Strategy):
        strategy = Strategy.from_key(strategy)

    analysis = HiccupAnalysis()
    rt = dataset.kind(RESPONSE_TIME)
    if len(rt) == 0:
        log.warning("no response time records to analyse")
        analysis.messages.append(NO_DATA_MESSAGE)
        return analysis

    for index, operation in enumerate(sorted(rt.value_set(OPERATION), key=str)):
        selected = Selection().select(OPERATION, operation).apply_to(rt)
        report = OperationHiccupReport(index=index, operation=str(operation), strategy=strategy)
        try:
            report.result = detect(
                to_series(selected),
                config,
                strategy,
                range_query=range_query(selected),
            )
        except HiccupDetectionError as e:
            log.warning("skipping operation %s: %s", operation, e)
            report.error = str(e)
            analysis.operations.append(report)
            continue

        analysis.operations.append(report)
        summary = summarize(report.operation, report.result)
        if summary is not None:
            analysis.detected = True
            analysis.messages.extend(summary_messages(summary))

    return analysis
