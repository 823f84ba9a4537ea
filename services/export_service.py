"""
Semicolon-delimited CSV exports of hiccup analyses and lock statistics.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from api.responses import Hiccup, LockStatistics
from config import settings
from engine.analyzer import HiccupAnalysis
from engine.hiccups import DetectionResult
from engine.series import Series

log = logging.getLogger(__name__)

HICCUP_HEADER = ["starttime", "endtime", "maxHeight", "avgHeight", "maxPreproccedHeight", "avgPreproccedHeight"]
SERIES_HEADER = ["timestamp", "responsetime"]

PathLike = Union[str, Path]


def _target(directory: Optional[PathLike]) -> Path:
    path = Path(directory or settings.export_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _write(path: Path, header: Sequence[str], rows: Iterable[Sequence], quoting: int = csv.QUOTE_MINIMAL) -> Path:
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, delimiter=";", quoting=quoting, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
    return path


def export_series(series: Series, path: Path) -> Path:
    return _write(path, SERIES_HEADER, series.pairs())


def export_hiccups(hiccups: List[Hiccup], path: Path) -> Path:
    rows = (
        [
            h.start_timestamp,
            h.end_timestamp,
            h.max_raw_response_time,
            h.avg_raw_response_time,
            h.max_processed_value,
            h.avg_processed_value,
        ]
        for h in hiccups
    )
    return _write(path, HICCUP_HEADER, rows, quoting=csv.QUOTE_ALL)


def export_result(index: int, result: DetectionResult, directory: Optional[PathLike] = None) -> List[Path]:
    out = _target(directory)
    b = result.baseline
    return [
        _write(out / f"thresholds_{index}.csv", ["mean", "threshold"], [[b.mean, b.threshold]]),
        export_hiccups(result.hiccups, out / f"hiccups_{index}.csv"),
        export_series(result.preprocessed_series, out / f"noiseReduced-{index}.csv"),
        export_series(result.raw_series, out / f"ResponseTimeSeries-{index}.csv"),
        export_series(result.detection_series, out / f"detection-{index}.csv"),
    ]


def export_analysis(analysis: HiccupAnalysis, directory: Optional[PathLike] = None) -> List[Path]:
    """Write every successfully analysed operation and an ``operation.info`` index."""
    out = _target(directory)
    written: List[Path] = []
    info: List[Tuple[int, str]] = []
    for op in analysis.operations:
        if op.result is None:
            continue
        written.extend(export_result(op.index, op.result, out))
        info.append((op.index, op.operation))

    info_path = out / "operation.info"
    info_path.write_text("".join(f"{i} - {name}\n" for i, name in info), encoding="utf-8")
    written.append(info_path)
    log.info("exported %d file(s) to %s", len(written), out)
    return written


def export_lock_statistics(stats: LockStatistics, directory: Optional[PathLike] = None) -> List[Path]:
    out = _target(directory)
    waits = _write(
        out / f"LockWaits-{stats.process_id}.csv",
        ["NumUsers", "LockWaits"],
        ([r.num_users, r.lock_waits] for r in stats.rows),
    )
    times = _write(
        out / f"LockTimes-{stats.process_id}.csv",
        ["NumUsers", "LockTime"],
        ([r.num_users, r.lock_time] for r in stats.rows),
    )
    return [waits, times]
