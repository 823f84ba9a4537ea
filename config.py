"""
Constants and configuration for the response time hiccup analysis engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
import os
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from engine.exceptions import ConfigurationError

log = logging.getLogger(__name__)


RTHICCUPS_LOG_LEVEL: str = os.getenv("RTHICCUPS_LOG_LEVEL", "INFO").upper()
RTHICCUPS_EXPORT_DIR: str = os.getenv("RTHICCUPS_EXPORT_DIR", "./results")

# flat property keys understood by DetectionConfig.from_properties
STRATEGY_KEY = "hiccupStrategy"
OUTLIER_DEVIATION_FACTOR_KEY = "outlierFactor"
MIN_DEVIATION_FROM_MEAN_FACTOR_KEY = "minDeviationFromMeanFactor"
INTER_HICCUP_TIME_KEY = "interHiccupTime"
MOVING_AVERAGE_WINDOW_SIZE_KEY = "mvaWindowSize"
NUM_TOP_RESPONSE_TIMES_KEY = "numTopRT"
WEIGHT_CALCULATION_WINDOW_KEY = "centerOfGravity.weightCalculationWindow"
CENTER_OF_GRAVITY_WINDOW_KEY = "centerOfGravity.centerOfGravityWindow"
NOISE_THRESHOLD_KEY = "test.threshold"
NOISE_PERCENTILE_KEY = "test.percentile"

# load driver bookkeeping transactions that never touch the database
DEFAULT_EXCLUDED_OPERATIONS: List[str] = [
    "Action_Transaction",
    "vuser_init_Transaction",
    "vuser_end_Transaction",
]


class Settings(BaseSettings):
    log_level: str = RTHICCUPS_LOG_LEVEL
    export_dir: str = RTHICCUPS_EXPORT_DIR
    host: str = "0.0.0.0"
    port: int = 4322

    # strategy used when a run does not name one
    default_strategy: str = "MVAStrategy"

    # detection defaults (see DetectionConfig)
    outlier_deviation_factor: float = 3.0
    min_deviation_from_mean_factor: float = 0.1
    inter_hiccup_threshold_ms: int = 5000
    moving_average_window_size: int = 11
    num_top_response_times: int = 5
    weight_calculation_window_size: int = 31
    center_of_gravity_window_size: int = 101
    noise_threshold: float = 0.5
    noise_percentile: float = -1.0
    noise_window_size: int = 31

    # threshold calculation
    threshold_additive_floor: float = 50.0
    # the centre of gravity strategy ignores outlier_deviation_factor
    center_of_gravity_deviation_factor: float = 2.0
    # raise instead of propagating NaN thresholds for tiny baselines
    strict_baseline: bool = False

    # DB overhead heuristics
    db_overhead_mean_queries_threshold: float = 3.0
    db_overhead_range_threshold: int = 3
    db_throughput_ratio_threshold: float = 3.0
    db_excluded_operations: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_OPERATIONS))

    model_config = {
        "env_prefix": "RTHICCUPS_",
        "extra": "ignore",
    }


settings = Settings()


def _parse(key: str, raw: Any, cast: Callable[[str], Any]) -> Any:
    try:
        return cast(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"invalid value for {key!r}: {raw!r}") from exc


def _as_int(text: str) -> int:
    # tolerate "11.0" style values produced by generic property editors
    return int(float(text)) if "." in text else int(text)


class DetectionConfig(BaseModel):
    """Immutable per-run hiccup detection parameters."""

    outlier_deviation_factor: float = settings.outlier_deviation_factor
    min_deviation_from_mean_factor: float = settings.min_deviation_from_mean_factor
    inter_hiccup_threshold_ms: int = settings.inter_hiccup_threshold_ms
    moving_average_window_size: int = settings.moving_average_window_size
    num_top_response_times: int = settings.num_top_response_times
    weight_calculation_window_size: int = settings.weight_calculation_window_size
    center_of_gravity_window_size: int = settings.center_of_gravity_window_size
    noise_threshold: float = settings.noise_threshold
    noise_percentile: float = settings.noise_percentile
    noise_window_size: int = settings.noise_window_size

    model_config = {"frozen": True}

    @field_validator(
        "moving_average_window_size",
        "num_top_response_times",
        "weight_calculation_window_size",
        "center_of_gravity_window_size",
        "noise_window_size",
    )
    @classmethod
    def positive_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("window sizes must be >= 1")
        return v

    @field_validator("moving_average_window_size")
    @classmethod
    def odd_window(cls, v: int) -> int:
        if v % 2 == 0:
            log.warning("moving average window size %d is even; window is %d wide", v, v + 1)
        return v

    @classmethod
    def from_properties(cls, props: Optional[Mapping[str, Any]]) -> "DetectionConfig":
        """Build a config from a flat string-keyed property lookup.

        Missing or blank keys fall back to their defaults.
        """
        props = props or {}
        fields = {
            "outlier_deviation_factor": (OUTLIER_DEVIATION_FACTOR_KEY, float),
            "min_deviation_from_mean_factor": (MIN_DEVIATION_FROM_MEAN_FACTOR_KEY, float),
            "inter_hiccup_threshold_ms": (INTER_HICCUP_TIME_KEY, _as_int),
            "moving_average_window_size": (MOVING_AVERAGE_WINDOW_SIZE_KEY, _as_int),
            "num_top_response_times": (NUM_TOP_RESPONSE_TIMES_KEY, _as_int),
            "weight_calculation_window_size": (WEIGHT_CALCULATION_WINDOW_KEY, _as_int),
            "center_of_gravity_window_size": (CENTER_OF_GRAVITY_WINDOW_KEY, _as_int),
            "noise_threshold": (NOISE_THRESHOLD_KEY, float),
            "noise_percentile": (NOISE_PERCENTILE_KEY, float),
        }
        values = {}
        for name, (key, cast) in fields.items():
            raw = props.get(key)
            if raw is None or str(raw).strip() == "":
                continue
            values[name] = _parse(key, raw, cast)
        try:
            return cls(**values)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


def strategy_key(props: Optional[Mapping[str, Any]]) -> str:
    raw = (props or {}).get(STRATEGY_KEY)
    text = str(raw or "").strip()
    return text or settings.default_strategy
