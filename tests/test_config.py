"""
Tests for detection configuration loading and strategy key resolution.
"""

import pytest

from config import DetectionConfig, settings, strategy_key
from engine.enums import Strategy
from engine.exceptions import ConfigurationError, UnknownStrategy


def test_defaults():
    cfg = DetectionConfig.from_properties({})
    assert cfg.outlier_deviation_factor == 3.0
    assert cfg.min_deviation_from_mean_factor == 0.1
    assert cfg.inter_hiccup_threshold_ms == 5000
    assert cfg.moving_average_window_size == 11
    assert cfg.num_top_response_times == 5
    assert cfg.weight_calculation_window_size == 31
    assert cfg.center_of_gravity_window_size == 101
    assert cfg.noise_threshold == 0.5
    assert cfg.noise_percentile == -1.0


def test_property_keys():
    cfg = DetectionConfig.from_properties({
        "outlierFactor": " 2.5 ",
        "interHiccupTime": "1000",
        "mvaWindowSize": "7.0",
        "numTopRT": 3,
        "centerOfGravity.weightCalculationWindow": "5",
        "centerOfGravity.centerOfGravityWindow": "9",
        "test.threshold": "-1",
        "test.percentile": "0.9",
        "minDeviationFromMeanFactor": "",
    })
    assert cfg.outlier_deviation_factor == 2.5
    assert cfg.inter_hiccup_threshold_ms == 1000
    assert cfg.moving_average_window_size == 7
    assert cfg.num_top_response_times == 3
    assert cfg.weight_calculation_window_size == 5
    assert cfg.center_of_gravity_window_size == 9
    assert cfg.noise_threshold == -1.0
    assert cfg.noise_percentile == 0.9
    assert cfg.min_deviation_from_mean_factor == 0.1


def test_unparseable_value_names_the_key():
    with pytest.raises(ConfigurationError, match="mvaWindowSize"):
        DetectionConfig.from_properties({"mvaWindowSize": "wide"})


def test_window_must_be_positive():
    with pytest.raises(ConfigurationError):
        DetectionConfig.from_properties({"numTopRT": "0"})


def test_even_window_is_accepted():
    assert DetectionConfig.from_properties({"mvaWindowSize": "10"}).moving_average_window_size == 10


def test_config_is_frozen():
    cfg = DetectionConfig()
    with pytest.raises(Exception):
        cfg.moving_average_window_size = 3


def test_strategy_key_defaults(monkeypatch):
    assert strategy_key(None) == "MVAStrategy"
    assert strategy_key({"hiccupStrategy": " NoiseReduction "}) == "NoiseReduction"
    monkeypatch.setattr(settings, "default_strategy", "BucketOutlierStrategy")
    assert strategy_key({"hiccupStrategy": ""}) == "BucketOutlierStrategy"


def test_strategy_from_key():
    assert Strategy.from_key("NoiseAndOutlier") is Strategy.noise_and_outlier
    assert Strategy.from_key("center_of_gravity") is Strategy.center_of_gravity
    assert Strategy.from_key("MovingCenterOfGravityStrategy") is Strategy.center_of_gravity
    assert Strategy.from_key(None) is Strategy.moving_average
    assert Strategy.from_key("Bogus") is Strategy.moving_average
    with pytest.raises(UnknownStrategy):
        Strategy.from_key("Bogus", strict=True)


def test_excluded_operations_default_is_not_shared():
    from config import DEFAULT_EXCLUDED_OPERATIONS, Settings

    first, second = Settings(), Settings()
    first.db_excluded_operations.append("checkout")
    assert "checkout" not in second.db_excluded_operations
    assert "checkout" not in DEFAULT_EXCLUDED_OPERATIONS
