"""Unit tests for YAML configuration loading."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from src.core.errors import ConfigurationError
from src.utils.config import RiskSettings, load_config


def test_load_config_reads_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "risk:\n  borough: Brooklyn\n  historical_window:\n    start: 2024-01-01\n    end: 2024-01-31\n",
        encoding="utf-8",
    )
    config = load_config(path)
    settings = RiskSettings.from_config(config)

    assert settings.borough == "Brooklyn"
    assert settings.historical_start == date(2024, 1, 1)
    assert settings.historical_end == date(2024, 1, 31)
    assert settings.affected_area == "Manhattan, New York City"


def test_load_config_treats_empty_file_as_empty_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_load_config_rejects_missing_file_and_non_mapping(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")

    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_risk_settings_window_checks():
    settings = RiskSettings()
    assert settings.covers(datetime(2024, 2, 1, 0, 0))
    assert settings.covers(datetime(2024, 2, 29, 23, 59))
    assert not settings.covers(datetime(2024, 3, 1, 8, 0))

    with pytest.raises(ConfigurationError):
        RiskSettings(historical_start=date(2024, 3, 1), historical_end=date(2024, 2, 1))


def test_risk_settings_rejects_invalid_dates():
    with pytest.raises(ConfigurationError):
        RiskSettings.from_config({"risk": {"historical_window": {"start": "not-a-date"}}})
