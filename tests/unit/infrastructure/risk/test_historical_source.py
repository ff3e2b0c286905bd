"""Tests for signal extraction from the historical store."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from unittest.mock import Mock

from src.core.entities import DataSource, PermittedEvent, StationRidership, WeatherRecord
from src.infrastructure.risk.historical import HistoricalSignalSource, accident_window

TARGET = datetime(2024, 2, 10, 8, 0)


def build_provider(**overrides) -> Mock:
    provider = Mock()
    provider.find_weather_by_date.return_value = None
    provider.find_accidents_in_range.return_value = []
    provider.count_accidents_by_street.return_value = []
    provider.find_high_density_stations.return_value = []
    provider.find_events_by_borough_and_range.return_value = []
    for name, value in overrides.items():
        getattr(provider, name).return_value = value
    return provider


def test_accident_window_spans_thirty_days_back_and_one_forward():
    assert accident_window(TARGET) == (date(2024, 1, 11), date(2024, 2, 11))


def test_weather_signals_from_record():
    record = WeatherRecord(date=TARGET.date(), snow=2.5, has_icing_risk=True, description="heavy snow")
    source = HistoricalSignalSource(build_provider(find_weather_by_date=record))

    signals = source.weather_signals(TARGET)

    assert source.kind is DataSource.HISTORICAL
    assert signals.has_snow and signals.has_icing_risk and not signals.is_severe_weather
    assert signals.description == "heavy snow"


def test_weather_signals_missing_record_and_zero_snow():
    assert HistoricalSignalSource(build_provider()).weather_signals(TARGET) is None

    dry = WeatherRecord(date=TARGET.date(), snow=0.0)
    signals = HistoricalSignalSource(build_provider(find_weather_by_date=dry)).weather_signals(TARGET)
    assert signals.has_snow is False


def test_traffic_signals_count_accidents_and_busy_stations():
    provider = build_provider(
        find_accidents_in_range=[{}] * 12,
        find_high_density_stations=[StationRidership("Times Sq-42 St", 900)] * 3,
    )
    signals = HistoricalSignalSource(provider).traffic_signals(TARGET)

    assert (signals.accident_count, signals.high_density_count) == (12, 3)
    provider.find_high_density_stations.assert_called_once_with(date(2024, 1, 11), date(2024, 2, 11), 500)


def test_event_signals_summarise_types_and_impact():
    events = [
        PermittedEvent("Lunar New Year Parade", "Parade", "High-Impact", "Manhattan"),
        PermittedEvent("Street fair", "Street Event", "low", "Manhattan"),
        PermittedEvent("Chinatown parade", "Parade", "高影响", "Manhattan"),
    ]
    provider = build_provider(find_events_by_borough_and_range=events)
    signals = HistoricalSignalSource(provider, borough="Manhattan").event_signals(TARGET)

    assert signals.active_event_count == 3
    assert signals.high_impact_event_count == 2
    assert signals.event_types_description == "Parade(2), Street Event(1)"
    provider.find_events_by_borough_and_range.assert_called_once_with(
        "Manhattan", TARGET.date() - timedelta(days=1), TARGET.date() + timedelta(days=1)
    )


def test_event_signals_without_events():
    signals = HistoricalSignalSource(build_provider()).event_signals(TARGET)
    assert signals.active_event_count == 0
    assert signals.event_types_description == "no active events"
