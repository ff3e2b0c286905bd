"""Raw risk signals and the scoring rules shared by every data source."""
from __future__ import annotations

from dataclasses import dataclass

WEATHER_SNOW_POINTS = 30
WEATHER_ICING_POINTS = 25
WEATHER_SEVERE_POINTS = 20
TRAFFIC_RUSH_HOUR_POINTS = 25
TRAFFIC_ACCIDENT_POINTS = 20
TRAFFIC_DENSITY_POINTS = 15
EVENT_ACTIVE_POINTS = 15
EVENT_HIGH_IMPACT_POINTS = 20

RUSH_HOUR_WINDOWS: tuple[tuple[int, int], ...] = ((7, 9), (17, 19))


@dataclass(frozen=True)
class SignalThresholds:
    """Counts a signal must exceed before it contributes points.

    Historical and live-search sources use different values on purpose; the
    live text counts are noisier and smaller.
    """

    accident_count: int
    high_density_count: int
    active_event_count: int


HISTORICAL_THRESHOLDS = SignalThresholds(accident_count=10, high_density_count=5, active_event_count=3)
LIVE_SEARCH_THRESHOLDS = SignalThresholds(accident_count=5, high_density_count=3, active_event_count=2)


@dataclass(frozen=True)
class WeatherSignals:
    has_snow: bool
    has_icing_risk: bool
    is_severe_weather: bool
    description: str


@dataclass(frozen=True)
class TrafficSignals:
    accident_count: int
    high_density_count: int


@dataclass(frozen=True)
class EventSignals:
    active_event_count: int
    high_impact_event_count: int
    event_types_description: str


def is_rush_hour(hour: int) -> bool:
    return any(start <= hour <= end for start, end in RUSH_HOUR_WINDOWS)


def score_weather(has_snow: bool, has_icing_risk: bool, is_severe_weather: bool) -> int:
    return (
        WEATHER_SNOW_POINTS * has_snow
        + WEATHER_ICING_POINTS * has_icing_risk
        + WEATHER_SEVERE_POINTS * is_severe_weather
    )


def score_traffic(
    rush_hour: bool, accident_count: int, high_density_count: int, thresholds: SignalThresholds
) -> int:
    score = TRAFFIC_RUSH_HOUR_POINTS if rush_hour else 0
    if accident_count > thresholds.accident_count:
        score += TRAFFIC_ACCIDENT_POINTS
    if high_density_count > thresholds.high_density_count:
        score += TRAFFIC_DENSITY_POINTS
    return score


def score_event(active_event_count: int, high_impact_event_count: int, thresholds: SignalThresholds) -> int:
    score = EVENT_ACTIVE_POINTS if active_event_count > thresholds.active_event_count else 0
    if high_impact_event_count > 0:
        score += EVENT_HIGH_IMPACT_POINTS
    return score


__all__ = [
    "EventSignals",
    "HISTORICAL_THRESHOLDS",
    "LIVE_SEARCH_THRESHOLDS",
    "SignalThresholds",
    "TrafficSignals",
    "WeatherSignals",
    "is_rush_hour",
    "score_event",
    "score_traffic",
    "score_weather",
]
