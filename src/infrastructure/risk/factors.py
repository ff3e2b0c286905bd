"""Score weather, traffic and event risk from any signal source."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from src.core.entities import DataSource, EventRisk, RiskAnalysis, TrafficRisk, WeatherRisk
from src.infrastructure.risk.signals import (
    TRAFFIC_RUSH_HOUR_POINTS,
    EventSignals,
    SignalThresholds,
    TrafficSignals,
    WeatherSignals,
    is_rush_hour,
    score_event,
    score_traffic,
    score_weather,
)
from src.utils.logger import logger

# Fallback scores keep "no data" and "provider failed" distinguishable.
MISSING_WEATHER: dict[DataSource, tuple[int, str]] = {
    DataSource.HISTORICAL: (0, "weather data unavailable"),
    DataSource.LIVE_SEARCH: (10, "latest weather data unavailable"),
}
FAILED_WEATHER_SCORE = 15
FAILED_WEATHER_DESCRIPTION = "weather data fetch failed"
FAILED_TRAFFIC_PATTERN = "traffic data fetch failed"
FAILED_TRAFFIC_OFF_PEAK_SCORE = 10
FAILED_EVENT_SCORE = 5
FAILED_EVENT_DESCRIPTION = "event data fetch failed"
NO_EVENTS_DESCRIPTION = "no active events"
DEFAULT_ANALYSIS_FACTORS = "data acquisition failed, manual verification recommended"

_TRAFFIC_PATTERNS: dict[DataSource, tuple[str, str]] = {
    DataSource.HISTORICAL: (
        "peak hours - very high traffic density",
        "off-peak hours - normal traffic density",
    ),
    DataSource.LIVE_SEARCH: (
        "peak hours - live data shows high traffic density",
        "off-peak hours - live data shows normal traffic density",
    ),
}


class SignalSource(Protocol):
    kind: DataSource
    thresholds: SignalThresholds

    def weather_signals(self, target_time: datetime) -> Optional[WeatherSignals]:
        ...

    def traffic_signals(self, target_time: datetime) -> Optional[TrafficSignals]:
        ...

    def event_signals(self, target_time: datetime) -> Optional[EventSignals]:
        ...


class RiskFactorAnalyzer:
    """Turn source signals into scored sub-risks.

    Provider exceptions never escape: each analysis returns a degraded but valid
    result carrying a fixed fallback score and a description naming the failure.
    """

    def analyze_weather(self, target_time: datetime, source: SignalSource) -> WeatherRisk:
        try:
            signals = source.weather_signals(target_time)
        except Exception:  # noqa: BLE001
            logger.exception("Weather signals from {} source failed", source.kind.value)
            return WeatherRisk(description=FAILED_WEATHER_DESCRIPTION, score=FAILED_WEATHER_SCORE)

        if signals is None:
            score, description = MISSING_WEATHER[source.kind]
            return WeatherRisk(description=description, score=score)

        return WeatherRisk(
            has_snow=signals.has_snow,
            has_icing_risk=signals.has_icing_risk,
            is_severe_weather=signals.is_severe_weather,
            description=signals.description,
            score=score_weather(signals.has_snow, signals.has_icing_risk, signals.is_severe_weather),
        )

    def analyze_traffic(self, target_time: datetime, source: SignalSource) -> TrafficRisk:
        rush_hour = is_rush_hour(target_time.hour)
        peak_label = "peak hours" if rush_hour else "off-peak hours"
        try:
            signals = source.traffic_signals(target_time)
        except Exception:  # noqa: BLE001
            logger.exception("Traffic signals from {} source failed", source.kind.value)
            return TrafficRisk(
                is_rush_hour=rush_hour,
                pattern_description=FAILED_TRAFFIC_PATTERN,
                score=TRAFFIC_RUSH_HOUR_POINTS if rush_hour else FAILED_TRAFFIC_OFF_PEAK_SCORE,
            )

        if signals is None:
            signals = TrafficSignals(accident_count=0, high_density_count=0)
            pattern = f"{peak_label} - data unavailable"
        else:
            peak, off_peak = _TRAFFIC_PATTERNS[source.kind]
            pattern = peak if rush_hour else off_peak

        return TrafficRisk(
            is_rush_hour=rush_hour,
            accident_count=signals.accident_count,
            high_density_indicator_count=signals.high_density_count,
            pattern_description=pattern,
            score=score_traffic(
                rush_hour, signals.accident_count, signals.high_density_count, source.thresholds
            ),
        )

    def analyze_event(self, target_time: datetime, source: SignalSource) -> EventRisk:
        try:
            signals = source.event_signals(target_time)
        except Exception:  # noqa: BLE001
            logger.exception("Event signals from {} source failed", source.kind.value)
            return EventRisk(event_types_description=FAILED_EVENT_DESCRIPTION, score=FAILED_EVENT_SCORE)

        if signals is None:
            return EventRisk(event_types_description=NO_EVENTS_DESCRIPTION)

        return EventRisk(
            active_event_count=signals.active_event_count,
            high_impact_event_count=signals.high_impact_event_count,
            event_types_description=signals.event_types_description,
            score=score_event(
                signals.active_event_count, signals.high_impact_event_count, source.thresholds
            ),
        )

    @staticmethod
    def default_analysis() -> RiskAnalysis:
        """Hard-coded analysis used when live-search aggregation breaks entirely."""

        return RiskAnalysis(
            weather=WeatherRisk(description="data unavailable", score=15),
            traffic=TrafficRisk(pattern_description="data unavailable", score=15),
            event=EventRisk(event_types_description="data unavailable", score=10),
            factors_override=DEFAULT_ANALYSIS_FACTORS,
        )


__all__ = ["DEFAULT_ANALYSIS_FACTORS", "RiskFactorAnalyzer", "SignalSource"]
