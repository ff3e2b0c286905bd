"""Signal extraction from previously recorded, date-bounded history."""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Optional, Protocol, Sequence

from src.core.entities import (
    DataSource,
    PermittedEvent,
    StationRidership,
    StreetAccidentCount,
    WeatherRecord,
)
from src.infrastructure.risk.signals import (
    HISTORICAL_THRESHOLDS,
    EventSignals,
    TrafficSignals,
    WeatherSignals,
)
from src.utils.logger import logger

ACCIDENT_LOOKBACK_DAYS = 30
EVENT_WINDOW_DAYS = 1
HIGH_DENSITY_RIDERSHIP_FLOOR = 500
HIGH_IMPACT_LEVELS = frozenset({"high-impact", "high impact", "高影响"})


class HistoricalDataProvider(Protocol):
    def find_weather_by_date(self, day: date) -> Optional[WeatherRecord]:
        ...

    def find_accidents_in_range(self, start: date, end: date) -> Sequence[object]:
        ...

    def count_accidents_by_street(self, start: date, end: date) -> Sequence[StreetAccidentCount]:
        ...

    def find_high_density_stations(
        self, start: date, end: date, floor: int
    ) -> Sequence[StationRidership]:
        ...

    def find_events_by_borough_and_range(
        self, borough: str, start: date, end: date
    ) -> Sequence[PermittedEvent]:
        ...


def accident_window(target_time: datetime) -> tuple[date, date]:
    day = target_time.date()
    return day - timedelta(days=ACCIDENT_LOOKBACK_DAYS), day + timedelta(days=1)


class HistoricalSignalSource:
    """Read weather, traffic and event signals from a historical store."""

    kind = DataSource.HISTORICAL
    thresholds = HISTORICAL_THRESHOLDS

    def __init__(self, provider: HistoricalDataProvider, borough: str = "Manhattan") -> None:
        self._provider = provider
        self._borough = borough

    def weather_signals(self, target_time: datetime) -> Optional[WeatherSignals]:
        record = self._provider.find_weather_by_date(target_time.date())
        if record is None:
            logger.warning("No weather record stored for {}", target_time.date())
            return None

        has_snow = record.snow is not None and record.snow > 0
        return WeatherSignals(
            has_snow=has_snow,
            has_icing_risk=bool(record.has_icing_risk),
            is_severe_weather=bool(record.is_severe_weather),
            description=record.description,
        )

    def traffic_signals(self, target_time: datetime) -> TrafficSignals:
        start, end = accident_window(target_time)
        accidents = self._provider.find_accidents_in_range(start, end)
        stations = self._provider.find_high_density_stations(start, end, HIGH_DENSITY_RIDERSHIP_FLOOR)
        logger.debug(
            "Historical traffic window {} - {}: {} accidents, {} busy stations",
            start,
            end,
            len(accidents),
            len(stations),
        )
        return TrafficSignals(accident_count=len(accidents), high_density_count=len(stations))

    def event_signals(self, target_time: datetime) -> EventSignals:
        day = target_time.date()
        events = self._provider.find_events_by_borough_and_range(
            self._borough,
            day - timedelta(days=EVENT_WINDOW_DAYS),
            day + timedelta(days=EVENT_WINDOW_DAYS),
        )
        high_impact = sum(1 for event in events if _is_high_impact(event))
        type_counts = Counter(event.event_type for event in events)
        description = ", ".join(f"{event_type}({count})" for event_type, count in type_counts.items())
        return EventSignals(
            active_event_count=len(events),
            high_impact_event_count=high_impact,
            event_types_description=description or "no active events",
        )

    def accident_hotspots(self, target_time: datetime) -> Sequence[StreetAccidentCount]:
        start, end = accident_window(target_time)
        return self._provider.count_accidents_by_street(start, end)

    def crowded_stations(self, target_time: datetime, floor: int) -> Sequence[StationRidership]:
        start, end = accident_window(target_time)
        return self._provider.find_high_density_stations(start, end, floor)


def _is_high_impact(event: PermittedEvent) -> bool:
    return (event.impact_level or "").strip().lower() in HIGH_IMPACT_LEVELS


__all__ = ["HistoricalDataProvider", "HistoricalSignalSource", "accident_window"]
