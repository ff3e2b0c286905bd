"""Signal extraction by mining live web-search text."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from src.core.entities import DataSource, SearchResponse
from src.infrastructure.risk.signals import (
    LIVE_SEARCH_THRESHOLDS,
    EventSignals,
    TrafficSignals,
    WeatherSignals,
)
from src.utils.logger import logger
from src.utils.text_cleaning import contains_any, count_occurrences

SNOW_TOKENS = ("snow", "snowfall", "blizzard", "暴雪")
ICING_TOKENS = ("ice", "icing", "freezing", "结冰")
SEVERE_TOKENS = ("severe", "storm", "warning", "恶劣")
ACCIDENT_TOKENS = ("accident", "crash", "collision")
CONGESTION_TOKENS = ("crowded", "busy", "congestion", "delay")
GATHERING_TOKENS = ("event", "concert", "festival", "gathering", "parade")
LARGE_SCALE_TOKENS = ("large", "major", "massive", "thousands", "crowd")
EVENT_TYPE_LABELS: tuple[tuple[str, str], ...] = (
    ("concert", "concert"),
    ("festival", "festival"),
    ("protest", "protest"),
    ("parade", "parade"),
    ("sports", "sports event"),
)

WEATHER_QUERY = "New York Manhattan weather forecast {day} snow ice storm severe weather conditions"
TRAFFIC_QUERY = "New York Manhattan traffic accidents congestion {day} rush hour subway delays"
EVENT_QUERY = "New York Manhattan events activities {day} large gatherings concerts protests"
ZONE_QUERY = "New York Manhattan high risk areas dangerous zones {day} traffic accidents crime"


class SearchProvider(Protocol):
    def search(self, query: str) -> SearchResponse:
        ...


class LiveSearchSignalSource:
    """Derive signals from the first result returned by a web search.

    Every method returns ``None`` when the search came back empty and lets
    provider errors propagate so the analyzer can apply its failure policy.
    """

    kind = DataSource.LIVE_SEARCH
    thresholds = LIVE_SEARCH_THRESHOLDS

    def __init__(self, provider: SearchProvider) -> None:
        self._provider = provider

    def weather_signals(self, target_time: datetime) -> Optional[WeatherSignals]:
        response = self._search(WEATHER_QUERY, target_time)
        content = _first_content(response)
        if content is None:
            return None
        return WeatherSignals(
            has_snow=contains_any(content, SNOW_TOKENS),
            has_icing_risk=contains_any(content, ICING_TOKENS),
            is_severe_weather=contains_any(content, SEVERE_TOKENS),
            description=response.answer or "weather forecast from live web search",
        )

    def traffic_signals(self, target_time: datetime) -> Optional[TrafficSignals]:
        content = _first_content(self._search(TRAFFIC_QUERY, target_time))
        if content is None:
            return None
        return TrafficSignals(
            accident_count=count_occurrences(content, ACCIDENT_TOKENS),
            high_density_count=count_occurrences(content, CONGESTION_TOKENS),
        )

    def event_signals(self, target_time: datetime) -> Optional[EventSignals]:
        content = _first_content(self._search(EVENT_QUERY, target_time))
        if content is None:
            return None
        types = [label for token, label in EVENT_TYPE_LABELS if token in content]
        return EventSignals(
            active_event_count=count_occurrences(content, GATHERING_TOKENS),
            high_impact_event_count=count_occurrences(content, LARGE_SCALE_TOKENS),
            event_types_description=", ".join(types) if types else "no specific event type",
        )

    def zone_text(self, target_time: datetime) -> Optional[str]:
        return _first_content(self._search(ZONE_QUERY, target_time))

    def _search(self, template: str, target_time: datetime) -> SearchResponse:
        query = template.format(day=target_time.strftime("%Y-%m-%d"))
        logger.debug("Live search query: {}", query)
        return self._provider.search(query)


def _first_content(response: Optional[SearchResponse]) -> Optional[str]:
    if response is None or not response.results:
        return None
    return (response.results[0].content or "").lower()


__all__ = ["LiveSearchSignalSource", "SearchProvider"]
