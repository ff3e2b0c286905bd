"""Rank geographic zones that deserve attention in a warning report."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from src.core.entities import (
    DataSource,
    HighRiskZone,
    RiskAnalysis,
    StationRidership,
    StreetAccidentCount,
)
from src.infrastructure.geo.landmarks import MANHATTAN_LANDMARKS
from src.utils.logger import logger

MAX_ZONES = 8
MAX_STREET_ZONES = 5
MAX_STATION_ZONES = 3
MAX_LANDMARK_ZONES = 3
STREET_MIN_ACCIDENTS = 3
STREET_EXTREME_ACCIDENTS = 10
CROWDED_STATION_FLOOR = 800

STREET_SUGGESTIONS = (
    "Deploy additional traffic police patrols",
    "Set up temporary warning signs",
    "Intensify snow and ice removal on the road surface",
    "Enforce reduced speed limits",
)
STATION_SUGGESTIONS = (
    "Add ground-level guidance staff",
    "Open temporary shelters",
    "Intensify snow clearing around the station",
    "Prepare an emergency evacuation plan",
)
LANDMARK_SUGGESTIONS = (
    "Increase monitoring of the area",
    "Deploy additional security staff",
    "Set up temporary warning signs",
    "Prepare an emergency evacuation plan",
)

DEFAULT_ZONE = HighRiskZone(
    zone_category="general risk area",
    location="major transit hubs of Manhattan",
    risk_level="medium",
    risk_factors="combined assessment of historical data and current conditions",
    deployment_suggestions=(
        "Maintain routine monitoring",
        "Watch for weather changes",
        "Prepare emergency resources",
    ),
)
MONITORING_ZONE = HighRiskZone(
    zone_category="default monitoring area",
    location="Manhattan core area",
    risk_level="pending assessment",
    risk_factors="data acquisition failed, manual assessment recommended",
    deployment_suggestions=("Increase manual patrols", "Collect on-site information"),
)


class ZoneSource(Protocol):
    kind: DataSource


class HistoricalZoneSource(ZoneSource, Protocol):
    def accident_hotspots(self, target_time: datetime) -> Sequence[StreetAccidentCount]:
        ...

    def crowded_stations(self, target_time: datetime, floor: int) -> Sequence[StationRidership]:
        ...


class SearchZoneSource(ZoneSource, Protocol):
    def zone_text(self, target_time: datetime) -> Optional[str]:
        ...


class Geocoder(Protocol):
    def locate(self, landmark: str) -> tuple[Optional[float], Optional[float]]:
        ...


class ZoneIdentifier:
    """Produce the ordered zone list for a report; never raises."""

    def __init__(
        self,
        geocoder: Geocoder | None = None,
        landmarks: Sequence[str] = MANHATTAN_LANDMARKS,
    ) -> None:
        self._geocoder = geocoder
        self._landmarks = tuple(landmarks)

    def identify(
        self, target_time: datetime, analysis: RiskAnalysis, source: ZoneSource
    ) -> list[HighRiskZone]:
        logger.debug(
            "Identifying zones from {} source (overall score {})",
            source.kind.value,
            analysis.overall_score,
        )
        try:
            if source.kind is DataSource.HISTORICAL:
                zones = self._historical_zones(target_time, source)  # type: ignore[arg-type]
            else:
                zones = self._search_zones(target_time, source)  # type: ignore[arg-type]
        except Exception:  # noqa: BLE001
            logger.exception("Zone identification from {} source failed", source.kind.value)
            zones = [MONITORING_ZONE]
        return zones[:MAX_ZONES]

    def _historical_zones(self, target_time: datetime, source: HistoricalZoneSource) -> list[HighRiskZone]:
        zones: list[HighRiskZone] = []
        hotspots = sorted(source.accident_hotspots(target_time), key=lambda item: item.count, reverse=True)
        for hotspot in hotspots[:MAX_STREET_ZONES]:
            if hotspot.count <= STREET_MIN_ACCIDENTS:
                continue
            zones.append(
                HighRiskZone(
                    zone_category="accident hotspot",
                    location=hotspot.street,
                    risk_level="extreme" if hotspot.count > STREET_EXTREME_ACCIDENTS else "high",
                    risk_factors="frequent historical accidents, worsening weather conditions",
                    deployment_suggestions=STREET_SUGGESTIONS,
                )
            )

        stations = source.crowded_stations(target_time, CROWDED_STATION_FLOOR)
        for station in list(stations)[:MAX_STATION_ZONES]:
            zones.append(
                HighRiskZone(
                    zone_category="crowded area",
                    location=f"{station.station_complex} subway station surroundings",
                    risk_level="medium-high",
                    risk_factors="dense pedestrian flow, evacuation is difficult in severe weather",
                    deployment_suggestions=STATION_SUGGESTIONS,
                    latitude=station.latitude,
                    longitude=station.longitude,
                )
            )
        return zones

    def _search_zones(self, target_time: datetime, source: SearchZoneSource) -> list[HighRiskZone]:
        content = source.zone_text(target_time)
        zones: list[HighRiskZone] = []
        if content is not None:
            for landmark in self._landmarks:
                name = landmark.lower()
                if name not in content and name.replace(" ", "") not in content:
                    continue
                latitude, longitude = self._locate(landmark)
                zones.append(
                    HighRiskZone(
                        zone_category="high-risk area identified from live search",
                        location=f"{landmark} surroundings",
                        risk_level="medium-high",
                        risk_factors="risk information from live web search",
                        deployment_suggestions=LANDMARK_SUGGESTIONS,
                        latitude=latitude,
                        longitude=longitude,
                    )
                )
                if len(zones) >= MAX_LANDMARK_ZONES:
                    break

        if not zones:
            logger.info("No landmark mentioned in live search results; using default zone")
            zones.append(DEFAULT_ZONE)
        return zones

    def _locate(self, landmark: str) -> tuple[Optional[float], Optional[float]]:
        if self._geocoder is None:
            return None, None
        return self._geocoder.locate(landmark)


__all__ = ["DEFAULT_ZONE", "MONITORING_ZONE", "ZoneIdentifier"]
