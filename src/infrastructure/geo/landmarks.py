"""Coordinates for well-known Manhattan landmarks flagged by live search."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from geopy.exc import GeocoderServiceError
from geopy.geocoders import Nominatim
from geopy.point import Point

from src.utils.logger import logger

MANHATTAN_LANDMARKS: tuple[str, ...] = (
    "Times Square",
    "Herald Square",
    "Union Square",
    "Washington Square Park",
    "Central Park",
    "Brooklyn Bridge",
    "Manhattan Bridge",
    "Williamsburg Bridge",
)


@dataclass
class LandmarkGeocoder:
    """Resolve landmark names to coordinates.

    The built-in gazetteer answers first; Nominatim is only consulted when
    ``online_lookup`` is enabled, bounded to the New York City viewbox.
    """

    online_lookup: bool = False
    user_agent: str = "urban-traffic-risk-agent"
    timeout: int = 5
    viewbox: tuple[tuple[float, float], tuple[float, float]] = (
        (40.92, -74.27),  # North-West corner of New York City
        (40.49, -73.68),  # South-East corner of New York City
    )
    gazetteer: Mapping[str, tuple[float, float]] = field(
        default_factory=lambda: {
            "times square": (40.7580, -73.9855),
            "herald square": (40.7502, -73.9877),
            "union square": (40.7359, -73.9911),
            "washington square park": (40.7308, -73.9973),
            "central park": (40.7829, -73.9654),
            "brooklyn bridge": (40.7061, -73.9969),
            "manhattan bridge": (40.7075, -73.9908),
            "williamsburg bridge": (40.7135, -73.9724),
        }
    )

    def __post_init__(self) -> None:
        self._geolocator = (
            Nominatim(user_agent=self.user_agent, timeout=self.timeout) if self.online_lookup else None
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "LandmarkGeocoder":
        section = dict((config or {}).get("geo") or {})
        return cls(
            online_lookup=bool(section.get("online_lookup", False)),
            user_agent=str(section.get("user_agent", "urban-traffic-risk-agent")),
            timeout=int(section.get("timeout", 5)),
        )

    def locate(self, landmark: str) -> tuple[Optional[float], Optional[float]]:
        key = " ".join(landmark.lower().split())
        if key in self.gazetteer:
            return self.gazetteer[key]

        if self._geolocator is None:
            logger.debug("Landmark {} not in gazetteer and online lookup disabled", landmark)
            return None, None

        query = f"{landmark}, Manhattan, New York"
        try:
            location = self._geolocator.geocode(
                query,
                language="en",
                country_codes="us",
                viewbox=self._format_viewbox(),
                bounded=True,
            )
        except (GeocoderServiceError, ValueError) as error:
            logger.warning("Geocoding failed for {}: {}", query, error)
            return None, None

        if location is None:
            logger.info("No coordinates found for {}", landmark)
            return None, None

        logger.debug("Resolved {} to ({}, {})", landmark, location.latitude, location.longitude)
        return location.latitude, location.longitude

    def _format_viewbox(self) -> tuple[Point, Point]:
        """Return a geopy-compatible bounding box ordered south-west to north-east."""
        (lat1, lon1), (lat2, lon2) = self.viewbox
        south, north = min(lat1, lat2), max(lat1, lat2)
        west, east = min(lon1, lon2), max(lon1, lon2)
        return (Point(latitude=south, longitude=west), Point(latitude=north, longitude=east))


__all__ = ["LandmarkGeocoder", "MANHATTAN_LANDMARKS"]
