"""Core entities for the urban traffic risk domain."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional


class ScenarioTag(str, Enum):
    """Coarse intent category assigned to a user message."""

    PROACTIVE_WARNING = "proactive_warning"
    EMERGENCY_RESPONSE = "emergency_response"
    DATA_DRIVEN_GOVERNANCE = "data_driven_governance"
    GENERAL = "general"


class DataSource(str, Enum):
    """Where the risk signals of a report were extracted from."""

    HISTORICAL = "historical"
    LIVE_SEARCH = "live_search"


class RiskTier(str, Enum):
    """Ordered severity bands over the composite risk score."""

    TIER_1 = "tier-1"
    TIER_2 = "tier-2"
    TIER_3 = "tier-3"
    TIER_4 = "tier-4"

    @property
    def threshold(self) -> Optional[int]:
        return _TIER_THRESHOLDS[self]

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @classmethod
    def for_score(cls, score: int) -> "RiskTier":
        """Return the first tier, highest first, whose threshold ``score`` reaches."""

        for tier in (cls.TIER_1, cls.TIER_2, cls.TIER_3):
            if score >= _TIER_THRESHOLDS[tier]:
                return tier
        return cls.TIER_4


_TIER_THRESHOLDS: dict[RiskTier, Optional[int]] = {
    RiskTier.TIER_1: 70,
    RiskTier.TIER_2: 50,
    RiskTier.TIER_3: 30,
    RiskTier.TIER_4: None,
}
_TIER_LABELS: dict[RiskTier, str] = {
    RiskTier.TIER_1: "Level 1 risk (high)",
    RiskTier.TIER_2: "Level 2 risk (medium-high)",
    RiskTier.TIER_3: "Level 3 risk (medium)",
    RiskTier.TIER_4: "Level 4 risk (low)",
}


@dataclass(frozen=True)
class WeatherRisk:
    has_snow: bool = False
    has_icing_risk: bool = False
    is_severe_weather: bool = False
    description: str = ""
    score: int = 0


@dataclass(frozen=True)
class TrafficRisk:
    is_rush_hour: bool = False
    accident_count: int = 0
    high_density_indicator_count: int = 0
    pattern_description: str = ""
    score: int = 0


@dataclass(frozen=True)
class EventRisk:
    active_event_count: int = 0
    high_impact_event_count: int = 0
    event_types_description: str = ""
    score: int = 0


NO_RISK_FACTORS = "no significant risk factors"


@dataclass(frozen=True)
class RiskAnalysis:
    """Composite of the three sub-risks.

    ``overall_score`` is derived on every access so it can never drift from the
    sub-scores. ``factors_override`` is only set by the total-failure fallback.
    """

    weather: WeatherRisk
    traffic: TrafficRisk
    event: EventRisk
    factors_override: Optional[str] = None

    @property
    def overall_score(self) -> int:
        return self.weather.score + self.traffic.score + self.event.score

    @property
    def risk_factors_description(self) -> str:
        if self.factors_override is not None:
            return self.factors_override

        factors: list[str] = []
        if self.weather.has_snow:
            factors.append("snowfall")
        if self.weather.has_icing_risk:
            factors.append("road icing risk")
        if self.weather.is_severe_weather:
            factors.append("severe weather conditions")
        if self.traffic.is_rush_hour:
            factors.append("traffic rush hour")
        if self.traffic.accident_count > 10:
            factors.append("frequent historical accidents")
        if self.traffic.high_density_indicator_count > 5:
            factors.append("dense crowds")
        if self.event.active_event_count > 3:
            factors.append("multiple concurrent events")
        if self.event.high_impact_event_count > 0:
            factors.append("high-impact events")
        return ", ".join(factors) if factors else NO_RISK_FACTORS


@dataclass(frozen=True)
class HighRiskZone:
    zone_category: str
    location: str
    risk_level: str
    risk_factors: str
    deployment_suggestions: tuple[str, ...] = ()
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class RiskWarningReport:
    """Fully derived warning report returned to the conversational layer."""

    time_window: str
    affected_area: str
    risk_analysis: RiskAnalysis
    risk_level: RiskTier
    risk_type: str
    high_risk_zones: tuple[HighRiskZone, ...]
    recommendations: tuple[str, ...]
    sop_reference: str
    data_source: DataSource = DataSource.HISTORICAL


@dataclass(frozen=True)
class EmergencyResponse:
    location: str
    accident_type: str
    severity: str
    response_time: datetime
    sop_reference: str
    immediate_actions: tuple[str, ...]
    resource_deployment: tuple[str, ...]
    traffic_control_measures: tuple[str, ...]
    follow_up_actions: tuple[str, ...]


@dataclass(frozen=True)
class WeatherRecord:
    """Recorded daily weather observation."""

    date: date
    snow: Optional[float] = None
    has_icing_risk: bool = False
    is_severe_weather: bool = False
    description: str = ""


@dataclass(frozen=True)
class StationRidership:
    station_complex: str
    ridership: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class PermittedEvent:
    event_name: str
    event_type: str
    impact_level: str
    borough: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class StreetAccidentCount:
    street: str
    count: int


@dataclass(frozen=True)
class SearchResult:
    content: str
    title: str = ""
    url: str = ""


@dataclass(frozen=True)
class SearchResponse:
    answer: Optional[str] = None
    results: tuple[SearchResult, ...] = ()


@dataclass(frozen=True)
class ChartData:
    title: str
    chart_type: str
    labels: tuple[str, ...]
    values: tuple[float, ...]
    series_name: str


@dataclass(frozen=True)
class GeneratedAnswer:
    """Answer text plus any tabular rows the answering backend queried."""

    text: str
    rows: tuple[Mapping[str, Any], ...] = ()


@dataclass(frozen=True)
class SessionSnapshot:
    """Side-channel annotations collected for one session."""

    thoughts: tuple[str, ...] = ()
    charts: tuple[ChartData, ...] = ()
    queried_tables: tuple[str, ...] = ()
    summary: Optional[str] = None
    involves_data_query: bool = False


@dataclass(frozen=True)
class AssistantReply:
    session_id: str
    scenario: ScenarioTag
    message: str
    report: Optional[RiskWarningReport] = None
    snapshot: SessionSnapshot = field(default_factory=SessionSnapshot)


__all__ = [
    "AssistantReply",
    "ChartData",
    "DataSource",
    "EmergencyResponse",
    "EventRisk",
    "GeneratedAnswer",
    "HighRiskZone",
    "NO_RISK_FACTORS",
    "PermittedEvent",
    "RiskAnalysis",
    "RiskTier",
    "RiskWarningReport",
    "ScenarioTag",
    "SearchResponse",
    "SearchResult",
    "SessionSnapshot",
    "StationRidership",
    "StreetAccidentCount",
    "TrafficRisk",
    "WeatherRecord",
    "WeatherRisk",
]
