"""Composite scoring, tiering and recommendation rules."""
from __future__ import annotations

from src.core.entities import EventRisk, RiskAnalysis, RiskTier, TrafficRisk, WeatherRisk
from src.utils.logger import logger

RISK_TYPE_DELIMITER = "+"
DEFAULT_RISK_TYPE = "composite risk"

BASE_RECOMMENDATIONS: dict[RiskTier, tuple[str, ...]] = {
    RiskTier.TIER_1: (
        "Activate the emergency plan immediately and deploy all emergency resources",
        "Issue a traffic control notice restricting non-essential vehicle travel",
        "Open all emergency shelters",
    ),
    RiskTier.TIER_2: (
        "Start a level-2 emergency response and deploy police to key areas",
        "Issue a traffic safety reminder advising residents to travel with caution",
        "Step up patrols and monitoring on key road sections",
    ),
    RiskTier.TIER_3: (
        "Strengthen traffic monitoring and prepare for emergencies",
        "Publish travel advisories to residents",
    ),
    RiskTier.TIER_4: ("Maintain routine monitoring and watch for weather changes",),
}

SNOW_RECOMMENDATIONS = (
    "Start snow-clearing operations, prioritising arterial roads",
    "Install anti-skid measures on ramps and bridges",
)
ICING_RECOMMENDATIONS = (
    "Inspect bridges and elevated road sections for icing",
    "Stock de-icing agents and anti-skid materials",
)
RUSH_HOUR_RECOMMENDATIONS = (
    "Add traffic marshals during rush hour",
    "Optimise signal timing to improve throughput",
)
EVENT_RECOMMENDATIONS = (
    "Coordinate with event organizers on crowd management",
    "Prepare an evacuation plan for the duration of the event",
)

SOP_REFERENCES: dict[RiskTier, str] = {
    RiskTier.TIER_1: "SOP-PW-L1: Level 1 risk emergency handling standard operating procedure",
    RiskTier.TIER_2: "SOP-PW-L2: Level 2 risk warning handling standard operating procedure",
    RiskTier.TIER_3: "SOP-PW-L3: Level 3 risk monitoring standard operating procedure",
    RiskTier.TIER_4: "SOP-PW-L4: Routine monitoring standard operating procedure",
}


class RiskAggregator:
    """Derive tier, label, recommendations and SOP from a risk analysis."""

    def aggregate(self, weather: WeatherRisk, traffic: TrafficRisk, event: EventRisk) -> RiskAnalysis:
        analysis = RiskAnalysis(weather=weather, traffic=traffic, event=event)
        logger.debug(
            "Aggregated scores weather={} traffic={} event={} overall={}",
            weather.score,
            traffic.score,
            event.score,
            analysis.overall_score,
        )
        return analysis

    @staticmethod
    def tier(analysis: RiskAnalysis) -> RiskTier:
        return RiskTier.for_score(analysis.overall_score)

    @staticmethod
    def risk_type_label(analysis: RiskAnalysis) -> str:
        labels: list[str] = []
        if analysis.weather.has_snow:
            labels.append("snow")
        if analysis.weather.has_icing_risk:
            labels.append("icing")
        if analysis.weather.is_severe_weather:
            labels.append("severe-weather")
        if analysis.traffic.is_rush_hour:
            labels.append("rush-hour-congestion")
        if analysis.event.high_impact_event_count > 0:
            labels.append("major-event")
        return RISK_TYPE_DELIMITER.join(labels) if labels else DEFAULT_RISK_TYPE

    @staticmethod
    def recommendations(tier: RiskTier, analysis: RiskAnalysis) -> list[str]:
        recommendations = list(BASE_RECOMMENDATIONS[tier])
        if analysis.weather.has_snow:
            recommendations.extend(SNOW_RECOMMENDATIONS)
        if analysis.weather.has_icing_risk:
            recommendations.extend(ICING_RECOMMENDATIONS)
        if analysis.traffic.is_rush_hour:
            recommendations.extend(RUSH_HOUR_RECOMMENDATIONS)
        if analysis.event.high_impact_event_count > 0:
            recommendations.extend(EVENT_RECOMMENDATIONS)
        return recommendations

    @staticmethod
    def sop_reference(tier: RiskTier) -> str:
        return SOP_REFERENCES[tier]


__all__ = [
    "BASE_RECOMMENDATIONS",
    "DEFAULT_RISK_TYPE",
    "RiskAggregator",
    "SOP_REFERENCES",
]
