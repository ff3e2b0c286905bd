"""Tests for tiering, labels and recommendations."""
from __future__ import annotations

from src.core.entities import EventRisk, RiskTier, TrafficRisk, WeatherRisk
from src.infrastructure.risk.aggregator import BASE_RECOMMENDATIONS, SOP_REFERENCES, RiskAggregator


def test_severe_composite_scenario_is_tier_one():
    aggregator = RiskAggregator()
    analysis = aggregator.aggregate(
        WeatherRisk(has_snow=True, has_icing_risk=True, score=55),
        TrafficRisk(is_rush_hour=True, accident_count=15, high_density_indicator_count=6, score=60),
        EventRisk(active_event_count=4, high_impact_event_count=1, score=35),
    )

    tier = aggregator.tier(analysis)

    assert analysis.overall_score == 150
    assert tier is RiskTier.TIER_1
    assert aggregator.risk_type_label(analysis) == "snow+icing+rush-hour-congestion+major-event"
    assert aggregator.sop_reference(tier).startswith("SOP-PW-L1")

    recommendations = aggregator.recommendations(tier, analysis)
    assert recommendations[:3] == list(BASE_RECOMMENDATIONS[RiskTier.TIER_1])
    assert recommendations[3] == "Start snow-clearing operations, prioritising arterial roads"
    assert recommendations[5] == "Inspect bridges and elevated road sections for icing"
    assert recommendations[7] == "Add traffic marshals during rush hour"
    assert recommendations[9] == "Coordinate with event organizers on crowd management"
    assert len(recommendations) == 11


def test_quiet_scenario_is_tier_four_with_base_list_only():
    aggregator = RiskAggregator()
    analysis = aggregator.aggregate(WeatherRisk(), TrafficRisk(), EventRisk())
    tier = aggregator.tier(analysis)

    assert analysis.overall_score == 0
    assert tier is RiskTier.TIER_4
    assert aggregator.risk_type_label(analysis) == "composite risk"
    assert aggregator.recommendations(tier, analysis) == list(BASE_RECOMMENDATIONS[RiskTier.TIER_4])
    assert aggregator.sop_reference(tier) == SOP_REFERENCES[RiskTier.TIER_4]


def test_severe_weather_label_without_conditional_recommendation():
    aggregator = RiskAggregator()
    analysis = aggregator.aggregate(WeatherRisk(is_severe_weather=True, score=20), TrafficRisk(), EventRisk())

    assert aggregator.risk_type_label(analysis) == "severe-weather"
    assert aggregator.recommendations(RiskTier.TIER_4, analysis) == list(BASE_RECOMMENDATIONS[RiskTier.TIER_4])
