"""Tests for risk warning report rendering."""
from __future__ import annotations

import json
from dataclasses import replace

import pytest

from src.core.entities import (
    DataSource,
    EventRisk,
    HighRiskZone,
    RiskAnalysis,
    RiskTier,
    RiskWarningReport,
    TrafficRisk,
    WeatherRisk,
)
from src.infrastructure.reports.risk_report import RiskReportFormatter


@pytest.fixture
def report() -> RiskWarningReport:
    analysis = RiskAnalysis(
        weather=WeatherRisk(has_snow=True, description="heavy snow", score=30),
        traffic=TrafficRisk(is_rush_hour=True, pattern_description="peak hours", score=25),
        event=EventRisk(event_types_description="no active events"),
    )
    return RiskWarningReport(
        time_window="2024-02-10 08:00 - 10:00",
        affected_area="Manhattan, New York City",
        risk_analysis=analysis,
        risk_level=RiskTier.TIER_2,
        risk_type="snow+rush-hour-congestion",
        high_risk_zones=(
            HighRiskZone(
                zone_category="accident hotspot",
                location="BROADWAY",
                risk_level="high",
                risk_factors="frequent historical accidents",
                deployment_suggestions=("Set up temporary warning signs", "Enforce reduced speed limits"),
            ),
        ),
        recommendations=("Step up patrols", "Add traffic marshals during rush hour"),
        sop_reference="SOP-PW-L2: Level 2 risk warning handling standard operating procedure",
    )


def test_render_contains_every_section(report):
    text = RiskReportFormatter().render(report)

    assert text.startswith("[Smart traffic risk warning report]")
    assert "Data source: historical database analysis" in text
    assert "Risk level: Level 2 risk (medium-high)" in text
    assert "- Overall risk score: 55" in text
    assert "- Main risk factors: snowfall, traffic rush hour" in text
    assert "* BROADWAY (high)" in text
    assert "  Suggested measures: Set up temporary warning signs, Enforce reduced speed limits" in text
    assert "2. Add traffic marshals during rush hour" in text
    assert text.rstrip().endswith("consult the relevant agencies for the latest information.")


def test_render_live_report_without_zones(report):
    live = replace(report, high_risk_zones=(), recommendations=(), data_source=DataSource.LIVE_SEARCH)
    text = RiskReportFormatter().render(live)

    assert "Data source: live web search + historical analysis" in text
    assert "No high-risk zone currently requires special attention" in text
    assert "1. Maintain routine monitoring and readiness" in text


def test_to_dict_is_json_serialisable(report):
    payload = RiskReportFormatter.to_dict(report)

    assert payload["risk_level"] == "tier-2"
    assert payload["risk_level_label"] == "Level 2 risk (medium-high)"
    assert payload["data_source"] == "historical"
    assert payload["risk_analysis"]["overall_score"] == 55
    assert payload["risk_analysis"]["risk_factors"] == "snowfall, traffic rush hour"
    assert "factors_override" not in payload["risk_analysis"]
    assert json.loads(json.dumps(payload))["high_risk_zones"][0]["location"] == "BROADWAY"
