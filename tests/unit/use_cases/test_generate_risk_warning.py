"""Tests for the GenerateRiskWarningUseCase orchestration."""
from __future__ import annotations

from datetime import datetime
from unittest.mock import Mock

import pytest

from src.core.entities import (
    DataSource,
    PermittedEvent,
    RiskTier,
    SearchResponse,
    SearchResult,
    StationRidership,
    StreetAccidentCount,
    WeatherRecord,
)
from src.infrastructure.risk.factors import DEFAULT_ANALYSIS_FACTORS
from src.infrastructure.risk.zones import MONITORING_ZONE
from src.use_cases.generate_risk_warning import GenerateRiskWarningUseCase

IN_WINDOW = datetime(2024, 2, 10, 8, 0)
OUT_OF_WINDOW = datetime(2024, 3, 5, 18, 0)


def build_history() -> Mock:
    history = Mock()
    history.find_weather_by_date.return_value = WeatherRecord(
        date=IN_WINDOW.date(), snow=4.0, has_icing_risk=True, description="heavy snow"
    )
    history.find_accidents_in_range.return_value = [{}] * 15
    history.count_accidents_by_street.return_value = [StreetAccidentCount("BROADWAY", 12)]
    history.find_high_density_stations.return_value = [
        StationRidership(f"Station {index}", 1000 + index) for index in range(6)
    ]
    history.find_events_by_borough_and_range.return_value = [
        PermittedEvent("Parade", "Parade", "high-impact", "Manhattan"),
        PermittedEvent("Fair", "Street Event", "low", "Manhattan"),
        PermittedEvent("Market", "Street Event", "low", "Manhattan"),
        PermittedEvent("Run", "Athletic Race", "low", "Manhattan"),
    ]
    return history


def build_search(content: str = "Blizzard warning: crash near Times Square, major parade") -> Mock:
    search = Mock()
    search.search.return_value = SearchResponse(results=(SearchResult(content=content),))
    return search


def test_historical_report_inside_window():
    search = build_search()
    use_case = GenerateRiskWarningUseCase(history=build_history(), search=search)

    report = use_case.execute(IN_WINDOW)

    assert report.data_source is DataSource.HISTORICAL
    assert report.risk_analysis.overall_score == 150
    assert report.risk_level is RiskTier.TIER_1
    assert report.risk_type == "snow+icing+rush-hour-congestion+major-event"
    assert report.time_window == "2024-02-10 08:00 - 10:00"
    assert report.affected_area == "Manhattan, New York City"
    assert [zone.zone_category for zone in report.high_risk_zones] == ["accident hotspot"] + ["crowded area"] * 3
    assert report.sop_reference.startswith("SOP-PW-L1")
    search.search.assert_not_called()


def test_live_report_outside_window():
    use_case = GenerateRiskWarningUseCase(history=build_history(), search=build_search())

    report = use_case.execute(OUT_OF_WINDOW, use_live_search=True)

    assert report.data_source is DataSource.LIVE_SEARCH
    assert (report.risk_analysis.weather.score, report.risk_analysis.traffic.score) == (50, 25)
    assert report.risk_analysis.event.score == 20
    assert report.risk_level is RiskTier.TIER_1
    assert report.risk_type == "snow+severe-weather+rush-hour-congestion+major-event"
    assert [zone.location for zone in report.high_risk_zones] == ["Times Square surroundings"]


def test_single_argument_execute_reads_history_even_outside_window():
    search = build_search()
    use_case = GenerateRiskWarningUseCase(history=build_history(), search=search)

    report = use_case.execute(OUT_OF_WINDOW)

    assert report.data_source is DataSource.HISTORICAL
    search.search.assert_not_called()


def test_live_provider_failures_still_produce_report():
    search = Mock()
    search.search.side_effect = RuntimeError("search quota exceeded")
    use_case = GenerateRiskWarningUseCase(history=build_history(), search=search)

    report = use_case.execute(OUT_OF_WINDOW, use_live_search=True)

    assert report.data_source is DataSource.LIVE_SEARCH
    assert report.risk_analysis.overall_score == 15 + 25 + 5
    assert report.risk_level is RiskTier.TIER_3
    assert report.high_risk_zones == (MONITORING_ZONE,)


def test_live_analysis_breakdown_uses_default_analysis():
    analyzer = Mock()
    analyzer.analyze_weather.side_effect = RuntimeError("unexpected")
    use_case = GenerateRiskWarningUseCase(history=build_history(), search=build_search(), analyzer=analyzer)

    report = use_case.execute(OUT_OF_WINDOW, use_live_search=True)

    assert report.risk_analysis.overall_score == 40
    assert report.risk_analysis.risk_factors_description == DEFAULT_ANALYSIS_FACTORS
    assert report.risk_level is RiskTier.TIER_3


def test_live_assembly_failure_falls_back_to_history():
    zones = Mock()

    def identify(target_time, analysis, source):
        if source.kind is DataSource.LIVE_SEARCH:
            raise RuntimeError("zone ranking crashed")
        return []

    zones.identify.side_effect = identify
    use_case = GenerateRiskWarningUseCase(
        history=build_history(), search=build_search(), zone_identifier=zones
    )

    report = use_case.execute(OUT_OF_WINDOW, use_live_search=True)

    assert report.data_source is DataSource.HISTORICAL
    assert zones.identify.call_count == 2


def test_live_request_without_search_provider_uses_history():
    use_case = GenerateRiskWarningUseCase(history=build_history())
    assert use_case.execute(OUT_OF_WINDOW, use_live_search=True).data_source is DataSource.HISTORICAL


def test_historical_provider_failures_use_fallback_scores():
    history = build_history()
    history.find_weather_by_date.side_effect = RuntimeError("db down")
    history.find_accidents_in_range.side_effect = RuntimeError("db down")
    history.find_events_by_borough_and_range.side_effect = RuntimeError("db down")
    history.count_accidents_by_street.side_effect = RuntimeError("db down")

    report = GenerateRiskWarningUseCase(history=history).execute(IN_WINDOW)

    assert report.risk_analysis.weather.score == 15
    assert report.risk_analysis.traffic.score == 25
    assert report.risk_analysis.event.score == 5
    assert report.high_risk_zones == (MONITORING_ZONE,)


@pytest.mark.parametrize(
    ("target_time", "expected"),
    [(None, True), (IN_WINDOW, False), (OUT_OF_WINDOW, True), (datetime(2024, 2, 29, 23, 0), False)],
)
def test_should_use_live_search(target_time, expected):
    use_case = GenerateRiskWarningUseCase(history=build_history())
    assert use_case.should_use_live_search(target_time) is expected
