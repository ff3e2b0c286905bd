"""Tests for chart payloads built from query rows."""
from __future__ import annotations

from src.infrastructure.reports.charts import MAX_CHART_POINTS, build_query_chart


def test_bar_chart_from_label_and_value_columns():
    rows = [
        {"on_street_name": "BROADWAY", "accidents": 14},
        {"on_street_name": "5 AVENUE", "accidents": 9},
    ]

    (chart,) = build_query_chart(rows)

    assert chart.chart_type == "bar"
    assert chart.labels == ("BROADWAY", "5 AVENUE")
    assert chart.values == (14.0, 9.0)
    assert chart.series_name == "accidents"
    assert chart.title == "Query result (accidents by on_street_name)"


def test_line_chart_for_date_labels_and_point_cap():
    rows = [{"transit_date": f"2024-02-{day:02d}", "ridership": day * 100} for day in range(1, 30)]

    (chart,) = build_query_chart(rows)

    assert chart.chart_type == "line"
    assert len(chart.labels) == MAX_CHART_POINTS


def test_booleans_are_not_values_and_missing_values_are_skipped():
    rows = [
        {"station": "Times Sq-42 St", "open": True, "ridership": 1500},
        {"station": "Bowling Green", "open": False, "ridership": None},
    ]

    (chart,) = build_query_chart(rows)

    assert chart.series_name == "ridership"
    assert chart.labels == ("Times Sq-42 St",)


def test_no_chart_without_numeric_column():
    assert build_query_chart([]) == []
    assert build_query_chart([{"street": "BROADWAY"}]) == []
