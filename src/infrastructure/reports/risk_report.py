"""Render risk warning reports as plain text or JSON-ready mappings."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any

from src.core.entities import DataSource, RiskWarningReport

_SOURCE_BANNERS = {
    DataSource.LIVE_SEARCH: "Data source: live web search + historical analysis",
    DataSource.HISTORICAL: "Data source: historical database analysis",
}
_DISCLAIMERS = {
    DataSource.LIVE_SEARCH: (
        "Note: this report is based on live web data; combine it with on-site conditions."
    ),
    DataSource.HISTORICAL: (
        "Note: this report is based on historical data; consult the relevant agencies for the latest information."
    ),
}


class RiskReportFormatter:
    """Turn a :class:`RiskWarningReport` into the assistant's reply text."""

    title: str = "Smart traffic risk warning report"

    def render(self, report: RiskWarningReport) -> str:
        analysis = report.risk_analysis
        lines = [
            f"[{self.title}]",
            "",
            _SOURCE_BANNERS[report.data_source],
            f"Time window: {report.time_window}",
            f"Affected area: {report.affected_area}",
            f"Risk level: {report.risk_level.label}",
            f"Risk type: {report.risk_type}",
            "",
            "[Composite risk analysis]",
            f"- Overall risk score: {analysis.overall_score}",
            f"- Main risk factors: {analysis.risk_factors_description}",
            "",
            f"Weather risk ({analysis.weather.score} pts): {analysis.weather.description}",
            f"Traffic risk ({analysis.traffic.score} pts): {analysis.traffic.pattern_description}",
            f"Event risk ({analysis.event.score} pts): {analysis.event.event_types_description}",
            "",
            "[Zones requiring attention]",
        ]

        if report.high_risk_zones:
            for zone in report.high_risk_zones:
                lines.append(f"* {zone.location} ({zone.risk_level})")
                lines.append(f"  Risk factors: {zone.risk_factors}")
                lines.append(f"  Suggested measures: {', '.join(zone.deployment_suggestions)}")
        else:
            lines.append("No high-risk zone currently requires special attention")

        lines.extend(["", "[Recommendations]"])
        recommendations = report.recommendations or (
            "Maintain routine monitoring and readiness",
            "Watch for weather and traffic changes",
        )
        lines.extend(f"{index}. {item}" for index, item in enumerate(recommendations, start=1))

        lines.extend(["", "[Operating standard]", report.sop_reference, "", _DISCLAIMERS[report.data_source]])
        return "\n".join(lines)

    @staticmethod
    def to_dict(report: RiskWarningReport) -> dict[str, Any]:
        payload = asdict(report)
        payload["risk_level"] = report.risk_level.value
        payload["risk_level_label"] = report.risk_level.label
        payload["data_source"] = report.data_source.value
        analysis = payload["risk_analysis"]
        analysis.pop("factors_override", None)
        analysis["overall_score"] = report.risk_analysis.overall_score
        analysis["risk_factors"] = report.risk_analysis.risk_factors_description
        return payload


__all__ = ["RiskReportFormatter"]
