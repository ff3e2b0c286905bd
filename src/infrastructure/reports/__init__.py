"""Infrastructure helpers for rendering reports and chart payloads."""

from .charts import build_query_chart
from .risk_report import RiskReportFormatter

__all__ = [
    "RiskReportFormatter",
    "build_query_chart",
]
