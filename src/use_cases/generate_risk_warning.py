"""Use case for assembling proactive risk warning reports."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from src.core.entities import DataSource, HighRiskZone, RiskAnalysis, RiskWarningReport
from src.infrastructure.risk.aggregator import RiskAggregator
from src.infrastructure.risk.factors import RiskFactorAnalyzer, SignalSource
from src.infrastructure.risk.historical import HistoricalDataProvider, HistoricalSignalSource
from src.infrastructure.risk.live_search import LiveSearchSignalSource, SearchProvider
from src.infrastructure.risk.zones import ZoneIdentifier
from src.utils.config import RiskSettings
from src.utils.logger import logger


class GenerateRiskWarningUseCase:
    """Compose factor analysis, aggregation and zone identification into a report.

    History is the default data path; callers opt into live search per call,
    usually after asking ``should_use_live_search``. Whatever the providers do,
    a complete report is always returned.
    """

    def __init__(
        self,
        history: HistoricalDataProvider,
        search: SearchProvider | None = None,
        settings: RiskSettings | None = None,
        analyzer: RiskFactorAnalyzer | None = None,
        aggregator: RiskAggregator | None = None,
        zone_identifier: ZoneIdentifier | None = None,
    ) -> None:
        self._settings = settings or RiskSettings()
        self._historical = HistoricalSignalSource(history, borough=self._settings.borough)
        self._live = LiveSearchSignalSource(search) if search is not None else None
        self._analyzer = analyzer or RiskFactorAnalyzer()
        self._aggregator = aggregator or RiskAggregator()
        self._zones = zone_identifier or ZoneIdentifier()

    def should_use_live_search(self, target_time: Optional[datetime]) -> bool:
        if target_time is None:
            return True
        return not self._settings.covers(target_time)

    def execute(self, target_time: datetime, use_live_search: bool = False) -> RiskWarningReport:
        if use_live_search and self._live is None:
            logger.warning("Live search requested but no search provider configured; using history")
            use_live_search = False

        logger.info(
            "Generating risk warning for {} from {} data",
            target_time,
            "live search" if use_live_search else "historical",
        )
        if use_live_search and self._live is not None:
            try:
                return self._live_report(target_time, self._live)
            except Exception:  # noqa: BLE001
                logger.exception("Live-search report assembly failed; falling back to historical data")
        return self._historical_report(target_time)

    def _historical_report(self, target_time: datetime) -> RiskWarningReport:
        analysis = self._analyze(target_time, self._historical)
        zones = self._zones.identify(target_time, analysis, self._historical)
        return self._assemble(target_time, analysis, zones, DataSource.HISTORICAL)

    def _live_report(self, target_time: datetime, live: LiveSearchSignalSource) -> RiskWarningReport:
        try:
            analysis = self._analyze(target_time, live)
        except Exception:  # noqa: BLE001
            logger.exception("Live-search risk analysis failed; using default analysis")
            analysis = RiskFactorAnalyzer.default_analysis()
        zones = self._zones.identify(target_time, analysis, live)
        return self._assemble(target_time, analysis, zones, DataSource.LIVE_SEARCH)

    def _analyze(self, target_time: datetime, source: SignalSource) -> RiskAnalysis:
        return self._aggregator.aggregate(
            self._analyzer.analyze_weather(target_time, source),
            self._analyzer.analyze_traffic(target_time, source),
            self._analyzer.analyze_event(target_time, source),
        )

    def _assemble(
        self,
        target_time: datetime,
        analysis: RiskAnalysis,
        zones: Sequence[HighRiskZone],
        source: DataSource,
    ) -> RiskWarningReport:
        tier = self._aggregator.tier(analysis)
        report = RiskWarningReport(
            time_window=self.format_time_window(target_time),
            affected_area=self._settings.affected_area,
            risk_analysis=analysis,
            risk_level=tier,
            risk_type=self._aggregator.risk_type_label(analysis),
            high_risk_zones=tuple(zones),
            recommendations=tuple(self._aggregator.recommendations(tier, analysis)),
            sop_reference=self._aggregator.sop_reference(tier),
            data_source=source,
        )
        logger.info(
            "Risk warning ready: score {} -> {} ({} zones)",
            analysis.overall_score,
            tier.value,
            len(report.high_risk_zones),
        )
        return report

    def format_time_window(self, target_time: datetime) -> str:
        end = target_time + timedelta(hours=self._settings.report_hours)
        return f"{target_time:%Y-%m-%d %H:%M} - {end:%H:%M}"


__all__ = ["GenerateRiskWarningUseCase"]
