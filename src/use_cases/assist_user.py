"""Use case routing a chat message to the matching scenario handler."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence

from src.core.entities import (
    AssistantReply,
    ChartData,
    GeneratedAnswer,
    RiskWarningReport,
    ScenarioTag,
    SessionSnapshot,
)
from src.infrastructure.reports.charts import build_query_chart
from src.utils.logger import logger


class ScenarioClassifier(Protocol):
    def classify(self, text: Optional[str]) -> ScenarioTag:
        ...

    def is_data_query(self, text: Optional[str]) -> bool:
        ...

    def queried_tables(self, text: Optional[str]) -> list[str]:
        ...


class DateParser(Protocol):
    def parse(self, text: Optional[str]) -> Optional[datetime]:
        ...


class RiskWarningGenerator(Protocol):
    def should_use_live_search(self, target_time: Optional[datetime]) -> bool:
        ...

    def execute(self, target_time: datetime, use_live_search: bool = False) -> RiskWarningReport:
        ...


class ReportRenderer(Protocol):
    def render(self, report: RiskWarningReport) -> str:
        ...


class AnswerGenerator(Protocol):
    """Language-model backed answering for non-warning scenarios."""

    def answer(self, scenario: ScenarioTag, message: str, session_id: str) -> GeneratedAnswer:
        ...


class ThoughtSink(Protocol):
    def append_thought(self, session_id: str, text: str) -> None:
        ...

    def attach_charts(self, session_id: str, charts: Iterable[ChartData]) -> None:
        ...

    def add_queried_tables(self, session_id: str, tables: Iterable[str]) -> None:
        ...

    def set_summary(self, session_id: str, text: Optional[str]) -> None:
        ...

    def consume_and_clear(self, session_id: str) -> SessionSnapshot:
        ...


class AssistUserUseCase:
    """Classify a message, run its scenario and collect the session annotations."""

    def __init__(
        self,
        classifier: ScenarioClassifier,
        date_parser: DateParser,
        risk_warning: RiskWarningGenerator,
        renderer: ReportRenderer,
        answer_generator: AnswerGenerator,
        thought_sink: ThoughtSink,
        now_provider: Callable[[], datetime] | None = None,
        chart_builder: Callable[[Sequence[Mapping[str, Any]]], list[ChartData]] = build_query_chart,
    ) -> None:
        self._classifier = classifier
        self._date_parser = date_parser
        self._risk_warning = risk_warning
        self._renderer = renderer
        self._answer_generator = answer_generator
        self._sink = thought_sink
        self._now_provider = now_provider or datetime.now
        self._chart_builder = chart_builder

    def execute(self, session_id: str, message: str) -> AssistantReply:
        scenario = self._classifier.classify(message)
        logger.info("Session {} routed to scenario '{}'", session_id, scenario.value)
        self._sink.append_thought(session_id, f"Identified scenario: {scenario.value}")

        report: Optional[RiskWarningReport] = None
        text: Optional[str] = None
        if scenario is ScenarioTag.PROACTIVE_WARNING:
            try:
                report = self._warn(session_id, message)
                text = self._renderer.render(report)
            except Exception:  # noqa: BLE001
                logger.exception("Risk warning scenario failed; answering as general query")
                self._sink.append_thought(session_id, "Risk warning failed, answering as a general query")
                scenario = ScenarioTag.GENERAL
                report = None

        if text is None:
            text = self._answer(session_id, scenario, message)

        snapshot = self._sink.consume_and_clear(session_id)
        return AssistantReply(
            session_id=session_id,
            scenario=scenario,
            message=text,
            report=report,
            snapshot=snapshot,
        )

    def _warn(self, session_id: str, message: str) -> RiskWarningReport:
        target_time = self._date_parser.parse(message)
        use_live_search = self._risk_warning.should_use_live_search(target_time)
        if target_time is None:
            target_time = self._now_provider()
            use_live_search = True

        self._sink.append_thought(
            session_id,
            f"Target time {target_time:%Y-%m-%d %H:%M}, data source: "
            + ("live web search" if use_live_search else "historical database"),
        )
        report = self._risk_warning.execute(target_time, use_live_search)
        self._sink.append_thought(
            session_id,
            f"Composite risk score {report.risk_analysis.overall_score}, {report.risk_level.label}",
        )
        self._sink.set_summary(session_id, f"{report.risk_level.label}: {report.risk_type}")
        return report

    def _answer(self, session_id: str, scenario: ScenarioTag, message: str) -> str:
        data_query = scenario is ScenarioTag.GENERAL and self._classifier.is_data_query(message)
        if data_query:
            tables = self._classifier.queried_tables(message)
            if tables:
                self._sink.add_queried_tables(session_id, tables)
                self._sink.append_thought(session_id, f"Data query touches: {', '.join(tables)}")

        result = self._answer_generator.answer(scenario, message, session_id)
        if data_query and result.rows:
            charts = self._chart_builder(result.rows)
            if charts:
                self._sink.attach_charts(session_id, charts)
                self._sink.append_thought(
                    session_id, f"Built {len(charts)} chart(s) from {len(result.rows)} result rows"
                )
        return result.text


__all__ = ["AnswerGenerator", "AssistUserUseCase", "ThoughtSink"]
