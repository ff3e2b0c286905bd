"""Keyword-based scenario routing for incoming user messages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.entities import ScenarioTag
from src.utils.logger import logger
from src.utils.text_cleaning import first_match

DATA_QUERY_KEYWORDS: tuple[str, ...] = (
    "事故", "accident", "地铁", "subway",
    "客流", "ridership", "许可", "permit", "事件", "event",
    "数据", "data", "统计", "statistics", "分析", "analysis",
    "查询", "query", "多少", "how many", "什么时候", "when",
    "哪里", "where", "趋势", "trend", "风险", "risk",
)

WARNING_KEYWORDS: tuple[str, ...] = (
    "风险预警", "风险预测", "预防", "预警", "暴雪", "结冰", "天气预警",
    "提前部署", "防范", "风险评估", "潜在风险", "snow", "icing", "blizzard",
)

EMERGENCY_KEYWORDS: tuple[str, ...] = (
    "紧急", "应急", "突发", "车祸", "拥堵", "堵塞", "封闭",
    "救援", "处理", "应对", "emergency", "crash", "incident",
)

GOVERNANCE_KEYWORDS: tuple[str, ...] = (
    "治理", "整改", "优化", "改善", "分析", "复盘", "总结", "黑点",
    "根源", "原因", "治理方案", "改进措施", "governance", "improve",
    "analysis", "solution", "black spot",
)

# Historical tables a data query is answered from, keyed by trigger keywords.
QUERIED_TABLE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("nyc_traffic_accidents", ("事故", "accident")),
    ("subway_ridership", ("地铁", "subway", "客流")),
    ("nyc_permitted_events", ("许可", "permit", "事件")),
)


@dataclass(frozen=True)
class KeywordScenarioClassifier:
    """Map raw user text to a scenario tag using ordered keyword groups.

    The data-query check runs first and short-circuits to ``GENERAL``; only then
    are the warning, emergency and governance groups tried, in that order.
    """

    data_query_keywords: tuple[str, ...] = DATA_QUERY_KEYWORDS
    scenario_groups: tuple[tuple[ScenarioTag, tuple[str, ...]], ...] = (
        (ScenarioTag.PROACTIVE_WARNING, WARNING_KEYWORDS),
        (ScenarioTag.EMERGENCY_RESPONSE, EMERGENCY_KEYWORDS),
        (ScenarioTag.DATA_DRIVEN_GOVERNANCE, GOVERNANCE_KEYWORDS),
    )

    def classify(self, text: Optional[str]) -> ScenarioTag:
        lowered = (text or "").lower()
        if not lowered.strip():
            return ScenarioTag.GENERAL

        keyword = first_match(lowered, self.data_query_keywords)
        if keyword is not None:
            logger.debug("Data-query keyword '{}' matched, routing to general scenario", keyword)
            return ScenarioTag.GENERAL

        for scenario, keywords in self.scenario_groups:
            keyword = first_match(lowered, keywords)
            if keyword is not None:
                logger.debug("Keyword '{}' matched scenario '{}'", keyword, scenario.value)
                return scenario
        return ScenarioTag.GENERAL

    def is_data_query(self, text: Optional[str]) -> bool:
        return first_match((text or "").lower(), self.data_query_keywords) is not None

    @staticmethod
    def queried_tables(text: Optional[str]) -> list[str]:
        lowered = (text or "").lower()
        return [
            table
            for table, keywords in QUERIED_TABLE_KEYWORDS
            if first_match(lowered, keywords) is not None
        ]


__all__ = [
    "DATA_QUERY_KEYWORDS",
    "EMERGENCY_KEYWORDS",
    "GOVERNANCE_KEYWORDS",
    "KeywordScenarioClassifier",
    "WARNING_KEYWORDS",
]
