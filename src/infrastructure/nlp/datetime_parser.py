"""Extract the target date of a risk warning request from free text."""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from src.utils.logger import logger

_RELATIVE_PATTERNS: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"今天|today", re.IGNORECASE), 0),
    (re.compile(r"明天|tomorrow", re.IGNORECASE), 1),
    (re.compile(r"昨天|yesterday", re.IGNORECASE), -1),
)

# (pattern, group order) where the order names the year/month/day groups.
_ABSOLUTE_PATTERNS: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日"), ("year", "month", "day")),
    (re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})"), ("year", "month", "day")),
    (re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{4})"), ("month", "day", "year")),
    (re.compile(r"(\d{1,2})月(\d{1,2})日"), ("month", "day")),
)


class TargetDateParser:
    """Parse relative (today/tomorrow/yesterday) and absolute dates."""

    def __init__(self, now_provider: Callable[[], datetime] | None = None) -> None:
        self._now_provider = now_provider or datetime.now

    def parse(self, text: Optional[str]) -> Optional[datetime]:
        """Return midnight of the first date found in ``text`` or ``None``."""

        if text is None or not text.strip():
            return None

        lowered = text.lower().strip()
        today = self._now_provider().date()

        for pattern, offset in _RELATIVE_PATTERNS:
            if pattern.search(lowered):
                return self._midnight(today + timedelta(days=offset))

        for pattern, order in _ABSOLUTE_PATTERNS:
            for match in pattern.finditer(lowered):
                parsed = self._build_date(match.groups(), order, today.year)
                if parsed is not None:
                    return self._midnight(parsed)

        logger.debug("No target date found in text: {}", text)
        return None

    @staticmethod
    def _build_date(groups: tuple[str, ...], order: tuple[str, ...], default_year: int) -> Optional[date]:
        parts = {name: int(value) for name, value in zip(order, groups)}
        try:
            return date(parts.get("year", default_year), parts["month"], parts["day"])
        except ValueError as error:
            logger.warning("Ignoring invalid date {}: {}", parts, error)
            return None

    @staticmethod
    def _midnight(value: date) -> datetime:
        return datetime.combine(value, datetime.min.time())


__all__ = ["TargetDateParser"]
