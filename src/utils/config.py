"""YAML configuration loading for scripts and use cases."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, TypedDict, cast

import yaml

from src.core.errors import ConfigurationError


class PathsConfig(TypedDict, total=False):
    weather: str
    accidents: str
    subway_ridership: str
    permitted_events: str


class HistoricalWindowConfig(TypedDict, total=False):
    start: str
    end: str


class RiskConfig(TypedDict, total=False):
    affected_area: str
    borough: str
    historical_window: HistoricalWindowConfig
    report_hours: int


class GeoConfig(TypedDict, total=False):
    online_lookup: bool
    user_agent: str
    timeout: int


class LoggingConfig(TypedDict, total=False):
    level: str


class AppConfig(TypedDict, total=False):
    paths: PathsConfig
    risk: RiskConfig
    geo: GeoConfig
    logging: LoggingConfig


def load_config(path: Path) -> AppConfig:
    """Read ``path`` and return its top-level mapping."""

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    with path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("The configuration file must contain a mapping at the top level.")

    return cast(AppConfig, data)


def _coerce_date(value: Any, key: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as error:
        raise ConfigurationError(f"Invalid date for '{key}': {value!r}") from error


@dataclass(frozen=True)
class RiskSettings:
    """Static parameters of the risk warning pipeline."""

    affected_area: str = "Manhattan, New York City"
    borough: str = "Manhattan"
    historical_start: date = date(2024, 2, 1)
    historical_end: date = date(2024, 2, 29)
    report_hours: int = 2

    def __post_init__(self) -> None:
        if self.historical_start > self.historical_end:
            raise ConfigurationError(
                f"Historical window start ({self.historical_start}) is after its end ({self.historical_end})."
            )

    def covers(self, moment: datetime) -> bool:
        """Whether ``moment`` falls inside the recorded historical data window."""

        return self.historical_start <= moment.date() <= self.historical_end

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "RiskSettings":
        section = dict((config or {}).get("risk") or {})
        defaults = cls()
        window = section.get("historical_window") or {}
        return cls(
            affected_area=str(section.get("affected_area", defaults.affected_area)),
            borough=str(section.get("borough", defaults.borough)),
            historical_start=_coerce_date(
                window.get("start", defaults.historical_start), "risk.historical_window.start"
            ),
            historical_end=_coerce_date(
                window.get("end", defaults.historical_end), "risk.historical_window.end"
            ),
            report_hours=int(section.get("report_hours", defaults.report_hours)),
        )


__all__ = ["AppConfig", "RiskSettings", "load_config"]
