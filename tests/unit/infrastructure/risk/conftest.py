"""Fixtures shared by the risk tests."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.core.entities import DataSource
from src.infrastructure.risk.signals import (
    HISTORICAL_THRESHOLDS,
    LIVE_SEARCH_THRESHOLDS,
    EventSignals,
    TrafficSignals,
    WeatherSignals,
)


class FakeSignalSource:
    """Return fixed signals, raising for every lookup named in ``failing``."""

    def __init__(
        self,
        kind: DataSource = DataSource.HISTORICAL,
        weather: Optional[WeatherSignals] = None,
        traffic: Optional[TrafficSignals] = None,
        event: Optional[EventSignals] = None,
        failing: tuple[str, ...] = (),
    ) -> None:
        self.kind = kind
        self.thresholds = HISTORICAL_THRESHOLDS if kind is DataSource.HISTORICAL else LIVE_SEARCH_THRESHOLDS
        self._signals = {"weather": weather, "traffic": traffic, "event": event}
        self._failing = failing

    def _lookup(self, name: str):
        if name in self._failing:
            raise RuntimeError(f"{name} provider down")
        return self._signals[name]

    def weather_signals(self, target_time: datetime) -> Optional[WeatherSignals]:
        return self._lookup("weather")

    def traffic_signals(self, target_time: datetime) -> Optional[TrafficSignals]:
        return self._lookup("traffic")

    def event_signals(self, target_time: datetime) -> Optional[EventSignals]:
        return self._lookup("event")


@pytest.fixture
def make_source():
    """Factory for :class:`FakeSignalSource` instances."""
    return FakeSignalSource
