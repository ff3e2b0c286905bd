"""Exception hierarchy for the traffic risk engine."""
from __future__ import annotations


class TrafficRiskError(Exception):
    """Base class for all project specific errors."""


class ProviderError(TrafficRiskError):
    """An external data provider (database, CSV store, web search) failed."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ConfigurationError(TrafficRiskError, ValueError):
    """The configuration file is missing or malformed."""


__all__ = ["ConfigurationError", "ProviderError", "TrafficRiskError"]
