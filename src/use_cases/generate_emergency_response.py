"""Use case for producing emergency response plans."""
from __future__ import annotations

from typing import Protocol

from src.core.entities import EmergencyResponse
from src.utils.logger import logger


class EmergencyPlanner(Protocol):
    def generate(self, location: str, accident_type: str, severity: str) -> EmergencyResponse:
        ...


class GenerateEmergencyResponseUseCase:
    """Thin wrapper that delegates to an emergency plan generator."""

    def __init__(self, planner: EmergencyPlanner) -> None:
        self._planner = planner

    def execute(self, location: str, accident_type: str, severity: str) -> EmergencyResponse:
        response = self._planner.generate(location, accident_type, severity)
        logger.info("Emergency plan {} selected for {}", response.sop_reference.split(":")[0], location)
        return response


__all__ = ["GenerateEmergencyResponseUseCase"]
