"""Deterministic emergency response plans for traffic accidents."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from src.core.entities import EmergencyResponse
from src.utils.logger import logger
from src.utils.text_cleaning import contains_any

COLLISION_KEYWORDS = ("追尾", "collision", "rear-end")
ROLLOVER_KEYWORDS = ("翻车", "rollover")
FIRE_KEYWORDS = ("火灾", "fire")
MULTI_VEHICLE_KEYWORDS = ("多车", "multi-vehicle")
SEVERE_TYPE_KEYWORDS = ("严重", "severe")
SEVERE_LEVELS = frozenset({"严重", "重大", "severe", "major"})
MULTI_VEHICLE_LEVELS = frozenset({"多车", "multi-vehicle"})
AVENUE_KEYWORDS = ("大道", "avenue")
BRIDGE_KEYWORDS = ("桥", "bridge")

SOP_COLLISION_SEVERE = "SOP-ER-COLLISION-SEVERE: Severe rear-end collision emergency handling procedure"
SOP_COLLISION_NORMAL = "SOP-ER-COLLISION-NORMAL: Rear-end collision emergency handling procedure"
SOP_ROLLOVER = "SOP-ER-ROLLOVER: Vehicle rollover emergency handling procedure"
SOP_FIRE = "SOP-ER-FIRE: Vehicle fire emergency handling procedure"
SOP_GENERAL = "SOP-ER-GENERAL: General traffic accident emergency handling procedure"


def _lower(value: Optional[str]) -> str:
    return (value or "").strip().lower()


class EmergencyPlanGenerator:
    """Map (location, accident type, severity) to an ordered response plan.

    Every list starts with its fixed base items; conditional items are appended
    afterwards in a fixed order.
    """

    def __init__(self, now_provider: Callable[[], datetime] | None = None) -> None:
        self._now_provider = now_provider or datetime.now

    def generate(self, location: str, accident_type: str, severity: str) -> EmergencyResponse:
        logger.info(
            "Generating emergency plan for '{}' at '{}' (severity '{}')",
            accident_type,
            location,
            severity,
        )
        place, kind, level = _lower(location), _lower(accident_type), _lower(severity)
        return EmergencyResponse(
            location=location,
            accident_type=accident_type,
            severity=severity,
            response_time=self._now_provider(),
            sop_reference=self.sop_reference(kind, level),
            immediate_actions=tuple(self._immediate_actions(kind, level)),
            resource_deployment=tuple(self._resource_deployment(place, kind, level)),
            traffic_control_measures=tuple(self._traffic_control_measures(place, kind)),
            follow_up_actions=tuple(self._follow_up_actions(level)),
        )

    @staticmethod
    def sop_reference(accident_type: str, severity: str) -> str:
        kind, level = _lower(accident_type), _lower(severity)
        if contains_any(kind, COLLISION_KEYWORDS):
            return SOP_COLLISION_SEVERE if level in SEVERE_LEVELS else SOP_COLLISION_NORMAL
        if contains_any(kind, ROLLOVER_KEYWORDS):
            return SOP_ROLLOVER
        if contains_any(kind, FIRE_KEYWORDS):
            return SOP_FIRE
        return SOP_GENERAL

    @staticmethod
    def _immediate_actions(kind: str, level: str) -> list[str]:
        actions = [
            "1. Dispatch the nearest traffic police and ambulance to the scene",
            "2. Secure the scene and set up a cordon",
            "3. Assess casualties and treat the injured first",
        ]
        if contains_any(kind, COLLISION_KEYWORDS):
            actions.append("4. Check vehicles for fuel leaks or fire risk")
            actions.append("5. Clear onlookers and keep the rescue lane open")
            if level in MULTI_VEHICLE_LEVELS or contains_any(kind, MULTI_VEHICLE_KEYWORDS):
                actions.append("6. Activate the major accident plan and request additional rescue teams")
                actions.append("7. Notify hospitals to prepare for multiple casualties")
        actions.append("8. Notify related departments (fire, medical, towing)")
        actions.append("9. Start the on-site investigation and evidence collection")
        return actions

    @staticmethod
    def _resource_deployment(place: str, kind: str, level: str) -> list[str]:
        deployment = [
            "Traffic police: 2-3 officers on scene",
            "Ambulance: 1-2 ambulances on standby",
            "Tow truck: contact towing service to clear the scene",
        ]
        if level in SEVERE_LEVELS or contains_any(kind, MULTI_VEHICLE_KEYWORDS):
            deployment.append("Fire truck: 1 fire engine on standby at the scene")
            deployment.append("Traffic police: increase to 4-6 officers")
            deployment.append("Ambulance: increase to 3-4 ambulances")
            deployment.append("Command vehicle: dispatch an on-site command vehicle")
        if contains_any(place, AVENUE_KEYWORDS):
            deployment.append("Traffic guidance: set up guidance points at major intersections")
            deployment.append("Information release: activate the traffic information system")
        if contains_any(place, BRIDGE_KEYWORDS):
            deployment.append("Special equipment: prepare bridge rescue equipment")
            deployment.append("Specialists: bridge safety assessment experts")
        return deployment

    @staticmethod
    def _traffic_control_measures(place: str, kind: str) -> list[str]:
        measures = [
            "Close the accident lane immediately with safety cones and warning signs",
            "Place diversion signs 200-500 meters ahead of the accident",
        ]
        if contains_any(place, AVENUE_KEYWORDS):
            measures.append("Activate the arterial road emergency traffic plan")
            measures.append("Coordinate nearby signals to optimise diversion routes")
            measures.append("Broadcast detour information via traffic radio and navigation systems")
        if contains_any(kind, MULTI_VEHICLE_KEYWORDS + SEVERE_TYPE_KEYWORDS):
            measures.append("Consider temporarily closing the entire road section")
            measures.append("Activate the regional traffic diversion plan")
            measures.append("Coordinate additional public transit service")
        measures.append("Set up a temporary parking area for response vehicles")
        measures.append("Station traffic police at key intersections for manual control")
        return measures

    @staticmethod
    def _follow_up_actions(level: str) -> list[str]:
        actions = [
            "Complete the on-site survey and accident investigation",
            "Clear the scene and restore normal traffic",
            "Tally casualties and property losses",
            "Report the handling of the accident to higher authorities",
        ]
        if level in SEVERE_LEVELS:
            actions.append("Start an in-depth accident investigation")
            actions.append("Evaluate whether preventive measures are required")
            actions.append("Hold an accident review meeting")
        actions.append("Update the accident database records")
        actions.append("Summarise lessons learned and refine the emergency plan")
        return actions


__all__ = ["EmergencyPlanGenerator"]
