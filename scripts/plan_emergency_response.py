"""Print the emergency response plan for an accident."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project

_PROJECT_ROOT = bootstrap_project()

from src.core.entities import EmergencyResponse
from src.infrastructure.emergency.plans import EmergencyPlanGenerator
from src.use_cases.generate_emergency_response import GenerateEmergencyResponseUseCase
from src.utils.logger import configure_logging


def render_plan(response: EmergencyResponse) -> str:
    sections = (
        ("Immediate actions", response.immediate_actions),
        ("Resource deployment", response.resource_deployment),
        ("Traffic control measures", response.traffic_control_measures),
        ("Follow-up actions", response.follow_up_actions),
    )
    lines = [
        f"Location: {response.location}",
        f"Accident type: {response.accident_type}",
        f"Severity: {response.severity}",
        f"Response time: {response.response_time:%Y-%m-%d %H:%M:%S}",
        f"SOP: {response.sop_reference}",
    ]
    for title, items in sections:
        lines.append("")
        lines.append(f"[{title}]")
        lines.extend(f"- {item}" for item in items)
    return "\n".join(lines)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate an emergency response plan")
    parser.add_argument("--location", required=True)
    parser.add_argument("--type", dest="accident_type", required=True)
    parser.add_argument("--severity", default="")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)
    use_case = GenerateEmergencyResponseUseCase(EmergencyPlanGenerator())
    print(render_plan(use_case.execute(args.location, args.accident_type, args.severity)))


if __name__ == "__main__":
    main()
