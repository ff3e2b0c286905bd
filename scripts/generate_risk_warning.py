"""Generate a proactive risk warning report from historical CSV data."""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project, default_config_path

_PROJECT_ROOT = bootstrap_project()

from src.core.entities import RiskWarningReport
from src.infrastructure.data.csv_history import CsvHistoricalDataProvider
from src.infrastructure.geo.landmarks import LandmarkGeocoder
from src.infrastructure.reports.risk_report import RiskReportFormatter
from src.infrastructure.risk.zones import ZoneIdentifier
from src.use_cases.generate_risk_warning import GenerateRiskWarningUseCase
from src.utils.config import AppConfig, RiskSettings, load_config
from src.utils.logger import configure_logging, logger


def parse_target_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"Invalid target time {value!r}; expected ISO format such as 2024-02-10T17:30"
        ) from error


def build_use_case(config: AppConfig) -> GenerateRiskWarningUseCase:
    history = CsvHistoricalDataProvider.from_paths(config.get("paths", {}))
    return GenerateRiskWarningUseCase(
        history=history,
        settings=RiskSettings.from_config(config),
        zone_identifier=ZoneIdentifier(geocoder=LandmarkGeocoder.from_config(config)),
    )


def generate_report(config: AppConfig, target_time: datetime) -> RiskWarningReport:
    return build_use_case(config).execute(target_time, use_live_search=False)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a traffic risk warning report")
    parser.add_argument("--config", type=Path, default=default_config_path())
    parser.add_argument(
        "--date",
        type=parse_target_time,
        default=None,
        help="Target time in ISO format (defaults to now)",
    )
    parser.add_argument("--format", choices=("text", "json"), default="text")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    config = load_config(args.config)
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    target_time = args.date or datetime.now()
    logger.info("Generating risk warning for {}", target_time)
    report = generate_report(config, target_time)

    formatter = RiskReportFormatter()
    if args.format == "json":
        print(json.dumps(formatter.to_dict(report), ensure_ascii=False, indent=2, default=str))
    else:
        print(formatter.render(report))


if __name__ == "__main__":
    main()
