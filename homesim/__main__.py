"""Command line entry point: run a scenario and print the final reports."""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from config import settings
from homesim.environment.home import HomeEnvironment
from homesim.exceptions import SimulationError
from homesim.simulation.clock import SimulationClock
from homesim.simulation.engine import SimulationEngine
from homesim.simulation.scenarios import (
    build_sample_scenarios,
    get_scenario_list,
    load_scenarios_from_yaml,
)

logger = logging.getLogger("homesim")


def _configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=settings.app_name)
    parser.add_argument("--scenario", default="morning_routine", help="Scenario id to run")
    parser.add_argument(
        "--config",
        default=None,
        help="YAML scenarios file (default: settings.scenarios_config_path)",
    )
    parser.add_argument(
        "--duration",
        type=int,
        default=settings.default_duration_minutes,
        help="Simulated minutes to run",
    )
    parser.add_argument(
        "--start",
        default=settings.simulation_start.strftime("%H:%M"),
        help="Simulated start time (HH:MM)",
    )
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    if args.config:
        scenarios = load_scenarios_from_yaml(args.config)
    elif Path(settings.scenarios_config_path).exists():
        scenarios = load_scenarios_from_yaml(settings.scenarios_config_path)
    else:
        scenarios = build_sample_scenarios()

    if args.list:
        for item in get_scenario_list(scenarios):
            print(f"{item['id']}: {item['name']} - {item['description']}")
        return 0

    scenario = scenarios.get(args.scenario)
    if scenario is None:
        logger.error(f"Unknown scenario: {args.scenario}")
        return 2

    start = datetime.strptime(args.start, "%H:%M").time()
    environment = HomeEnvironment(clock=SimulationClock.at(start))
    engine = SimulationEngine(environment)

    print(scenario.describe())
    report = await engine.run(scenario, args.duration)

    print("\n==== Simulation Completed ====")
    print(environment.get_environment_report())
    print("\nDevice statuses:")
    for device in scenario.devices:
        print(f"\n{device.get_status_report()}")

    if report.missing_devices:
        logger.warning(f"Unresolved device ids: {', '.join(sorted(set(report.missing_devices)))}")
    return 0


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = _parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except SimulationError as e:
        logger.error(e.message)
        return 1
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
