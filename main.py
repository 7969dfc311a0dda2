"""
Intercity Bus Simulation - Demo Entry Point

Builds the scenario described in config.py, runs the configured execute
windows and logs every dispatched event.
"""

import sys
import logging
import time
from typing import Any, Dict, List, Optional

from simulation.engine import Simulation
from simulation.event import Event
from utils.statistics import occupancy_timeline, summarize_events
import config


def setup_logging(log_level=None, log_file=None):
    """
    Route log records to stdout and, when configured, to a log file.

    The file handler is opened before the root logger is touched, so a bad
    path leaves the existing configuration in place.

    Args:
        log_level: Override log level from config
        log_file: Override log file path from config

    Raises:
        OSError: If the log file cannot be opened
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    file_path = log_file or config.LOG_FILE
    if file_path:
        handlers.append(logging.FileHandler(file_path, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(log_level or config.LOG_LEVEL)


def build_simulation(config_dict: Dict[str, Any]) -> Simulation:
    """
    Create a Simulation populated with the scenario from a config dict.

    Args:
        config_dict: Dictionary as returned by config.get_config()

    Returns:
        Simulation: Ready to execute, clock at tick 0
    """
    simulation = Simulation()

    cities = {name: simulation.new_city(name) for name in config_dict['cities']}

    for a, b, travel_time in config_dict['roads']:
        simulation.new_road(cities[a], cities[b], travel_time)

    for route in config_dict['routes']:
        simulation.new_bus([cities[stop] for stop in route])

    for origin, destination, count in config_dict['demand']:
        simulation.add_people(cities[origin], cities[destination], count)

    return simulation


def format_event(event: Event, clock: int) -> str:
    return (
        f"At {clock}, {event.alighted_count} people got off and "
        f"{event.boarded_count} people got on at {event.city.name}"
    )


def run(config_dict: Dict[str, Any], windows: Optional[List[int]] = None) -> List[Event]:
    """
    Run the configured scenario window by window.

    Returns:
        All dispatched events, in dispatch order.
    """
    logger = logging.getLogger(__name__)

    simulation = build_simulation(config_dict)
    dispatched: List[Event] = []

    for window in windows or config_dict['execute_windows']:
        events = simulation.execute(window)
        for event in events:
            logger.info(format_event(event, simulation.current_time))
        dispatched.extend(events)

    for tick, bus_id, on_board in occupancy_timeline(dispatched):
        logger.debug(f"Tick {tick}: bus {bus_id} leaves with {on_board} on board")

    summary = summarize_events(dispatched)
    logger.info(
        f"Summary: {summary['num_events']} events, "
        f"{summary['total_boarded']} boarded, {summary['total_alighted']} alighted"
    )
    return dispatched


def main():
    """
    Main entry point for the demo.

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    real_start_time = time.time()

    try:
        setup_logging()
    except OSError as e:
        print(f"Cannot open log file: {e}", file=sys.stderr)
        return 1

    logger = logging.getLogger(__name__)

    config_dict = config.get_config()
    if not config.validate_config(config_dict):
        logger.error("Configuration validation failed")
        return 1

    try:
        logger.info("=" * 60)
        logger.info("Starting bus simulation...")
        logger.info("=" * 60)

        run(config_dict)

        total_time = time.time() - real_start_time
        logger.info(f"Simulation completed in {total_time:.2f} seconds")
        return 0

    except KeyboardInterrupt:
        logger.warning("Simulation interrupted by user")
        return 1

    except Exception as e:
        logger.exception(f"Fatal error during simulation: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
