"""
Configuration module for the intercity bus simulation.

This module contains the configurable parameters: logging settings, the
execution windows used by the demo runner, and the demo scenario itself
(cities, roads, bus routes and waiting passengers).

Config to change: LOG_LEVEL, LOG_FILE, DEFAULT_EXECUTE_WINDOWS,
DEMO_CITIES, DEMO_ROADS, DEMO_ROUTES, DEMO_DEMAND
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# LOGGING SETTINGS
# ============================================================================

# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL = "INFO"

# Name of the log file (None to log to the console only)
LOG_FILE = None

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


# ============================================================================
# ENGINE SETTINGS
# ============================================================================

# Tick counts passed to successive execute() calls by the demo runner
DEFAULT_EXECUTE_WINDOWS = [270, 90]


# ============================================================================
# DEMO SCENARIO
# ============================================================================

DEMO_CITIES = ["Plzen", "Prague", "Brno", "Usti"]

# (city, city, travel time in ticks)
DEMO_ROADS = [
    ("Plzen", "Prague", 90),
    ("Prague", "Brno", 120),
    ("Prague", "Usti", 80),
    ("Plzen", "Usti", 110),
]

# Each route is the ordered list of stops of one bus
DEMO_ROUTES = [
    ["Plzen", "Prague", "Brno"],
    ["Prague", "Plzen", "Usti"],
]

# (origin, destination, number of people)
DEMO_DEMAND = [
    ("Prague", "Brno", 50),
    ("Prague", "Usti", 50),
    ("Plzen", "Usti", 50),
    ("Plzen", "Prague", 10),
]


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def get_config() -> Dict[str, Any]:
    """
    Package all configuration parameters into a dictionary.

    Returns:
        Dict[str, Any]: Dictionary containing all configuration parameters
    """
    config = {
        # Logging settings
        "log_level": LOG_LEVEL,
        "log_file": LOG_FILE,
        "log_format": LOG_FORMAT,
        "log_date_format": LOG_DATE_FORMAT,

        # Engine settings
        "execute_windows": list(DEFAULT_EXECUTE_WINDOWS),

        # Demo scenario
        "cities": list(DEMO_CITIES),
        "roads": list(DEMO_ROADS),
        "routes": [list(route) for route in DEMO_ROUTES],
        "demand": list(DEMO_DEMAND),
    }

    return config


def validate_config(config_dict: Optional[Dict[str, Any]] = None) -> bool:
    """
    Validate the configuration parameters.

    Checks:
    - Log level is a known level name
    - Execute windows are positive integers
    - City names are unique and non-empty
    - Roads, routes and demand only reference known cities
    - Road travel times are non-negative, demand counts positive
    - Routes have at least two stops

    Route connectivity is checked when the buses are created.

    Args:
        config_dict: Configuration to check (defaults to get_config())

    Returns:
        bool: True if configuration is valid, False otherwise
    """
    cfg = config_dict if config_dict is not None else get_config()
    valid = True

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if cfg.get("log_level") not in valid_log_levels:
        logger.error(f"Invalid log level: {cfg.get('log_level')} (must be one of {valid_log_levels})")
        valid = False

    windows = cfg.get("execute_windows", [])
    if not windows:
        logger.error("At least one execute window is required")
        valid = False
    for window in windows:
        if not isinstance(window, int) or isinstance(window, bool) or window < 1:
            logger.error(f"Execute window must be a positive integer, got {window!r}")
            valid = False

    cities = cfg.get("cities", [])
    if any(not isinstance(name, str) or not name for name in cities):
        logger.error("City names must be non-empty strings")
        valid = False
    if len(set(cities)) != len(cities):
        logger.error("City names must be unique in the scenario")
        valid = False
    known = set(cities)

    for a, b, travel_time in cfg.get("roads", []):
        if a not in known or b not in known:
            logger.error(f"Road {a} - {b} references an unknown city")
            valid = False
        if not isinstance(travel_time, int) or travel_time < 0:
            logger.error(f"Road {a} - {b} has invalid travel time {travel_time!r}")
            valid = False

    for route in cfg.get("routes", []):
        if len(route) < 2:
            logger.error(f"Route {route} must have at least two stops")
            valid = False
        unknown = [stop for stop in route if stop not in known]
        if unknown:
            logger.error(f"Route {route} references unknown cities {unknown}")
            valid = False

    for origin, destination, count in cfg.get("demand", []):
        if origin not in known or destination not in known:
            logger.error(f"Demand {origin} -> {destination} references an unknown city")
            valid = False
        if not isinstance(count, int) or count < 1:
            logger.error(f"Demand {origin} -> {destination} has invalid count {count!r}")
            valid = False

    if valid:
        logger.info("Configuration validation passed")
    else:
        logger.error("Configuration validation failed")

    return valid


# ============================================================================
# MODULE TEST
# ============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("=== Configuration Module Test ===\n")

    print("Current Configuration:")
    for key, value in get_config().items():
        print(f"  {key}: {value}")

    print("\n" + "=" * 50 + "\n")

    is_valid = validate_config()
    print(f"\nConfiguration is {'valid' if is_valid else 'invalid'}")
