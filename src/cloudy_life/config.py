# Project: cloudy-life
# Owner: GreenUnicorn
"""
config.py — Load and validate the TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing. TOML dates (1998-04-01) are parsed
straight into datetime.date, which is what the [[periods]] table uses.
"""

import tomllib
from datetime import date
from pathlib import Path

from cloudy_life.categories import MIN_DAYS_PER_YEAR, MIN_TOTAL_DAYS
from cloudy_life.utils import DEFAULT_LOG_PATH


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "report": {
        "min_days_per_year": MIN_DAYS_PER_YEAR,
        "min_total_days": MIN_TOTAL_DAYS,
    },
    "log": {
        "path": str(DEFAULT_LOG_PATH),
    },
}


def default_config() -> dict:
    """Return a fresh copy of the built-in defaults."""
    return {
        "report": dict(DEFAULTS["report"]),
        "log": dict(DEFAULTS["log"]),
        "periods": [],
    }


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load and validate a TOML configuration file.

    Missing sections fall back to DEFAULTS.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If a section or key has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and list the places you have lived."
        )

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    config = default_config()
    config["report"].update(raw.get("report", {}))
    config["log"].update(raw.get("log", {}))
    config["periods"] = raw.get("periods", [])

    _validate(config)
    return config


def _validate(config: dict) -> None:
    """Validate the merged config.

    Expected config schema::

        [report]
        min_days_per_year = <int>   # timeline years below this are gaps
        min_total_days    = <int>   # reports below this are not shown

        [log]
        path = <str>                # relative or absolute path to the log file

        [[periods]]                 # one table per place, in order
        start    = <date>           # e.g. 1998-04-01
        end      = <date>
        location = <str>            # e.g. "London"

    Args:
        config: Merged config dict.

    Raises:
        ValueError: If any key is missing or has the wrong type.
    """
    for key in ("min_days_per_year", "min_total_days"):
        value = config["report"][key]
        if not isinstance(value, int) or value < 0:
            raise ValueError(f"[report].{key} must be a non-negative integer")

    if not isinstance(config["log"]["path"], str):
        raise ValueError("[log].path must be a string")

    if not isinstance(config["periods"], list):
        raise ValueError("[[periods]] must be an array of tables")

    for i, period in enumerate(config["periods"], start=1):
        for key in ("start", "end", "location"):
            if key not in period:
                raise ValueError(f"Missing required config key: [[periods]] #{i}.{key}")
        for key in ("start", "end"):
            if not isinstance(period[key], date):
                raise ValueError(f"[[periods]] #{i}.{key} must be a date (YYYY-MM-DD)")
        if not isinstance(period["location"], str):
            raise ValueError(f"[[periods]] #{i}.location must be a string")
