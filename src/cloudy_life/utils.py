# Project: cloudy-life
# Owner: GreenUnicorn
"""
utils.py — Shared utilities: retry logic, failure logging and date labels.
"""

import time
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any

DEFAULT_LOG_PATH = Path("logs/cloudy_life.log")
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5
LOG_TAG = "[cloudy-life]"


def fmt_date(d: date | None) -> str:
    """Format a date as '1 Jan 2020', returning '—' for None."""
    if d is None:
        return "—"
    return f"{d.day} {d.strftime('%b %Y')}"


def parse_date(value: str) -> date:
    """Parse a 'YYYY-MM-DD' string into a date.

    Raises:
        ValueError: If the string is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Unrecognised date '{value}'. Use 'YYYY-MM-DD'.") from None


def with_retry(
    fn: Callable[..., Any],
    *args: Any,
    label: str = "API call",
    log_path: Path = DEFAULT_LOG_PATH,
    **kwargs: Any,
) -> Any:
    """Call a function up to MAX_ATTEMPTS times, retrying on any exception.

    Args:
        fn: Callable to invoke (usually a zero-argument closure).
        *args: Positional arguments forwarded to fn.
        label: Human-readable name for the call, used in warning messages.
        log_path: Path to the log file for recording final failures.
        **kwargs: Keyword arguments forwarded to fn.

    Returns:
        The return value of fn on success.

    Raises:
        RuntimeError: If all MAX_ATTEMPTS attempts raise exceptions.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            if attempt < MAX_ATTEMPTS:
                print(
                    f"{LOG_TAG} {label} failed (attempt {attempt}/{MAX_ATTEMPTS}): "
                    f"{e}. Retrying in {RETRY_DELAY_SECONDS}s..."
                )
                time.sleep(RETRY_DELAY_SECONDS)
            else:
                msg = f"All {MAX_ATTEMPTS} attempts failed for {label}. Check your internet connection."
                print(f"{LOG_TAG} {msg}")
                log_error(f"{label}: {e}", log_path=log_path)
                raise RuntimeError(msg) from e


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a timestamped ERROR line to the log file.

    Args:
        message: Error description to log.
        log_path: Destination log file path.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [ERROR] {message}\n")
    except OSError:
        pass  # Never crash on logging failure
