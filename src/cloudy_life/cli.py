# Project: cloudy-life
# Owner: GreenUnicorn
"""
cli.py — Command-line interface for cloudy-life.

We use argparse (stdlib) rather than click: two subcommands don't need
an extra dependency.

Commands:
  cloudy-life report   — build a lifetime cloud cover report
  cloudy-life search   — look up location suggestions for a place name
"""

import argparse
from pathlib import Path

from cloudy_life.chart import render_breakdown_bar, render_timeline, render_yearly_chart
from cloudy_life.config import DEFAULT_CONFIG_PATH, default_config, load_config
from cloudy_life.geocode import LocationNotFoundError, search_locations
from cloudy_life.periods import InvalidPeriodError
from cloudy_life.pipeline import build_report
from cloudy_life.report import is_reliable, terminal_summary
from cloudy_life.utils import parse_date


def _periods_from_args(raw_periods: list[list[str]]) -> list[dict]:
    """Convert repeated --period START END PLACE triples into period dicts."""
    periods = []
    for start, end, place in raw_periods:
        periods.append({
            "start": parse_date(start),
            "end": parse_date(end),
            "location": place,
        })
    return periods


def _load_config_for(args) -> dict:
    """Config from --config, else config.toml if present, else defaults."""
    if args.config:
        return load_config(Path(args.config))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def cmd_report(args) -> None:
    """Fetch every period, aggregate, and print the report."""
    try:
        config = _load_config_for(args)
        if args.period:
            periods = _periods_from_args(args.period)
        else:
            periods = [dict(p) for p in config["periods"]]
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    if not periods:
        print("[error] No periods given. Use --period START END PLACE or add [[periods]] to config.toml.")
        raise SystemExit(1)

    try:
        report = build_report(periods, config=config, verbose=True)
    except InvalidPeriodError as e:
        print(f"[error] {e}")
        raise SystemExit(1)
    except LocationNotFoundError as e:
        print(f"[error] {e}")
        raise SystemExit(1)
    except RuntimeError as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    min_total_days = config["report"]["min_total_days"]
    print()
    print(terminal_summary(report, min_total_days=min_total_days))

    if not is_reliable(report, min_total_days):
        return

    print()
    print(render_breakdown_bar(report["breakdown"]))
    print()
    print(render_timeline(report["timeline"], report["color_range"]))
    if args.yearly:
        print()
        print(render_yearly_chart(report["timeline"]))


def cmd_search(args) -> None:
    """Print location suggestions for a partial place name."""
    try:
        results = search_locations(args.query, count=args.count)
    except RuntimeError as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    if not results:
        print("No locations found. Try a different search term.")
        return

    for loc in results:
        print(f"📍 {loc['display_name']}  ({loc['latitude']:.2f}, {loc['longitude']:.2f})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudy-life",
        description="How cloudy was your life? Lifetime cloud cover from Open-Meteo",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_report = subparsers.add_parser("report", help="Build a lifetime cloud cover report")
    p_report.add_argument(
        "--period",
        nargs=3,
        action="append",
        metavar=("START", "END", "PLACE"),
        default=None,
        help='A place you lived, e.g. --period 1990-01-01 2004-08-31 "London". Repeat in order.',
    )
    p_report.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="TOML config file (default: config.toml if present)",
    )
    p_report.add_argument(
        "--yearly",
        action="store_true",
        help="Also print a bar chart of every year",
    )

    p_search = subparsers.add_parser("search", help="Look up location suggestions")
    p_search.add_argument("query", metavar="PLACE", help='Partial place name, e.g. "Lond"')
    p_search.add_argument("--count", type=int, default=5, help="Number of suggestions (default: 5)")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    commands = {
        "report": cmd_report,
        "search": cmd_search,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
