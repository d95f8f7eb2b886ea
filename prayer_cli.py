"""Command-line front end printing prayer times for a day or a date range."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, timedelta
from typing import List, Optional, Sequence

from prayertimes import (
    AsrJuristicMethod,
    CalculationMethod,
    CalculatorParams,
    FixedTimezone,
    HighLatitudeAdjustmentMethod,
    Times,
    prayer_times_for_range,
)
from prayertimes.events import EVENT_NAMES
from prayertimes.methods import METHOD_NAMES
from prayertimes.settings import ConfigurationError, load_settings

LOGGER = logging.getLogger("prayer-times-cli")


def _format(value: Optional[timedelta]) -> str:
    if value is None:
        return "--:--"
    hours, minutes = divmod(int(value.total_seconds() // 60), 60)
    return f"{hours:02d}:{minutes:02d}"


def _as_json(times: Times) -> dict:
    payload = {"date": times.date.isoformat()}
    for name, value in times.as_dict().items():
        payload[name] = None if value is None else _format(value)
    return payload


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute Islamic prayer times")
    parser.add_argument("--lat", type=float, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, help="Longitude in degrees (east-positive)")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--to-date",
        type=date.fromisoformat,
        default=None,
        help="Last day of an inclusive range (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--tz", type=float, default=None, help="Offset from UTC in hours (default: host zone)"
    )
    parser.add_argument(
        "--dst",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether the dates are under daylight-saving time (requires --tz)",
    )
    parser.add_argument(
        "--method",
        type=CalculationMethod,
        default=CalculationMethod.mwl,
        choices=list(CalculationMethod),
        metavar="{" + ",".join(m.value for m in CalculationMethod) + "}",
        help="Calculation convention (default: MWL)",
    )
    parser.add_argument(
        "--asr",
        type=AsrJuristicMethod,
        default=AsrJuristicMethod.shafii,
        choices=list(AsrJuristicMethod),
        metavar="{" + ",".join(m.value for m in AsrJuristicMethod) + "}",
        help="Asr convention (default: Shafii)",
    )
    parser.add_argument(
        "--high-lat",
        type=HighLatitudeAdjustmentMethod,
        default=HighLatitudeAdjustmentMethod.none,
        choices=list(HighLatitudeAdjustmentMethod),
        metavar="{" + ",".join(m.value for m in HighLatitudeAdjustmentMethod) + "}",
        help="High-latitude adjustment (default: None)",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON array")
    parser.add_argument(
        "--list-methods", action="store_true", help="List calculation methods"
    )
    return parser


def run(args: argparse.Namespace) -> int:
    if args.list_methods:
        for method in CalculationMethod:
            print(f"{method.value}: {METHOD_NAMES[method]}")
        return 0

    if args.lat is None or args.lon is None:
        raise ValueError("Missing --lat/--lon.")
    if args.dst is not None and args.tz is None:
        raise ValueError("--dst/--no-dst requires --tz.")

    settings = load_settings()
    if args.dst is not None:
        tz_provider = FixedTimezone(args.tz, args.dst)
    else:
        tz_provider = settings.timezone_provider()

    from_date = args.date or date.today()
    to_date = args.to_date or from_date
    params = CalculatorParams(
        latitude=args.lat,
        longitude=args.lon,
        calculation_method=args.method,
        asr_juristic_method=args.asr,
        high_latitude_adjustment_method=args.high_lat,
    )
    results: List[Times] = prayer_times_for_range(
        from_date,
        to_date,
        params,
        timezone=args.tz,
        tz_provider=tz_provider,
        n_jobs=settings.range_jobs,
    )

    if args.json:
        print(json.dumps([_as_json(times) for times in results]))
        return 0
    print(" ".join(["date      "] + [f"{name:<7}" for name in EVENT_NAMES]).rstrip())
    for times in results:
        cells = [f"{_format(value):<7}" for value in times.as_dict().values()]
        print(" ".join([times.date.isoformat()] + cells).rstrip())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        return run(args)
    except (ValueError, ConfigurationError) as exc:
        LOGGER.debug("prayer-times failed", exc_info=exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
