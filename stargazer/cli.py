"""CLI entry point for the stargazing index calendar."""

import argparse
import logging
from datetime import date

from stargazer.config.loader import (
    config_hash,
    default_config,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from stargazer.ingest.horizon import site_today
from stargazer.ingest.open_meteo_client import ForecastFetchError
from stargazer.pipeline.month_pipeline import build_pipeline, shift_month
from stargazer.reporting.formatters import (
    format_day_text,
    format_month_chat,
    format_month_json,
    format_month_text,
)

FORMATTERS = {
    "text": format_month_text,
    "json": format_month_json,
    "chat": format_month_chat,
}

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stargazer",
        description="Nightly stargazing index from Open-Meteo forecasts",
    )
    parser.add_argument(
        "--config", default=None, help="Config YAML path (defaults built in)"
    )

    sub = parser.add_subparsers(dest="command")

    # month
    month_p = sub.add_parser("month", help="Score every night of a month")
    month_p.add_argument(
        "month", nargs="?", default=None, help="YYYY-MM (default: current month)"
    )
    month_p.add_argument(
        "--shift", type=int, default=0,
        help="Move N months from the given month (negative for earlier)",
    )
    month_p.add_argument(
        "--format", choices=sorted(FORMATTERS), default="text", dest="fmt"
    )

    # day
    day_p = sub.add_parser("day", help="Show one night's detail")
    day_p.add_argument("date", help="YYYY-MM-DD")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else default_config()
    logger.info(
        "Using config %s (%s)", args.config or "<built-in>", config_hash(config)
    )

    if args.command == "month":
        return _cmd_month(config, args)
    elif args.command == "day":
        return _cmd_day(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_month(config, args) -> int:
    if args.month is None:
        today = site_today(config.site.timezone)
        year, month = today.year, today.month
    else:
        try:
            year, month = _parse_year_month(args.month)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    year, month = shift_month(year, month, args.shift)

    pipeline = build_pipeline(config)
    try:
        report = pipeline.run(year, month)
    except ForecastFetchError as e:
        print(f"Error: {e.reason}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print(FORMATTERS[args.fmt](report))
    return 0


def _cmd_day(config, args) -> int:
    try:
        target = date.fromisoformat(args.date)
    except ValueError:
        print("Error: use YYYY-MM-DD format")
        return 1

    pipeline = build_pipeline(config)
    try:
        result = pipeline.day(target.year, target.month, target.day)
    except ForecastFetchError as e:
        print(f"Error: {e.reason}")
        return 1
    print(format_day_text(result, pipeline.observation_hour))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        if args.config is None:
            print("Error: config set needs --config PATH to write to")
            return 1
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except Exception as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _parse_year_month(value: str) -> tuple[int, int]:
    try:
        year_s, month_s = value.split("-", 1)
        year, month = int(year_s), int(month_s)
    except ValueError:
        raise ValueError(f"expected YYYY-MM, got {value!r}") from None
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return year, month


if __name__ == "__main__":
    raise SystemExit(main())
