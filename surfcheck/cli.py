"""CLI entry point for the surf alert checker."""

import argparse
import logging

import httpx
from pydantic import ValidationError

from surfcheck.alerts.buoy_check import compare_buoy_to_forecast
from surfcheck.config.loader import find_config_path, load_config
from surfcheck.config.schema import SurfCheckConfig
from surfcheck.ingest.buoy_fetcher import BuoyFetcher
from surfcheck.ingest.forecast_fetcher import SurflineForecastFetcher
from surfcheck.ingest.forecast_file import FileForecastSource, ForecastFileError
from surfcheck.ingest.ndbc_client import NdbcClient
from surfcheck.ingest.surfline_client import SurflineClient
from surfcheck.models.common import local_now
from surfcheck.pipeline.check_pipeline import CheckPipeline, ForecastSource
from surfcheck.reporting.formatters import (
    format_buoy_comparison,
    format_buoy_reading,
    format_cron,
    format_debug,
    format_forecast_day,
    format_summary_json,
)
from surfcheck.storage.lock import StateLock, StateLockedError
from surfcheck.storage.state_store import commit_cycle, load_state

MODES = ("cron", "debug", "json")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="surfcheck",
        description="Surf forecast alert checker",
    )
    parser.add_argument("--config", default=None, help="Config YAML/JSON path")
    parser.add_argument("--state", default=None, help="Alert state JSON path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # check
    check_p = sub.add_parser("check", help="Run one alert check cycle")
    check_p.add_argument("--mode", choices=MODES, default="cron")
    check_p.add_argument(
        "--dry-run", action="store_true", help="Do not update alert state"
    )
    check_p.add_argument(
        "--forecast-file", default=None, help="Read forecasts from a JSON file"
    )

    # forecast
    forecast_p = sub.add_parser("forecast", help="Show forecasts for all spots")
    forecast_p.add_argument("--forecast-file", default=None)

    # buoy
    buoy_p = sub.add_parser("buoy", help="Show the latest NDBC buoy reading")
    buoy_p.add_argument("--station", default=None, help="NDBC station id")
    buoy_p.add_argument(
        "--compare", action="store_true",
        help="Compare against today's forecast for each spot",
    )
    buoy_p.add_argument("--forecast-file", default=None)

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")

    # state show / state prune
    state_p = sub.add_parser("state", help="Alert state operations")
    state_sub = state_p.add_subparsers(dest="state_command")
    state_sub.add_parser("show", help="Display recorded alerts")
    state_sub.add_parser("prune", help="Drop records past retention")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        level = logging.DEBUG
    elif getattr(args, "mode", None) == "cron":
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (OSError, ValidationError) as e:
        print(f"Error: cannot load config: {e}")
        return 1
    if args.state:
        config = config.model_copy(
            update={"state": config.state.model_copy(update={"path": args.state})}
        )

    if args.command == "check":
        return _cmd_check(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "buoy":
        return _cmd_buoy(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "state":
        return _cmd_state(config, args)
    else:
        parser.print_help()
        return 1


def _make_source(config: SurfCheckConfig, forecast_file: str | None) -> ForecastSource:
    if forecast_file:
        return FileForecastSource(forecast_file)
    sc = config.surfline
    client = SurflineClient(
        base_url=sc.base_url,
        timeout=sc.timeout,
        max_retries=sc.max_retries,
        retry_base_delay=sc.retry_base_delay,
    )
    return SurflineForecastFetcher(client, days=sc.days)


def _cmd_check(config: SurfCheckConfig, args) -> int:
    source = _make_source(config, args.forecast_file)
    pipeline = CheckPipeline(config, source)
    summary = pipeline.run(persist=not args.dry_run)

    if args.mode == "json":
        print(format_summary_json(summary))
    elif args.mode == "debug":
        print(format_debug(summary, {s.id: s.name for s in config.spots}))
    else:
        output = format_cron(summary)
        if output:
            print(output)
    return 0 if not summary.errors else 1


def _cmd_forecast(config: SurfCheckConfig, args) -> int:
    source = _make_source(config, args.forecast_file)
    status = 0
    for spot in config.spots:
        if not spot.enabled:
            continue
        print(spot.name)
        print("-" * 40)
        try:
            for day in source.fetch(spot):
                print(format_forecast_day(day))
        except ForecastFileError as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            logging.getLogger(__name__).exception("Forecast fetch failed")
            print(f"Error fetching {spot.name}: {e}")
            status = 1
        print("")
    return status


def _cmd_buoy(config: SurfCheckConfig, args) -> int:
    bc = config.buoy
    station = args.station or bc.station_id
    client = NdbcClient(
        base_url=bc.base_url,
        timeout=bc.timeout,
        max_retries=bc.max_retries,
        retry_base_delay=bc.retry_base_delay,
    )
    try:
        reading = BuoyFetcher(client).latest(station)
    except httpx.HTTPError as e:
        print(f"Error fetching buoy {station}: {e}")
        return 1
    if reading is None:
        print(f"No readings from buoy {station}")
        return 1
    print(format_buoy_reading(reading, bc.name if station == bc.station_id else ""))
    if not args.compare:
        return 0

    print("")
    today = local_now(config.timezone).date()
    source = _make_source(config, args.forecast_file)
    status = 0
    for spot in config.spots:
        if not spot.enabled:
            continue
        try:
            days = source.fetch(spot)
        except ForecastFileError as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            logging.getLogger(__name__).exception("Forecast fetch failed")
            print(f"Error fetching {spot.name}: {e}")
            status = 1
            continue
        day = next((d for d in days if d.date == today), None)
        if day is None:
            print(f"{spot.name}: no forecast for today")
            continue
        comparison = compare_buoy_to_forecast(reading, day.wave_min, day.wave_max)
        print(format_buoy_comparison(spot.name, comparison))
    return status


def _cmd_config(config: SurfCheckConfig, args) -> int:
    if args.config_command == "show":
        path = args.config or find_config_path()
        print(f"# source: {path or 'built-in defaults'}")
        print(config.model_dump_json(indent=2))
        return 0
    print("Use: config show")
    return 1


def _cmd_state(config: SurfCheckConfig, args) -> int:
    path = config.state.path
    if args.state_command == "show":
        state = load_state(path)
        print(f"Last check: {state.last_check}")
        print(f"Alerts recorded: {len(state.alerts_sent)}")
        for key, sent_at in sorted(state.alerts_sent.items()):
            print(f"  {key}  {sent_at}")
        return 0
    elif args.state_command == "prune":
        try:
            with StateLock(path):
                state = load_state(path)
                before = len(state.alerts_sent)
                commit_cycle(
                    state, [], local_now(config.timezone), path,
                    config.state.retention_days,
                )
        except StateLockedError as e:
            print(f"Error: {e}")
            return 1
        print(f"Pruned {before - len(state.alerts_sent)} record(s)")
        return 0
    print("Use: state show | state prune")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
