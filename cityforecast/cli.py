"""CLI entry point for the city forecast viewer."""

import argparse
import asyncio
import logging
from pathlib import Path

from cityforecast.app.catalog import RECENT_GROUP
from cityforecast.app.controller import ForecastController
from cityforecast.app.recent import RecentCitiesStore
from cityforecast.app.state import AppState
from cityforecast.app.status import StatusNotifier
from cityforecast.app.viewmodel import ViewModel, ViewState
from cityforecast.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from cityforecast.config.schema import AppConfig
from cityforecast.ingest.geolocator import IpGeolocator
from cityforecast.ingest.seventimer_client import SevenTimerClient
from cityforecast.models.city import CityRecord
from cityforecast.render.forecast_renderer import ForecastRenderer
from cityforecast.render.formatters import (
    format_cards_html,
    format_cards_text,
    format_placeholder_html,
)
from cityforecast.storage.database import open_database

DEFAULT_CONFIG = "config/default.yaml"
DEFAULT_DB = "data/cityforecast.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cityforecast",
        description="7-day city weather forecasts from 7Timer",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # cities
    cities_p = sub.add_parser("cities", help="List selectable cities")
    cities_p.add_argument("--csv", help="CSV file replacing the default list")
    cities_p.add_argument("--filter", default="", help="Show matching labels only")

    # forecast
    fc_p = sub.add_parser("forecast", help="Show the forecast for a city")
    fc_p.add_argument("--csv", help="CSV file replacing the default list")
    fc_p.add_argument("--city", help="City name or label from the list")
    fc_p.add_argument("--lat", type=float, help="Latitude")
    fc_p.add_argument("--lon", type=float, help="Longitude")
    fc_p.add_argument("--name", help="Display name for --lat/--lon")
    fc_p.add_argument("--html", help="Also write the cards as HTML to this file")

    # locate
    loc_p = sub.add_parser("locate", help="Show the forecast for your location")
    loc_p.add_argument("--html", help="Also write the cards as HTML to this file")

    # recent
    recent_p = sub.add_parser("recent", help="List recently viewed cities")
    recent_p.add_argument("--clear", action="store_true", help="Forget all entries")

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
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "cities":
        return _cmd_cities(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "locate":
        return _cmd_locate(config, args)
    elif args.command == "recent":
        return _cmd_recent(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


class TerminalView:
    """Prints each new status message once; fades are not redrawn."""

    def __init__(self) -> None:
        self._last_status = ""

    def __call__(self, state: ViewState) -> None:
        text = state.status.text
        if text and text != self._last_status:
            self._last_status = text
            print(text)


def build_controller(config: AppConfig, db_path: str | Path) -> ForecastController:
    conn = open_database(db_path)
    recent = RecentCitiesStore(
        conn, key=config.recent.storage_key, max_entries=config.recent.max_entries
    )
    view = ViewModel()
    view.subscribe(TerminalView())
    controller = ForecastController(
        state=AppState(recent),
        client=SevenTimerClient(
            base_url=config.api.base_url,
            product=config.api.product,
            output=config.api.output,
            timeout=config.api.timeout_seconds,
        ),
        renderer=ForecastRenderer(
            days=config.forecast.days,
            icon_prefix=config.forecast.icon_prefix,
            images_dir=config.forecast.images_dir,
        ),
        notifier=StatusNotifier(
            fade_after=config.status.fade_after_seconds,
            faded_opacity=config.status.faded_opacity,
        ),
        view=view,
        geolocator=IpGeolocator(
            url=config.geo.url, timeout=config.geo.timeout_seconds
        ),
    )
    controller.start([CityRecord.from_config(c) for c in config.cities])
    return controller


def _close(controller: ForecastController) -> None:
    controller.notifier.cancel()
    controller.state.recent.conn.close()


def _cmd_cities(config, args) -> int:
    controller = build_controller(config, args.db)
    try:
        if args.csv and not controller.on_csv_file(args.csv):
            return 1
        if args.filter:
            controller.on_search(args.filter)
        group = ""
        for opt in controller.state.catalog.visible_options:
            if opt.group != group:
                group = opt.group
                print(f"-- {group} --")
            print(f"  {opt.label}  ({opt.value})")
        return 0
    finally:
        _close(controller)


def _cmd_forecast(config, args) -> int:
    if args.city is None and (args.lat is None or args.lon is None):
        print("Error: use --city NAME or --lat LAT --lon LON")
        return 1

    controller = build_controller(config, args.db)
    try:
        if args.csv and not controller.on_csv_file(args.csv):
            return 1
        if args.city is not None:
            if not controller.on_select_name(args.city):
                return 1
            ok = asyncio.run(controller.on_get_weather())
        else:
            name = args.name or f"{args.lat}, {args.lon}"
            ok = asyncio.run(
                controller.fetch_and_render(args.lat, args.lon, name)
            )
            controller.state.remember(name, args.lat, args.lon)
        return _print_result(controller, ok, args.html)
    finally:
        _close(controller)


def _cmd_locate(config, args) -> int:
    controller = build_controller(config, args.db)
    try:
        ok = asyncio.run(controller.on_my_location())
        return _print_result(controller, ok, args.html)
    finally:
        _close(controller)


def _print_result(controller: ForecastController, ok: bool, html_path: str | None) -> int:
    state = controller.view.state
    if not ok:
        if state.placeholder:
            print(state.placeholder)
            if html_path:
                Path(html_path).write_text(
                    format_placeholder_html(state.placeholder), encoding="utf-8"
                )
        return 1
    print(format_cards_text(state.cards, title=state.location_name))
    if html_path:
        Path(html_path).write_text(format_cards_html(state.cards), encoding="utf-8")
    return 0


def _cmd_recent(config, args) -> int:
    conn = open_database(args.db)
    try:
        store = RecentCitiesStore(
            conn, key=config.recent.storage_key, max_entries=config.recent.max_entries
        )
        if args.clear:
            store.clear()
            print("Recent cities cleared")
            return 0
        entries = store.load()
        if not entries:
            print("No recent cities")
            return 0
        print(f"-- {RECENT_GROUP} --")
        for e in entries:
            print(f"  {e.name}  ({e.lat},{e.lon})")
        return 0
    finally:
        conn.close()


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
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            save_config(new_config, args.config)
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except (KeyError, IndexError, TypeError, ValueError, OSError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
