"""Event handlers tying the city selector, forecast client, and renderer together."""

import logging
from pathlib import Path

from cityforecast.app.state import AppState
from cityforecast.app.status import StatusNotifier
from cityforecast.app.viewmodel import ViewModel
from cityforecast.ingest.csv_parser import CsvParseError, parse_cities_csv
from cityforecast.ingest.geolocator import GeolocationError, IpGeolocator
from cityforecast.ingest.seventimer_client import (
    ForecastUnavailableError,
    SevenTimerClient,
)
from cityforecast.models.city import CityRecord
from cityforecast.render.forecast_renderer import ForecastRenderer
from cityforecast.render.formatters import FAILED_PLACEHOLDER, LOADING_PLACEHOLDER

logger = logging.getLogger(__name__)

MY_LOCATION = "Your Location"


class ForecastController:
    """UI controller: every public method is one user-triggered event.

    Failures never escape a handler; they end up as status text and an inert
    view. Concurrent fetches are not cancelled, so the last one to finish
    owns the rendered cards.
    """

    def __init__(
        self,
        state: AppState,
        client: SevenTimerClient,
        renderer: ForecastRenderer,
        notifier: StatusNotifier,
        view: ViewModel,
        geolocator: IpGeolocator | None = None,
    ):
        self.state = state
        self.client = client
        self.renderer = renderer
        self.notifier = notifier
        self.view = view
        self.geolocator = geolocator
        if self.notifier.on_change is None:
            self.notifier.on_change = self.view.show_status

    def start(self, default_cities: list[CityRecord]) -> None:
        self.state.recent.load()
        self._apply_cities(default_cities)
        self.notifier.notify("Loaded default cities — upload CSV to replace list.")

    # --- City list ---

    def on_csv_uploaded(self, text: str) -> bool:
        try:
            cities = parse_cities_csv(text)
        except CsvParseError as e:
            self.notifier.notify(str(e))
            return False
        except Exception as e:
            logger.exception("Unexpected CSV parse failure")
            self.notifier.notify(f"Error parsing CSV: {e}")
            return False

        self._apply_cities(cities)
        self.notifier.notify(f"✅ Cities loaded: {len(cities)}")
        return True

    def on_csv_file(self, path: str | Path | None) -> bool:
        if not path:
            self.notifier.notify("No file selected")
            return False
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            self.notifier.notify(f"Error parsing CSV: {e}")
            return False
        return self.on_csv_uploaded(text)

    def on_search(self, term: str) -> int:
        visible = self.state.catalog.filter(term)
        self._show_options()
        return visible

    def on_select(self, value: str) -> bool:
        try:
            self.state.catalog.select(value)
        except KeyError:
            self.notifier.notify("Please choose a city")
            return False
        self._show_options()
        return True

    def on_select_name(self, name: str) -> bool:
        try:
            self.state.catalog.select_label(name)
        except KeyError:
            self.notifier.notify("Please choose a city")
            return False
        self._show_options()
        return True

    # --- Forecast ---

    async def on_get_weather(self) -> bool:
        option = self.state.catalog.selected_option()
        if option is None:
            self.notifier.notify("Please choose a city")
            return False
        lat, lon = (s.strip() for s in option.value.split(",", 1))
        ok = await self.fetch_and_render(lat, lon, option.label)
        self.state.remember(option.label, lat, lon)
        return ok

    async def on_my_location(self) -> bool:
        if self.geolocator is None:
            self.notifier.notify("Geolocation not supported")
            return False
        self.notifier.notify("Getting your location…")
        try:
            lat, lon = await self.geolocator.locate()
        except GeolocationError as e:
            self.notifier.notify(f"Location error: {e}")
            return False
        lat_s, lon_s = f"{lat:.2f}", f"{lon:.2f}"
        ok = await self.fetch_and_render(lat_s, lon_s, MY_LOCATION)
        self.state.remember(MY_LOCATION, lat_s, lon_s)
        return ok

    async def fetch_and_render(self, lat: float | str, lon: float | str, name: str) -> bool:
        self.view.show_placeholder(LOADING_PLACEHOLDER)
        self.notifier.notify(f"Fetching forecast for {name} …")
        try:
            series = await self.client.get_dataseries(lat, lon)
            cards = self.renderer.render(series)
        except ForecastUnavailableError as e:
            logger.error("Forecast for %s failed: %s", name, e)
            return self._fail(e)
        except Exception as e:
            logger.exception("Forecast rendering for %s failed", name)
            return self._fail(e)

        self.view.show_cards(cards, name)
        self.notifier.notify(f"{self.renderer.days}-day forecast for {name}")
        return True

    def _fail(self, error: Exception) -> bool:
        self.view.show_placeholder(FAILED_PLACEHOLDER)
        self.notifier.notify(f"Error: {error}")
        return False

    def _apply_cities(self, cities: list[CityRecord]) -> None:
        self.state.replace_cities(cities)
        self._show_options()

    def _show_options(self) -> None:
        catalog = self.state.catalog
        self.view.show_options(catalog.options, catalog.selected)
