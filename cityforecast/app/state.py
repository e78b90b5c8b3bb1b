"""Application state owned by the controller."""

from cityforecast.app.catalog import CityCatalog
from cityforecast.app.recent import RecentCitiesStore
from cityforecast.models.city import CityRecord, RecentEntry


class AppState:
    """Active city list, recent-cities store, and the selector built from both."""

    def __init__(self, recent: RecentCitiesStore, cities: list[CityRecord] | None = None):
        self.recent = recent
        self.catalog = CityCatalog()
        self._cities: list[CityRecord] = list(cities or [])

    @property
    def cities(self) -> list[CityRecord]:
        return list(self._cities)

    @property
    def recent_entries(self) -> list[RecentEntry]:
        return self.recent.entries

    def replace_cities(self, cities: list[CityRecord]) -> None:
        """Swap in a new city list and rebuild the selector."""
        self._cities = list(cities)
        self.catalog.populate(self._cities, self.recent.entries)

    def remember(self, name: str, lat: float | str, lon: float | str) -> None:
        self.recent.add(name, lat, lon)
