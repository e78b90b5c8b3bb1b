"""City and recent-city data models."""

import math
from dataclasses import dataclass

from cityforecast.config.schema import CityConfig


@dataclass(frozen=True)
class CityRecord:
    name: str
    latitude: float
    longitude: float
    country: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("City name must not be empty")
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(f"Non-finite coordinates for {self.name}")

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name

    @property
    def value(self) -> str:
        """Composite selection key "<lat>,<lon>"."""
        return f"{format_coordinate(self.latitude)},{format_coordinate(self.longitude)}"

    @classmethod
    def from_config(cls, city: CityConfig) -> "CityRecord":
        return cls(
            name=city.name,
            country=city.country,
            latitude=city.latitude,
            longitude=city.longitude,
        )


@dataclass(frozen=True)
class RecentEntry:
    name: str
    lat: str
    lon: str

    @property
    def value(self) -> str:
        return f"{self.lat},{self.lon}"

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "lat": self.lat, "lon": self.lon}


def format_coordinate(value: float | str) -> str:
    """Render a coordinate without a trailing ".0" on whole numbers."""
    if isinstance(value, str):
        return value.strip()
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
