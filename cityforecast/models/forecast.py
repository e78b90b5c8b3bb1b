"""Forecast data models."""

from dataclasses import dataclass
from datetime import date

TEMP_PLACEHOLDER = "-"
WIND_PLACEHOLDER = "—"

Reading = float | int | str


@dataclass(frozen=True)
class ForecastDay:
    """One canonical forecast day, normalized from a raw dataseries entry."""

    date: date
    weather_code: str
    min_temp: Reading
    max_temp: Reading
    wind_speed: Reading


@dataclass(frozen=True)
class ForecastCard:
    date_text: str
    icon: str
    fallback_icon: str
    description: str
    temperature_text: str
    wind_text: str
