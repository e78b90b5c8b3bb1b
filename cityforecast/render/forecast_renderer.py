"""Forecast day selection, normalization, and card building."""

import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from cityforecast.models.common import utc_now
from cityforecast.models.forecast import (
    TEMP_PLACEHOLDER,
    WIND_PLACEHOLDER,
    ForecastCard,
    ForecastDay,
    Reading,
)

logger = logging.getLogger(__name__)

WEATHER_DESCRIPTIONS: dict[str, str] = {
    "clear": "Clear",
    "pcloudy": "Partly Cloudy",
    "mcloudy": "Mostly Cloudy",
    "cloudy": "Cloudy",
    "humid": "Humid",
    "ishower": "Isolated Showers",
    "oshower": "Occasional Showers",
    "lightrain": "Light Rain",
    "rain": "Rain",
    "rainsnow": "Rain & Snow",
    "lightsnow": "Light Snow",
    "snow": "Snow",
    "tsrain": "Thunderstorm & Rain",
    "tstorm": "Thunderstorm",
    "fog": "Fog",
    "windy": "Windy",
}

DEFAULT_ICON_CODE = "clear"
WIND_FIELDS = ("wind10m_max", "wind10m_avg", "wind")


def select_days(
    dataseries: list[dict], count: int = 7, now: datetime | None = None
) -> list[tuple[date, dict]]:
    """Pick up to `count` entries, one per calendar day.

    Entries are labelled by their explicit date or by now + timepoint hours.
    When fewer than `count` distinct days are found, the first `count` raw
    entries are used instead with synthetic dates starting today, discarding
    the deduplicated partial result.
    """
    if now is None:
        now = utc_now()

    by_day: list[tuple[date, dict]] = []
    seen: set[date] = set()
    for entry in dataseries:
        label = entry_date(entry, now)
        if label is None:
            continue
        if label not in seen:
            seen.add(label)
            by_day.append((label, entry))
        if len(by_day) >= count:
            break

    if len(by_day) >= count:
        return by_day[:count]

    logger.debug(
        "Only %d distinct days in %d entries, using sequential dates",
        len(by_day), len(dataseries),
    )
    today = now.date()
    return [
        (today + timedelta(days=i), entry)
        for i, entry in enumerate(dataseries[:count])
    ]


def entry_date(entry: dict, now: datetime) -> date | None:
    """Derive the calendar day of a raw entry, or None if it carries neither field."""
    raw = entry.get("date")
    if raw:
        return _parse_date(raw)
    timepoint = entry.get("timepoint")
    if timepoint is None:
        return None
    try:
        return (now + timedelta(hours=float(timepoint))).date()
    except (TypeError, ValueError):
        return None


def _parse_date(raw: object) -> date | None:
    # 7Timer sends dates as YYYYMMDD integers.
    text = str(raw).strip()
    try:
        if len(text) == 8 and text.isdigit():
            return datetime.strptime(text, "%Y%m%d").date()
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def normalize_day(entry: dict, day: date) -> ForecastDay:
    """Collapse the alternative raw shapes into one ForecastDay."""
    code = entry.get("weather")
    min_temp, max_temp = _temperatures(entry.get("temp2m"))
    return ForecastDay(
        date=day,
        weather_code="" if code is None else str(code),
        min_temp=min_temp,
        max_temp=max_temp,
        wind_speed=_wind(entry),
    )


def _temperatures(temp2m: object) -> tuple[Reading, Reading]:
    if isinstance(temp2m, dict):
        return (
            _reading(temp2m.get("min"), TEMP_PLACEHOLDER),
            _reading(temp2m.get("max"), TEMP_PLACEHOLDER),
        )
    value = _reading(temp2m, TEMP_PLACEHOLDER)
    return value, value


def _wind(entry: dict) -> Reading:
    for field in WIND_FIELDS:
        if entry.get(field) is not None:
            return _reading(entry[field], WIND_PLACEHOLDER)
    return WIND_PLACEHOLDER


def _reading(value: object, placeholder: str) -> Reading:
    if value is None or isinstance(value, bool):
        return placeholder
    if isinstance(value, (int, float, str)):
        return value if value != "" else placeholder
    return placeholder


def icon_path(code: str | None, prefix: str = "images") -> str:
    if code in WEATHER_DESCRIPTIONS:
        return f"{prefix}/{code}.png"
    return f"{prefix}/{DEFAULT_ICON_CODE}.png"


def describe_weather(code: str | None) -> str:
    if not code:
        return ""
    return WEATHER_DESCRIPTIONS.get(code, code)


def format_date(day: date) -> str:
    """Short weekday/day/month label, e.g. "Mon 1 Jan"."""
    return f"{day:%a} {day.day} {day:%b}"


def format_reading(value: Reading) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_card(
    day: ForecastDay, icon_prefix: str = "images", images_dir: Path | None = None
) -> ForecastCard:
    fallback = f"{icon_prefix}/{DEFAULT_ICON_CODE}.png"
    icon = icon_path(day.weather_code, icon_prefix)
    if images_dir is not None and not (images_dir / Path(icon).name).exists():
        logger.warning("Icon %s missing in %s, using %s", icon, images_dir, fallback)
        icon = fallback
    return ForecastCard(
        date_text=format_date(day.date),
        icon=icon,
        fallback_icon=fallback,
        description=describe_weather(day.weather_code),
        temperature_text=(
            f"{format_reading(day.min_temp)}°C — {format_reading(day.max_temp)}°C"
        ),
        wind_text=f"Wind: {format_reading(day.wind_speed)} m/s",
    )


class ForecastRenderer:
    """Turns a raw dataseries into the full set of display cards."""

    def __init__(
        self,
        days: int = 7,
        icon_prefix: str = "images",
        images_dir: str | Path | None = None,
    ):
        self.days = days
        self.icon_prefix = icon_prefix
        self.images_dir = Path(images_dir) if images_dir is not None else None

    def normalize(
        self, dataseries: list[dict], now: datetime | None = None
    ) -> list[ForecastDay]:
        return [
            normalize_day(entry, day)
            for day, entry in select_days(dataseries, self.days, now)
        ]

    def render(
        self, dataseries: list[dict], now: datetime | None = None
    ) -> list[ForecastCard]:
        return [
            build_card(d, self.icon_prefix, self.images_dir)
            for d in self.normalize(dataseries, now)
        ]
