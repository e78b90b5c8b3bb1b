"""CSV city list parser: header detection, delimiter sniffing, row validation."""

import logging
import math
import re

from cityforecast.models.city import CityRecord

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")
# Leading numeric prefix, the way browsers parse "48.85N" as 48.85.
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CsvParseError(Exception):
    """Raised when uploaded CSV text cannot produce a city list."""


class EmptyCsvError(CsvParseError):
    def __init__(self) -> None:
        super().__init__("CSV appears empty")


class MissingColumnsError(CsvParseError):
    def __init__(self, headers: list[str]):
        super().__init__("CSV must include City, Latitude, Longitude columns")
        self.headers = headers


class NoValidRowsError(CsvParseError):
    def __init__(self) -> None:
        super().__init__("No valid rows in CSV")


def parse_cities_csv(text: str) -> list[CityRecord]:
    """Parse uploaded CSV text into city records.

    Rows without a name or with unparseable coordinates are dropped silently;
    the remaining rows keep their original order.
    """
    rows = [r.strip() for r in _LINE_SPLIT.split(text.lstrip("\ufeff"))]
    rows = [r for r in rows if r]
    if len(rows) < 2:
        raise EmptyCsvError()

    delimiter = ";" if ";" in rows[0] else ","
    headers = [h.strip().lower() for h in rows[0].split(delimiter)]
    city_i = _find_column(headers, "city")
    country_i = _find_column(headers, "country")
    lat_i = _find_column(headers, "lat")
    lon_i = _find_column(headers, "lon")

    if city_i is None or lat_i is None or lon_i is None:
        logger.info("Headers found: %s", headers)
        raise MissingColumnsError(headers)

    cities: list[CityRecord] = []
    for line_no, row in enumerate(rows[1:], start=2):
        cols = [c.strip() for c in row.split(delimiter)]
        name = _cell(cols, city_i)
        lat = parse_float(_cell(cols, lat_i))
        lon = parse_float(_cell(cols, lon_i))
        if not name or lat is None or lon is None:
            logger.debug("Skipping CSV line %d: %r", line_no, row)
            continue
        country = _cell(cols, country_i) if country_i is not None else ""
        cities.append(
            CityRecord(name=name, country=country, latitude=lat, longitude=lon)
        )

    if not cities:
        raise NoValidRowsError()
    return cities


def parse_float(raw: str) -> float | None:
    """Parse the leading number of a cell. Returns None if absent or non-finite."""
    match = _NUMBER_PREFIX.match(raw.strip())
    if match is None:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def _find_column(headers: list[str], needle: str) -> int | None:
    for i, h in enumerate(headers):
        if needle in h:
            return i
    return None


def _cell(cols: list[str], index: int) -> str:
    return cols[index] if index < len(cols) else ""
