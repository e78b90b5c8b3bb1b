"""Bounded most-recently-used list of viewed locations."""

import json
import logging
import sqlite3

from cityforecast.models.city import RecentEntry, format_coordinate
from cityforecast.storage import kv_repo

logger = logging.getLogger(__name__)

RECENT_KEY = "recentCities"
MAX_RECENT = 5


class RecentCitiesStore:
    """MRU list keyed by exact name, persisted as one JSON key-value entry."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        key: str = RECENT_KEY,
        max_entries: int = MAX_RECENT,
    ):
        self.conn = conn
        self.key = key
        self.max_entries = max_entries
        self._entries: list[RecentEntry] = []

    @property
    def entries(self) -> list[RecentEntry]:
        return list(self._entries)

    def load(self) -> list[RecentEntry]:
        raw = kv_repo.get_value(self.conn, self.key)
        self._entries = _decode(raw) if raw else []
        return self.entries

    def add(self, name: str, lat: float | str, lon: float | str) -> list[RecentEntry]:
        entry = RecentEntry(
            name=name, lat=format_coordinate(lat), lon=format_coordinate(lon)
        )
        entries = [e for e in self._entries if e.name != name]
        entries.insert(0, entry)
        self._entries = entries[: self.max_entries]
        self._save()
        return self.entries

    def clear(self) -> None:
        self._entries = []
        kv_repo.delete_value(self.conn, self.key)

    def _save(self) -> None:
        kv_repo.set_value(
            self.conn, self.key, json.dumps([e.to_dict() for e in self._entries])
        )


def _decode(raw: str) -> list[RecentEntry]:
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed recent cities entry: %r", raw)
        return []
    if not isinstance(items, list):
        logger.warning("Ignoring malformed recent cities entry: %r", raw)
        return []
    entries = []
    for item in items:
        try:
            entries.append(
                RecentEntry(
                    name=str(item["name"]),
                    lat=format_coordinate(item["lat"]),
                    lon=format_coordinate(item["lon"]),
                )
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed recent city: %r", item)
    return entries
