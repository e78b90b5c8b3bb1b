"""Selectable city options with a recent-cities group and text filter."""

from dataclasses import dataclass

from cityforecast.models.city import CityRecord, RecentEntry

RECENT_GROUP = "Recent Cities"


@dataclass
class SelectOption:
    value: str
    label: str
    group: str = ""
    hidden: bool = False


class CityCatalog:
    def __init__(self) -> None:
        self._options: list[SelectOption] = []
        self._selected_index: int | None = None
        self._filter: str = ""

    @property
    def options(self) -> list[SelectOption]:
        return list(self._options)

    @property
    def visible_options(self) -> list[SelectOption]:
        return [o for o in self._options if not o.hidden]

    @property
    def filter_term(self) -> str:
        return self._filter

    @property
    def selected(self) -> str:
        opt = self.selected_option()
        return opt.value if opt is not None else ""

    def populate(
        self, cities: list[CityRecord], recent: list[RecentEntry] | None = None
    ) -> None:
        """Replace the selectable set; recent entries follow as their own group."""
        options = [SelectOption(value=c.value, label=c.label) for c in cities]
        options.extend(
            SelectOption(value=r.value, label=r.name, group=RECENT_GROUP)
            for r in recent or []
        )
        self._options = options
        self._selected_index = None
        self._filter = ""

    def filter(self, term: str) -> int:
        """Hide options whose label lacks `term`. Returns the visible count."""
        self._filter = term
        needle = term.lower()
        for opt in self._options:
            opt.hidden = needle not in opt.label.lower()
        return len(self.visible_options)

    def select(self, value: str) -> SelectOption:
        """Select the first option carrying `value`."""
        for i, opt in enumerate(self._options):
            if opt.value == value:
                return self.select_index(i)
        raise KeyError(f"No option with value {value!r}")

    def select_index(self, index: int) -> SelectOption:
        if not 0 <= index < len(self._options):
            raise KeyError(f"No option at index {index}")
        self._selected_index = index
        return self._options[index]

    def select_label(self, label: str) -> SelectOption:
        """Select the first option whose label (or bare city name) matches."""
        needle = label.strip().lower()
        for i, opt in enumerate(self._options):
            name = opt.label.split(",", 1)[0].strip().lower()
            if needle in (opt.label.lower(), name):
                return self.select_index(i)
        raise KeyError(f"No city named {label!r}")

    def selected_option(self) -> SelectOption | None:
        """The option the user picked, even when another shares its coordinates."""
        if self._selected_index is None:
            return None
        return self._options[self._selected_index]
