"""Framework-agnostic view state with change subscriptions."""

import dataclasses
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from cityforecast.app.catalog import SelectOption
from cityforecast.app.status import Status
from cityforecast.models.forecast import ForecastCard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    options: list[SelectOption] = field(default_factory=list)
    selected: str = ""
    status: Status = Status()
    placeholder: str = ""
    cards: list[ForecastCard] = field(default_factory=list)
    location_name: str = ""


Listener = Callable[[ViewState], None]


class ViewModel:
    def __init__(self) -> None:
        self._state = ViewState()
        self._listeners: list[Listener] = []
        # Status fades arrive from a timer thread.
        self._lock = threading.Lock()

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a render callback. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show_options(self, options: list[SelectOption], selected: str = "") -> None:
        self._update(options=[dataclasses.replace(o) for o in options], selected=selected)

    def show_status(self, status: Status) -> None:
        self._update(status=status)

    def show_placeholder(self, text: str) -> None:
        self._update(placeholder=text, cards=[], location_name="")

    def show_cards(self, cards: list[ForecastCard], location_name: str) -> None:
        self._update(placeholder="", cards=list(cards), location_name=location_name)

    def _update(self, **changes) -> None:
        with self._lock:
            self._state = dataclasses.replace(self._state, **changes)
            state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("View listener %r failed", listener)
