"""Transient status line that fades after a short delay."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Status:
    text: str = ""
    opacity: float = 1.0


class StatusNotifier:
    """Shows a message at full opacity, then dims it on a background timer.

    A newer message cancels the pending fade of the previous one.
    """

    def __init__(
        self,
        fade_after: float = 2.0,
        faded_opacity: float = 0.7,
        on_change: Callable[[Status], None] | None = None,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ):
        self.fade_after = fade_after
        self.faded_opacity = faded_opacity
        self.on_change = on_change
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._status = Status()
        self._generation = 0

    @property
    def current(self) -> Status:
        return self._status

    def notify(self, text: str) -> None:
        logger.info("Status: %s", text)
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._status = Status(text=text, opacity=1.0)
            self._timer = self._timer_factory(
                self.fade_after, lambda: self._fade(generation)
            )
            self._timer.daemon = True
            self._timer.start()
        self._emit()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fade(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._status = Status(text=self._status.text, opacity=self.faded_opacity)
            self._timer = None
        self._emit()

    def _emit(self) -> None:
        if self.on_change is not None:
            self.on_change(self._status)
