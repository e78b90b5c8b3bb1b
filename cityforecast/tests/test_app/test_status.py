"""Tests for the fading status notifier."""

import threading

from cityforecast.app.status import Status, StatusNotifier


class TestStatusNotifier:
    def test_full_opacity_then_fade(self, timer_factory, fake_timers):
        seen: list[Status] = []
        notifier = StatusNotifier(on_change=seen.append, timer_factory=timer_factory)

        notifier.notify("Loaded")
        assert notifier.current == Status("Loaded", 1.0)
        assert fake_timers[0].interval == 2.0
        assert fake_timers[0].started
        assert fake_timers[0].daemon

        fake_timers[0].fire()
        assert notifier.current == Status("Loaded", 0.7)
        assert seen == [Status("Loaded", 1.0), Status("Loaded", 0.7)]

    def test_newer_message_resets_timer(self, timer_factory, fake_timers):
        notifier = StatusNotifier(timer_factory=timer_factory)
        notifier.notify("first")
        notifier.notify("second")

        assert fake_timers[0].cancelled
        assert not fake_timers[1].cancelled

        # A stale fade that slipped past cancel must not dim the new message.
        fake_timers[0].function()
        assert notifier.current == Status("second", 1.0)

        fake_timers[1].fire()
        assert notifier.current == Status("second", 0.7)

    def test_custom_timing(self, timer_factory, fake_timers):
        notifier = StatusNotifier(
            fade_after=0.5, faded_opacity=0.3, timer_factory=timer_factory
        )
        notifier.notify("x")
        fake_timers[0].fire()
        assert fake_timers[0].interval == 0.5
        assert notifier.current.opacity == 0.3

    def test_cancel(self, timer_factory, fake_timers):
        notifier = StatusNotifier(timer_factory=timer_factory)
        notifier.notify("x")
        notifier.cancel()
        assert fake_timers[0].cancelled

    def test_real_timer_does_not_block(self):
        faded = threading.Event()

        def on_change(status: Status) -> None:
            if status.opacity < 1.0:
                faded.set()

        notifier = StatusNotifier(fade_after=0.01, on_change=on_change)
        notifier.notify("hello")
        assert notifier.current.opacity == 1.0
        assert faded.wait(timeout=2.0)
        assert notifier.current == Status("hello", 0.7)
