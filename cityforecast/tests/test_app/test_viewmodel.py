"""Tests for view state subscriptions."""

import dataclasses
import threading

from cityforecast.app.catalog import SelectOption
from cityforecast.app.status import Status
from cityforecast.app.viewmodel import ViewModel, ViewState
from cityforecast.models.forecast import ForecastCard

CARD = ForecastCard(
    date_text="Mon 1 Jan",
    icon="images/clear.png",
    fallback_icon="images/clear.png",
    description="Clear",
    temperature_text="1°C — 5°C",
    wind_text="Wind: 3 m/s",
)


class TestViewModel:
    def test_subscribers_see_each_update(self):
        vm = ViewModel()
        seen: list[ViewState] = []
        vm.subscribe(seen.append)

        vm.show_placeholder("loading")
        vm.show_cards([CARD], "Paris")

        assert seen[0].placeholder == "loading"
        assert seen[1].placeholder == ""
        assert seen[1].cards == [CARD]
        assert seen[1].location_name == "Paris"

    def test_placeholder_clears_cards(self):
        vm = ViewModel()
        vm.show_cards([CARD, CARD], "Paris")
        vm.show_placeholder("failed")
        assert vm.state.cards == []
        assert vm.state.location_name == ""

    def test_cards_replaced_wholesale(self):
        vm = ViewModel()
        vm.show_cards([CARD, CARD, CARD], "A")
        vm.show_cards([CARD], "B")
        assert len(vm.state.cards) == 1

    def test_options_are_snapshots(self):
        vm = ViewModel()
        opt = SelectOption(value="1,2", label="X")
        vm.show_options([opt], selected="1,2")
        opt.hidden = True
        assert vm.state.options[0].hidden is False
        assert vm.state.selected == "1,2"

    def test_unsubscribe(self):
        vm = ViewModel()
        seen = []
        unsubscribe = vm.subscribe(seen.append)
        unsubscribe()
        vm.show_placeholder("x")
        assert seen == []

    def test_failing_listener_does_not_stop_others(self):
        vm = ViewModel()
        seen = []

        def broken(state):
            raise RuntimeError("boom")

        vm.subscribe(broken)
        vm.subscribe(seen.append)
        vm.show_placeholder("x")
        assert len(seen) == 1

    def test_fade_from_timer_thread_does_not_drop_cards(self, monkeypatch):
        vm = ViewModel()
        entered = threading.Event()
        release = threading.Event()
        real_replace = dataclasses.replace

        def stalled_replace(obj, **changes):
            # Hold the fade mid-update so show_cards lands while it is in flight.
            if "status" in changes:
                entered.set()
                release.wait(2)
            return real_replace(obj, **changes)

        monkeypatch.setattr(dataclasses, "replace", stalled_replace)

        fade = threading.Thread(target=vm.show_status, args=(Status("x", 0.7),))
        fade.start()
        assert entered.wait(2)

        render = threading.Thread(target=vm.show_cards, args=([CARD], "Paris"))
        render.start()
        render.join(0.1)
        assert render.is_alive()

        release.set()
        fade.join(2)
        render.join(2)

        assert vm.state.cards == [CARD]
        assert vm.state.location_name == "Paris"
        assert vm.state.status.opacity == 0.7
