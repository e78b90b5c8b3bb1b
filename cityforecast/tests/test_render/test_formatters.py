"""Tests for card output formatters."""

from datetime import date

from cityforecast.render.formatters import (
    FAILED_PLACEHOLDER,
    format_card_html,
    format_cards_html,
    format_cards_text,
    format_placeholder_html,
)
from cityforecast.render.forecast_renderer import build_card, normalize_day


def _card(**entry):
    return build_card(normalize_day(entry, date(2024, 1, 1)))


class TestText:
    def test_card_lines(self):
        text = format_cards_text(
            [_card(weather="clear", temp2m={"min": 1, "max": 5}, wind10m_max=3)],
            title="Paris, FR",
        )
        assert text.splitlines()[0] == "=== Paris, FR ==="
        assert "Mon 1 Jan  Clear  [images/clear.png]" in text
        assert "1°C — 5°C" in text
        assert "Wind: 3 m/s" in text

    def test_empty(self):
        assert format_cards_text([]) == ""


class TestHtml:
    def test_card_markup(self):
        html = format_card_html(_card(weather="tsrain", temp2m=20, wind=7))
        assert '<img src="images/tsrain.png" alt="Thunderstorm &amp; Rain"' in html
        assert "onerror=\"this.src='images/clear.png'\"" in html
        assert "20°C — 20°C" in html
        assert "Wind: 7 m/s" in html

    def test_raw_code_escaped(self):
        html = format_card_html(_card(weather="<b>"))
        assert "&lt;b&gt;" in html
        assert "<b>" not in html

    def test_container_holds_every_card(self):
        html = format_cards_html([_card(weather="fog"), _card(weather="snow")])
        assert html.startswith('<section id="forecast">')
        assert html.count("<article") == 2

    def test_placeholder(self):
        assert "Failed to load data." in format_placeholder_html(FAILED_PLACEHOLDER)
