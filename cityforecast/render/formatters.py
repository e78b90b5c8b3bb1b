"""Output formatters for forecast cards and the city list."""

import html

from cityforecast.models.forecast import ForecastCard

LOADING_PLACEHOLDER = "🌤️ Loading weather data..."
FAILED_PLACEHOLDER = "⚠️ Failed to load data."


def format_cards_text(cards: list[ForecastCard], title: str = "") -> str:
    """Plain text block, one card per line group."""
    lines = []
    if title:
        lines.append(f"=== {title} ===")
    for c in cards:
        lines.append(f"{c.date_text}  {c.description or '?'}  [{c.icon}]")
        lines.append(f"  🌡️ {c.temperature_text}")
        lines.append(f"  💨 {c.wind_text}")
    return "\n".join(lines)


def format_card_html(card: ForecastCard) -> str:
    e = html.escape
    return (
        '<article class="card">\n'
        f"  <h3>{e(card.date_text)}</h3>\n"
        f'  <img src="{e(card.icon)}" alt="{e(card.description)}" '
        f"onerror=\"this.src='{e(card.fallback_icon)}'\">\n"
        f'  <p class="small">{e(card.description)}</p>\n'
        f"  <p>🌡️ {e(card.temperature_text)}</p>\n"
        f'  <p class="small">💨 {e(card.wind_text)}</p>\n'
        "</article>"
    )


def format_cards_html(cards: list[ForecastCard]) -> str:
    """Forecast container markup; replaces any previous content wholesale."""
    body = "\n".join(format_card_html(c) for c in cards)
    return f'<section id="forecast">\n{body}\n</section>'


def format_placeholder_html(text: str) -> str:
    return f'<section id="forecast"><div class="placeholder">{html.escape(text)}</div></section>'
