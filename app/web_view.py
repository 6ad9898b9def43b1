"""Server-rendered page for the browser surface.

``WebWeatherView`` implements the orchestrator's view contract by keeping the
HTML fragments of the results region and the recent list, which every visitor
shares; ``render_page`` stitches them into the full document together with the
alert of the request being answered. The page needs no script: pressing Enter
in the input submits the search form, and every recent entry is its own
one-button form posting that city.
"""

from __future__ import annotations

import threading
from html import escape
from typing import Optional, Sequence

from core.weather_record import WeatherRecord, format_number


class WebWeatherView:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._weather_html = ""
        self._weather_hidden = True
        self._recent_html = ""
        self.current: Optional[WeatherRecord] = None
        self.recent: tuple[WeatherRecord, ...] = ()

    def render(self, record: WeatherRecord) -> None:
        """Replace the results region with ``record`` and unhide it."""

        fragment = (
            f"<h3>{escape(record.city)}</h3>\n"
            f"<p>{format_number(record.temperature)}°C</p>\n"
            f"<p>{escape(record.description)}</p>\n"
            f"<p>Wind Speed: {format_number(record.wind_speed)} km/h</p>"
        )
        with self._lock:
            self.current = record
            self._weather_html = fragment
            self._weather_hidden = False

    def render_recent_list(self, records: Sequence[WeatherRecord]) -> None:
        """Clear and rebuild the recent list, one form per entry."""

        items = []
        for record in records:
            city = escape(record.city, quote=True)
            items.append(
                '<li><form method="post" action="/search">'
                f'<input type="hidden" name="city" value="{city}">'
                f'<button type="submit" class="recent-entry">{escape(record.city)}</button>'
                "</form></li>"
            )
        with self._lock:
            self.recent = tuple(records)
            self._recent_html = "\n".join(items)

    def alert(self, message: str) -> None:
        """No-op: the handler passes its own outcome message to ``render_page``."""

    def render_page(self, city_value: str = "", alert: Optional[str] = None) -> str:
        with self._lock:
            weather_html = self._weather_html
            hidden = self._weather_hidden
            recent_html = self._recent_html
        weather_class = "weather hidden" if hidden else "weather"
        alert_html = (
            f'<div id="alert" class="alert" role="alert">{escape(alert)}</div>' if alert else ""
        )
        return _PAGE_TEMPLATE.format(
            city_value=escape(city_value, quote=True),
            alert_html=alert_html,
            weather_class=weather_class,
            weather_html=weather_html,
            recent_html=recent_html,
        )


_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Weather Lookup</title>
<link rel="stylesheet" href="/static/style.css">
</head>
<body>
<main class="container">
<h1>Weather Lookup</h1>
<form id="searchForm" method="post" action="/search">
<input id="cityInput" type="text" name="city" value="{city_value}" placeholder="Enter city name" autofocus>
<button id="searchBtn" type="submit">Search</button>
</form>
{alert_html}
<div id="weatherDisplay" class="{weather_class}">
{weather_html}
</div>
<h2>Recent Searches</h2>
<ul id="recentList">
{recent_html}
</ul>
</main>
</body>
</html>
"""


__all__ = ["WebWeatherView"]
