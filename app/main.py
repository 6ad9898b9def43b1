"""Assemble the search orchestrator and run the interactive console loop."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from app.config import (
    get_forecast_url,
    get_geocoding_url,
    get_http_timeout,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_recent_search_key,
    get_recent_search_limit,
    get_search_log_path,
    get_storage_path,
    is_search_log_enabled,
)
from core.json_storage import JsonKeyValueStore
from core.open_meteo import GeocodeResolver, WeatherFetcher, build_session
from core.orchestrator import SearchOrchestrator, WeatherView
from core.recent_searches import RecentSearchStore
from core.search_log import SearchLogger
from core.weather_record import WeatherRecord, format_number

_QUIT_COMMANDS = {"quit", "exit"}


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# -- Orchestrator construction -------------------------------------------------
def build_orchestrator(view: WeatherView) -> SearchOrchestrator:
    """WHAT: wire clients, storage and logging around ``view``.

    WHY: the console loop and the web API must share identical wiring so a
    search behaves the same on both surfaces.
    HOW: pull runtime configuration from ``app.config`` and hand the resulting
    instances to ``SearchOrchestrator``. Both clients share one HTTP session.
    """
    session = build_session()
    timeout = get_http_timeout()
    store = RecentSearchStore(
        JsonKeyValueStore(get_storage_path()),
        key=get_recent_search_key(),
        max_entries=get_recent_search_limit(),
    )
    search_logger = SearchLogger(
        log_path=get_search_log_path(),
        enabled=is_search_log_enabled(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )
    return SearchOrchestrator(
        resolver=GeocodeResolver(get_geocoding_url(), session=session, timeout=timeout),
        fetcher=WeatherFetcher(get_forecast_url(), session=session, timeout=timeout),
        store=store,
        view=view,
        search_logger=search_logger,
    )


# -- Console view ----------------------------------------------------------------
class ConsoleView:
    """Print weather records and the recent list to a text stream."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out or sys.stdout
        self.recent: tuple[WeatherRecord, ...] = ()

    def write(self, text: str = "") -> None:
        print(text, file=self._out)

    def render(self, record: WeatherRecord) -> None:
        self.write()
        self.write(f"  {record.city}")
        self.write(f"  {format_number(record.temperature)}°C")
        self.write(f"  {record.description}")
        self.write(f"  Wind Speed: {format_number(record.wind_speed)} km/h")
        self.write()

    def render_recent_list(self, records: Sequence[WeatherRecord]) -> None:
        self.recent = tuple(records)
        if not self.recent:
            return
        self.write("Recent searches:")
        for index, record in enumerate(self.recent, start=1):
            self.write(f"  #{index} {record.city}")

    def alert(self, message: str) -> None:
        self.write(f"! {message}")


def select_recent_city(line: str, recent: Sequence[WeatherRecord]) -> Optional[str]:
    """Return the city of recent entry ``#<n>``, or ``None`` when ``line`` is not a selection."""

    candidate = line.strip()
    if candidate.startswith("#") and candidate[1:].isdigit():
        index = int(candidate[1:]) - 1
        if 0 <= index < len(recent):
            return recent[index].city
    return None


# -- Interactive console loop ----------------------------------------------------
def run_console(
    orchestrator: SearchOrchestrator,
    view: ConsoleView,
    *,
    read_line: Callable[[str], str] = input,
) -> None:
    """Forward each typed line to ``orchestrator.search`` until quit/EOF."""

    orchestrator.restore()
    while True:
        try:
            line = read_line("City: ")
        except (EOFError, KeyboardInterrupt):
            view.write("\nExiting.")
            break

        if line.strip().lower() in _QUIT_COMMANDS:
            view.write("Goodbye!")
            break

        selected = select_recent_city(line, view.recent)
        if selected is not None:
            view.write(f"City: {selected}")
            line = selected
        elif line.strip().startswith("#"):
            view.alert(f"No recent search {line.strip()}")
            continue
        orchestrator.search(line)


def main() -> None:
    configure_logging()
    view = ConsoleView()
    orchestrator = build_orchestrator(view)
    print("Weather lookup ready. Type a city, '#<n>' for a recent search, or 'quit'.")
    run_console(orchestrator, view)


if __name__ == "__main__":
    main()
