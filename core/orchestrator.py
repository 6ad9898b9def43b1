"""Sequence one weather search from raw input to display and history.

The orchestrator is the only place that catches lookup failures. Resolver and
fetcher errors keep their distinct kinds in the returned ``SearchOutcome`` (and
in the search log), while the view only ever receives one generic message.

Overlapping searches (the web binder serves requests on a thread pool) are
ordered with a generation token: each call takes the next number, and a result
is applied only if no newer search started while it was in flight.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from time import perf_counter
from typing import Optional, Protocol, Sequence, Tuple

from core.errors import ValidationError, WeatherLookupError, error_kind
from core.open_meteo import GeocodeResolver, WeatherFetcher
from core.recent_searches import RecentSearchStore
from core.search_log import SearchLogEntry, SearchLogger
from core.weather_record import WeatherRecord

VALIDATION_MESSAGE = "Please enter a city name."
GENERIC_FAILURE_MESSAGE = "Could not fetch weather. Try another city."

STATUS_OK = "ok"
STATUS_STALE = "stale"

logger = logging.getLogger(__name__)


class WeatherView(Protocol):
    """Presentation collaborator driven by the orchestrator."""

    def render(self, record: WeatherRecord) -> None:
        ...

    def render_recent_list(self, records: Sequence[WeatherRecord]) -> None:
        ...

    def alert(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class SearchOutcome:
    """Tagged result of a single ``search`` call."""

    status: str
    city: str
    generation: int
    record: Optional[WeatherRecord] = None
    error: Optional[BaseException] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


class SearchOrchestrator:
    """Coordinates resolver, fetcher, view and recent-search store."""

    def __init__(
        self,
        *,
        resolver: GeocodeResolver,
        fetcher: WeatherFetcher,
        store: RecentSearchStore,
        view: WeatherView,
        search_logger: Optional[SearchLogger] = None,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._store = store
        self._view = view
        self._search_logger = search_logger
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def store(self) -> RecentSearchStore:
        return self._store

    @property
    def view(self) -> WeatherView:
        return self._view

    def restore(self) -> Tuple[WeatherRecord, ...]:
        """Load persisted history and render it; called once at startup."""

        with self._lock:
            entries = self._store.load()
            self._view.render_recent_list(entries)
        logger.info("Restored %d recent searches", len(entries))
        return entries

    def search(self, raw_input: str) -> SearchOutcome:
        city = (raw_input or "").strip()
        with self._lock:
            self._generation += 1
            generation = self._generation

        if not city:
            error = ValidationError("City name is empty.")
            with self._lock:
                self._view.alert(VALIDATION_MESSAGE)
            self._log(city, error.kind, generation, error=error)
            return SearchOutcome(
                status=error.kind,
                city=city,
                generation=generation,
                error=error,
                message=VALIDATION_MESSAGE,
            )

        started = perf_counter()
        record: Optional[WeatherRecord] = None
        failure: Optional[Exception] = None
        try:
            record = self._lookup(city)
        except WeatherLookupError as exc:
            logger.warning("Weather lookup for %r failed (%s): %s", city, exc.kind, exc)
            failure = exc
        except Exception as exc:
            logger.exception("Unexpected error while looking up weather for %r", city)
            failure = exc
        latency_ms = int((perf_counter() - started) * 1000)

        with self._lock:
            if generation != self._generation:
                outcome = SearchOutcome(
                    status=STATUS_STALE,
                    city=city,
                    generation=generation,
                    record=record,
                    error=failure,
                )
            elif record is None:
                self._view.alert(GENERIC_FAILURE_MESSAGE)
                outcome = SearchOutcome(
                    status=error_kind(failure),
                    city=city,
                    generation=generation,
                    error=failure,
                    message=GENERIC_FAILURE_MESSAGE,
                )
            else:
                self._view.render(record)
                try:
                    entries = self._store.save(record)
                except OSError as exc:
                    logger.exception("Could not persist recent searches")
                    failure = exc
                    self._view.alert(GENERIC_FAILURE_MESSAGE)
                    outcome = SearchOutcome(
                        status=error_kind(exc),
                        city=city,
                        generation=generation,
                        record=record,
                        error=exc,
                        message=GENERIC_FAILURE_MESSAGE,
                    )
                else:
                    self._view.render_recent_list(entries)
                    outcome = SearchOutcome(
                        status=STATUS_OK,
                        city=city,
                        generation=generation,
                        record=record,
                    )

        if outcome.status == STATUS_STALE:
            logger.info("Discarding stale result for %r (generation %d)", city, generation)
        self._log(city, outcome.status, generation, error=failure, latency_ms=latency_ms, record=record)
        return outcome

    def _lookup(self, city: str) -> WeatherRecord:
        coords = self._resolver.resolve(city)
        conditions = self._fetcher.fetch(coords.latitude, coords.longitude)
        return WeatherRecord(
            city=city,
            temperature=conditions.temp,
            description=conditions.description,
            wind_speed=conditions.wind,
        )

    def _log(
        self,
        city: str,
        status: str,
        generation: int,
        *,
        error: Optional[BaseException] = None,
        latency_ms: Optional[int] = None,
        record: Optional[WeatherRecord] = None,
    ) -> None:
        if not self._search_logger:
            return
        entry = SearchLogEntry.new(
            city=city,
            status=status,
            generation=generation,
            error_kind=error_kind(error) if error is not None else None,
            error_detail=str(error) if error is not None else None,
            latency_ms=latency_ms,
            summary=record.summary() if record is not None else None,
        )
        try:
            self._search_logger.log_search(entry)
        except OSError:
            logger.exception("Failed to write search log entry")


__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "VALIDATION_MESSAGE",
    "SearchOrchestrator",
    "SearchOutcome",
    "WeatherView",
]
