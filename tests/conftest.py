from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest
import requests

from core.json_storage import JsonKeyValueStore
from core.open_meteo import DEFAULT_FORECAST_URL, DEFAULT_GEOCODING_URL, GeocodeResolver, WeatherFetcher
from core.orchestrator import SearchOrchestrator
from core.recent_searches import RecentSearchStore
from core.search_log import SearchLogger
from core.weather_record import WeatherRecord


class StubResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, payload: Any = None, status_code: int = 200, *, invalid_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


class StubSession:
    """Route ``get`` calls by URL to queued responses, exceptions or callables."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Any = None) -> StubResponse:
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        handler = self.routes.get(url)
        if handler is None:
            raise AssertionError(f"unexpected request to {url}")
        if isinstance(handler, list):
            handler = handler.pop(0)
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(params or {})
        return handler

    def calls_to(self, url: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["url"] == url]


class StubView:
    """Record everything the orchestrator asks the view to do."""

    def __init__(self) -> None:
        self.rendered: List[WeatherRecord] = []
        self.recent_renders: List[tuple] = []
        self.alerts: List[str] = []

    def render(self, record: WeatherRecord) -> None:
        self.rendered.append(record)

    def render_recent_list(self, records: Sequence[WeatherRecord]) -> None:
        self.recent_renders.append(tuple(records))

    def alert(self, message: str) -> None:
        self.alerts.append(message)


def geocode_payload(latitude: float = 48.85, longitude: float = 2.35) -> Dict[str, Any]:
    return {"results": [{"name": "Paris", "latitude": latitude, "longitude": longitude}]}


def weather_payload(temperature: float = 18, code: int = 0, wind: float = 10) -> Dict[str, Any]:
    return {"current_weather": {"temperature": temperature, "weathercode": code, "windspeed": wind}}


def build_orchestrator(
    tmp_path: Path,
    session: StubSession,
    view: Optional[Any] = None,
    *,
    search_log: bool = True,
) -> SearchOrchestrator:
    store = RecentSearchStore(JsonKeyValueStore(tmp_path / "local_storage.json"))
    search_logger = SearchLogger(log_path=tmp_path / "searches.jsonl", enabled=search_log)
    return SearchOrchestrator(
        resolver=GeocodeResolver(session=session),
        fetcher=WeatherFetcher(session=session),
        store=store,
        view=view if view is not None else StubView(),
        search_logger=search_logger,
    )


@pytest.fixture()
def paris_session() -> StubSession:
    return StubSession(
        {
            DEFAULT_GEOCODING_URL: lambda params: StubResponse(geocode_payload()),
            DEFAULT_FORECAST_URL: lambda params: StubResponse(weather_payload()),
        }
    )


@pytest.fixture()
def record_factory() -> Callable[..., WeatherRecord]:
    def _make(city: str = "Paris", temperature: float = 18.0, description: str = "Clear", wind: float = 10.0) -> WeatherRecord:
        return WeatherRecord(city=city, temperature=temperature, description=description, wind_speed=wind)

    return _make
