"""Open-Meteo clients for geocoding and current conditions.

Both clients issue exactly one GET per call and never retry: a failed call is
translated into the shared error taxonomy and handed straight back to the
caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from core.errors import NetworkError, NotFoundError
from core.weather_record import Coordinates, CurrentConditions

DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

logger = logging.getLogger(__name__)


def build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def describe_weather_code(code: Any) -> str:
    """Collapse an Open-Meteo weather code into ``Clear`` (0) or ``Cloudy``."""

    return "Clear" if code == 0 else "Cloudy"


class _OpenMeteoClient:
    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url
        self.session = session or build_session()
        self.timeout = timeout

    def _get_json(self, params: Dict[str, Any], *, label: str) -> Dict[str, Any]:
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = getattr(exc.response, "status_code", None)
            logger.warning("%s request returned HTTP %s", label, status)
            raise NetworkError(f"{label} failed with HTTP {status}") from exc
        except requests.RequestException as exc:
            logger.warning("%s request failed: %s", label, exc)
            raise NetworkError(f"{label} request failed") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(f"{label} returned invalid JSON") from exc
        return data if isinstance(data, dict) else {}


class GeocodeResolver(_OpenMeteoClient):
    """Resolve a city name to the first matching coordinate pair."""

    def __init__(self, base_url: str = DEFAULT_GEOCODING_URL, **kwargs: Any) -> None:
        super().__init__(base_url, **kwargs)

    def resolve(self, city: str) -> Coordinates:
        data = self._get_json({"name": city, "count": 1}, label="Geocoding")
        results = data.get("results") or []
        if not results:
            raise NotFoundError(f"City not found: {city!r}")
        first = results[0]
        return Coordinates(latitude=float(first["latitude"]), longitude=float(first["longitude"]))


class WeatherFetcher(_OpenMeteoClient):
    """Fetch current conditions for a coordinate pair."""

    def __init__(self, base_url: str = DEFAULT_FORECAST_URL, **kwargs: Any) -> None:
        super().__init__(base_url, **kwargs)

    def fetch(self, latitude: float, longitude: float) -> CurrentConditions:
        data = self._get_json(
            {"latitude": latitude, "longitude": longitude, "current_weather": "true"},
            label="Weather",
        )
        current = data["current_weather"]
        return CurrentConditions(
            temp=float(current["temperature"]),
            description=describe_weather_code(current.get("weathercode")),
            wind=float(current["windspeed"]),
        )


__all__ = [
    "DEFAULT_FORECAST_URL",
    "DEFAULT_GEOCODING_URL",
    "GeocodeResolver",
    "WeatherFetcher",
    "build_session",
    "describe_weather_code",
]
