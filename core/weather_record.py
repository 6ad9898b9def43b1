"""Value types passed between the lookup clients, the store and the views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from core.errors import DeserializationError


def format_number(value: float) -> str:
    """Print ``value`` the way a browser would: ``18.0`` -> ``18``, ``18.5`` stays."""

    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CurrentConditions:
    """Normalized current-conditions reading for one coordinate pair."""

    temp: float
    description: str
    wind: float


@dataclass(frozen=True)
class WeatherRecord:
    """WHAT: the result of one successful search.

    WHY: the display region and the recent-search list both consume the same
    immutable snapshot, so neither can alter what the other shows.
    HOW: frozen dataclass with camelCase serialization (``windSpeed``) to keep
    the persisted slot shape stable.
    """

    city: str
    temperature: float
    description: str
    wind_speed: float

    def summary(self) -> str:
        return (
            f"{self.city}: {format_number(self.temperature)}°C, "
            f"{self.description}, Wind: {format_number(self.wind_speed)} km/h"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "temperature": self.temperature,
            "description": self.description,
            "windSpeed": self.wind_speed,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WeatherRecord":
        """Rebuild a record from its persisted form."""

        if not isinstance(payload, Mapping):
            raise DeserializationError(f"Expected an object, got {type(payload).__name__}.")
        try:
            return cls(
                city=str(payload["city"]),
                temperature=float(payload["temperature"]),
                description=str(payload["description"]),
                wind_speed=float(payload["windSpeed"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DeserializationError(f"Malformed weather record: {payload!r}") from exc


__all__ = ["Coordinates", "CurrentConditions", "WeatherRecord", "format_number"]
