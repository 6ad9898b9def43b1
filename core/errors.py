"""Error taxonomy shared by the lookup clients, the store and the orchestrator.

Lower layers raise these; only the orchestrator catches them and decides what
the user sees. Each class carries a short ``kind`` tag so outcomes and log
entries can keep the distinction after the message has been collapsed.
"""

from __future__ import annotations


class WeatherLookupError(Exception):
    """Base class for every failure the lookup pipeline reports."""

    kind = "error"


class ValidationError(WeatherLookupError):
    """Raised when the user submitted an empty or whitespace-only city."""

    kind = "invalid"


class NotFoundError(WeatherLookupError):
    """Raised when the geocoding endpoint returns no match for a city."""

    kind = "not_found"


class NetworkError(WeatherLookupError):
    """Raised on transport failures, non-2xx responses or unreadable bodies."""

    kind = "network_error"


class DeserializationError(WeatherLookupError):
    """Raised when a durable storage slot does not hold the expected payload."""

    kind = "deserialization_error"


def error_kind(exc: BaseException) -> str:
    """Return the taxonomy tag for ``exc`` (``"error"`` for foreign exceptions)."""

    if isinstance(exc, WeatherLookupError):
        return exc.kind
    return WeatherLookupError.kind


__all__ = [
    "WeatherLookupError",
    "ValidationError",
    "NotFoundError",
    "NetworkError",
    "DeserializationError",
    "error_kind",
]
