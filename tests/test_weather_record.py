import pytest

from core.errors import DeserializationError
from core.weather_record import WeatherRecord, format_number


def test_summary_matches_widget_format():
    record = WeatherRecord(city="Paris", temperature=18.0, description="Clear", wind_speed=10.0)

    assert record.summary() == "Paris: 18°C, Clear, Wind: 10 km/h"


def test_summary_keeps_fractional_values():
    record = WeatherRecord(city="Oslo", temperature=-3.5, description="Cloudy", wind_speed=12.25)

    assert record.summary() == "Oslo: -3.5°C, Cloudy, Wind: 12.25 km/h"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(18, "18"), (18.0, "18"), (18.5, "18.5"), (0.0, "0"), (-2.0, "-2")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_record_is_immutable():
    record = WeatherRecord(city="Paris", temperature=18.0, description="Clear", wind_speed=10.0)

    with pytest.raises(AttributeError):
        record.city = "Lyon"  # type: ignore[misc]


def test_to_dict_uses_persisted_key_names():
    record = WeatherRecord(city="Paris", temperature=18.0, description="Clear", wind_speed=10.0)

    assert record.to_dict() == {
        "city": "Paris",
        "temperature": 18.0,
        "description": "Clear",
        "windSpeed": 10.0,
    }


def test_from_dict_coerces_numbers():
    record = WeatherRecord.from_dict({"city": "Paris", "temperature": 18, "description": "Clear", "windSpeed": "10"})

    assert record == WeatherRecord(city="Paris", temperature=18.0, description="Clear", wind_speed=10.0)


@pytest.mark.parametrize(
    "payload",
    [
        {"city": "Paris", "temperature": 18, "description": "Clear"},
        {"city": "Paris", "temperature": "warm", "description": "Clear", "windSpeed": 1},
        ["Paris", 18],
        "Paris",
    ],
)
def test_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(DeserializationError):
        WeatherRecord.from_dict(payload)
