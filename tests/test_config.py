from pathlib import Path

from app import config


def test_defaults_without_environment():
    env: dict = {}

    assert config.get_geocoding_url(env) == "https://geocoding-api.open-meteo.com/v1/search"
    assert config.get_forecast_url(env) == "https://api.open-meteo.com/v1/forecast"
    assert config.get_storage_path(env) == Path("data/local_storage.json")
    assert config.get_http_timeout(env) is None
    assert config.get_log_level(env) == "INFO"
    assert config.is_search_log_enabled(env) is True
    assert config.get_search_log_path(env) == Path("logs") / "searches.jsonl"
    assert config.get_web_ui_port(env) == 9000
    assert config.get_recent_search_key() == "weatherSearches"
    assert config.get_recent_search_limit() == 5


def test_environment_overrides():
    env = {
        "WEATHER_GEOCODING_URL": "http://geo.test/search",
        "WEATHER_STORAGE_PATH": "/tmp/widget.json",
        "WEATHER_HTTP_TIMEOUT": "2.5",
        "LOG_LEVEL": "debug",
        "SEARCH_LOG_ENABLED": "off",
        "LOG_DIR": "/var/log/widget",
        "LOG_MAX_BYTES": "2048",
        "LOG_BACKUP_COUNT": "1",
        "WEB_UI_HOST": "0.0.0.0",
        "WEB_UI_PORT": "8080",
    }

    assert config.get_geocoding_url(env) == "http://geo.test/search"
    assert config.get_storage_path(env) == Path("/tmp/widget.json")
    assert config.get_http_timeout(env) == 2.5
    assert config.get_log_level(env) == "DEBUG"
    assert config.is_search_log_enabled(env) is False
    assert config.get_search_log_path(env) == Path("/var/log/widget/searches.jsonl")
    assert config.get_log_max_bytes(env) == 2048
    assert config.get_log_backup_count(env) == 1
    assert config.get_web_ui_host(env) == "0.0.0.0"
    assert config.get_web_ui_port(env) == 8080


def test_invalid_values_fall_back_to_defaults():
    env = {
        "WEATHER_HTTP_TIMEOUT": "soon",
        "LOG_LEVEL": "chatty",
        "SEARCH_LOG_ENABLED": "maybe",
        "LOG_MAX_BYTES": "lots",
        "WEB_UI_PORT": "70000",
    }

    assert config.get_http_timeout(env) is None
    assert config.get_http_timeout({"WEATHER_HTTP_TIMEOUT": "0"}) is None
    assert config.get_log_level(env) == "INFO"
    assert config.is_search_log_enabled(env) is True
    assert config.get_log_max_bytes(env) == 1_000_000
    assert config.get_web_ui_port(env) == 9000
