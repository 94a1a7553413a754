"""Shared test fixtures for all tests."""

import pytest

MAGPIE_ENV_VARS = [
    "LOG_LEVEL",
    "MQTT_HOST",
    "MQTT_PREFIX",
    "MQTT_CLIENT_ID",
    "MQTT_KEEPALIVE_SECONDS",
    "MQTT_TIMEOUT_SECONDS",
    "SEASON_TOPIC",
    "SEASON_FETCH_INTERVAL_SECONDS",
    "DAYPHASE_TOPIC",
    "DAYPHASE_FETCH_INTERVAL_SECONDS",
    "DAYLIGHT_TOPIC",
    "DAYLIGHT_LATITUDE",
    "DAYLIGHT_LONGITUDE",
    "DAYLIGHT_FETCH_INTERVAL_SECONDS",
    "DAYLIGHT_BASE_URL",
    "WEATHER_TOPIC",
    "WEATHER_REGION",
    "WEATHER_FETCH_INTERVAL_SECONDS",
    "WEATHER_FEED_URL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment from enabling sources in tests."""
    for name in MAGPIE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_region() -> str:
    """Configured weather region for testing."""
    return "noord-holland"
