"""Pytest configuration and fixtures."""

import asyncio
import json
import tempfile
from pathlib import Path

import httpx
import pytest

from weather_widget.models.profile import UserProfile
from weather_widget.models.weather import WeatherRecord


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "weather": {
            "api_key": "test-key",
            "base_url": "https://api.weatherapi.com/v1",
            "timeout_seconds": 5,
        },
        "widget": {
            "city": "London",
            "allow_city_override": False,
            "profile_location": "Austin, TX",
        },
        "settings": {
            "log_level": "DEBUG",
        },
    }


@pytest.fixture
def sample_config_file(temp_dir, sample_config_data):
    """Create a sample config file for testing."""
    config_path = temp_dir / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_data, f)
    return config_path


@pytest.fixture
def weather_payload():
    """A well-formed WeatherAPI current.json body."""
    return {
        "location": {
            "name": "Austin",
            "region": "Texas",
            "country": "United States of America",
        },
        "current": {
            "temp_c": 22.4,
            "temp_f": 72.4,
            "is_day": 1,
            "condition": {"text": "Sunny", "code": 1000},
            "wind_mph": 5.6,
            "wind_kph": 9.0,
            "humidity": 40,
            "feelslike_c": 22.0,
            "feelslike_f": 71.6,
        },
    }


def make_record(**overrides) -> WeatherRecord:
    """Build a WeatherRecord with sensible defaults."""
    fields = {
        "temp_f": 72.4,
        "temp_c": 22.4,
        "feels_like_f": 71.6,
        "feels_like_c": 22.0,
        "humidity": 40,
        "wind_mph": 5.6,
        "wind_kph": 9.0,
        "description": "sunny",
        "icon": "sunny.svg",
        "is_day": True,
        "location_name": "Austin",
        "region": "Texas",
        "country": "United States of America",
    }
    fields.update(overrides)
    return WeatherRecord(**fields)


@pytest.fixture
def record():
    return make_record()


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler(request)."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeWeatherService:
    """Weather service answering from a dict of city -> record or exception."""

    def __init__(self, results: dict | None = None, default: WeatherRecord | None = None):
        self.results = results or {}
        self.default = default
        self.calls: list[str] = []

    async def fetch_weather(self, city: str) -> WeatherRecord:
        self.calls.append(city)
        result = self.results.get(city, self.default)
        if result is None:
            return make_record(location_name=city)
        if isinstance(result, Exception):
            raise result
        return result


class GatedWeatherService(FakeWeatherService):
    """Fake service whose fetches block until released per city."""

    def __init__(self, results: dict | None = None):
        super().__init__(results)
        self.gates: dict[str, asyncio.Event] = {}

    def gate(self, city: str) -> asyncio.Event:
        return self.gates.setdefault(city, asyncio.Event())

    def release(self, city: str) -> None:
        self.gate(city).set()

    async def fetch_weather(self, city: str) -> WeatherRecord:
        self.calls.append(city)
        await self.gate(city).wait()
        result = self.results.get(city)
        if result is None:
            return make_record(location_name=city)
        if isinstance(result, Exception):
            raise result
        return result


class FakeProfileSource:
    """Profile source returning a fixed profile or raising."""

    def __init__(self, location: str | None = None, error: Exception | None = None):
        self.location = location
        self.error = error
        self.calls = 0

    async def get_user_information(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return UserProfile(location=self.location)
