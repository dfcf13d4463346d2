"""Tests for the weather service."""

import httpx
import pytest
from conftest import mock_client

from weather_widget.exceptions import ErrorCode, InvalidResponse, NetworkError
from weather_widget.models.weather import WeatherRecord
from weather_widget.services.weather_service import WeatherService


def json_handler(payload, status_code=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return handler


def make_service(handler) -> WeatherService:
    return WeatherService(
        api_key="test-key",
        base_url="https://api.weatherapi.com/v1/",
        client=mock_client(handler),
    )


class TestFetchWeatherSuccess:
    """Tests for successful fetches."""

    @pytest.mark.asyncio
    async def test_parses_record(self, weather_payload):
        """Test a well-formed body becomes a WeatherRecord."""
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")

        assert isinstance(record, WeatherRecord)
        assert record.temp_f == 72.4
        assert record.temp_c == 22.4
        assert record.feels_like_f == 71.6
        assert record.feels_like_c == 22.0
        assert record.humidity == 40
        assert record.wind_mph == 5.6
        assert record.wind_kph == 9.0
        assert record.description == "sunny"
        assert record.is_day is True
        assert record.location_name == "Austin"
        assert record.region == "Texas"
        assert record.country == "United States of America"

    @pytest.mark.asyncio
    async def test_display_temperature_and_icon(self, weather_payload):
        """Test 72.4°F code 1000 by day shows 72°F with the sunny icon."""
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")
        assert record.display_temperature == "72°F"
        assert record.icon == "sunny.svg"

    @pytest.mark.asyncio
    async def test_request_parameters(self, weather_payload):
        """Test the request hits current.json with key and city."""
        seen: list[httpx.Request] = []
        service = make_service(json_handler(weather_payload, seen=seen))
        await service.fetch_weather("  New York City ")

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/v1/current.json"
        assert request.url.params["key"] == "test-key"
        assert request.url.params["q"] == "New York City"

    @pytest.mark.asyncio
    async def test_night_icon(self, weather_payload):
        weather_payload["current"]["is_day"] = 0
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")
        assert record.is_day is False
        assert record.icon == "clear-moon.svg"

    @pytest.mark.asyncio
    async def test_missing_condition_defaults_to_clear(self, weather_payload):
        del weather_payload["current"]["condition"]
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")
        assert record.icon == "sunny.svg"
        assert record.description == ""

    @pytest.mark.asyncio
    async def test_description_lowercased(self, weather_payload):
        weather_payload["current"]["condition"] = {"text": "Patchy Rain Possible", "code": 1063}
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")
        assert record.description == "patchy rain possible"
        assert record.icon == "drizzle.svg"

    @pytest.mark.asyncio
    async def test_missing_region_and_country(self, weather_payload):
        weather_payload["location"] = {"name": "Austin"}
        service = make_service(json_handler(weather_payload))
        record = await service.fetch_weather("Austin")
        assert record.region == ""
        assert record.country == ""


class TestFetchWeatherFailures:
    """Tests for failure classification."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 404, 500, 503])
    async def test_error_status(self, status):
        """Test error statuses raise InvalidResponse with the status code."""
        service = make_service(json_handler({"error": {"code": 1006}}, status_code=status))
        with pytest.raises(InvalidResponse) as exc_info:
            await service.fetch_weather("Nowhere")
        assert exc_info.value.status_code == status
        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["current", "location"])
    async def test_missing_section(self, weather_payload, missing):
        del weather_payload[missing]
        service = make_service(json_handler(weather_payload))
        with pytest.raises(InvalidResponse):
            await service.fetch_weather("Austin")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["temp_f", "feelslike_c", "humidity", "wind_mph"])
    async def test_missing_nested_field(self, weather_payload, field):
        del weather_payload["current"][field]
        service = make_service(json_handler(weather_payload))
        with pytest.raises(InvalidResponse) as exc_info:
            await service.fetch_weather("Austin")
        assert "Parse error" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_location_name(self, weather_payload):
        del weather_payload["location"]["name"]
        service = make_service(json_handler(weather_payload))
        with pytest.raises(InvalidResponse):
            await service.fetch_weather("Austin")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        service = make_service(handler)
        with pytest.raises(InvalidResponse) as exc_info:
            await service.fetch_weather("Austin")
        assert "not JSON" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        service = make_service(json_handler([1, 2, 3]))
        with pytest.raises(InvalidResponse):
            await service.fetch_weather("Austin")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "condition",
        ["Sunny", ["Sunny"], {"text": 5, "code": 1000}, {"text": "Sunny", "code": "abc"}],
    )
    async def test_malformed_condition(self, weather_payload, condition):
        """Test a malformed condition block raises InvalidResponse."""
        weather_payload["current"]["condition"] = condition
        service = make_service(json_handler(weather_payload))
        with pytest.raises(InvalidResponse):
            await service.fetch_weather("Austin")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test transport failures raise NetworkError."""

        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        service = make_service(handler)
        with pytest.raises(NetworkError) as exc_info:
            await service.fetch_weather("Austin")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR
        assert exc_info.value.details["city"] == "Austin"

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeouts raise NetworkError."""

        def handler(request):
            raise httpx.ReadTimeout("Timed out", request=request)

        service = make_service(handler)
        with pytest.raises(NetworkError) as exc_info:
            await service.fetch_weather("Austin")
        assert exc_info.value.message == "Request timeout"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("city", ["", "   "])
    async def test_blank_city(self, city, weather_payload):
        seen: list[httpx.Request] = []
        service = make_service(json_handler(weather_payload, seen=seen))
        with pytest.raises(ValueError):
            await service.fetch_weather(city)
        assert seen == []

    @pytest.mark.asyncio
    async def test_single_attempt_on_failure(self):
        """Test no retry happens after a failure."""
        seen: list[httpx.Request] = []
        service = make_service(json_handler({}, status_code=503, seen=seen))
        with pytest.raises(InvalidResponse):
            await service.fetch_weather("Austin")
        assert len(seen) == 1
