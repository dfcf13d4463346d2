"""Weather service using the WeatherAPI current conditions endpoint."""

import logging
from typing import Any

import httpx

from ..exceptions import InvalidResponse, NetworkError
from ..models.config import DEFAULT_API_BASE_URL
from ..models.weather import WeatherRecord
from .conditions import icon_for_condition

logger = logging.getLogger(__name__)

CURRENT_PATH = "/current.json"
DEFAULT_TIMEOUT = 10.0
FALLBACK_CONDITION_CODE = 1000


class WeatherService:
    """Service to fetch current conditions for a city.

    One GET per call: no retries and no caching. A shared client may be
    injected; the service never closes a client it did not create.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def fetch_weather(self, city: str) -> WeatherRecord:
        """Fetch current weather for a city.

        Raises:
            ValueError: If the city is blank
            NetworkError: If the provider cannot be reached or times out
            InvalidResponse: On an error status or a malformed body
        """
        city = city.strip()
        if not city:
            raise ValueError("City must not be empty")

        url = f"{self.base_url}{CURRENT_PATH}"
        params = {"key": self.api_key, "q": city}
        logger.debug(f"Fetching weather for {city}")

        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout fetching weather for {city}: {e}")
            raise NetworkError("Request timeout", details={"city": city}) from e
        except httpx.TransportError as e:
            logger.error(f"Connection error fetching weather for {city}: {e}")
            raise NetworkError(f"Connection error: {e}", details={"city": city}) from e

        if not response.is_success:
            logger.warning(f"HTTP error fetching weather for {city}: {response.status_code}")
            raise InvalidResponse(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                details={"city": city},
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Weather response for {city} is not JSON: {e}")
            raise InvalidResponse("Response body is not JSON", details={"city": city}) from e

        return self._parse_response(data, city)

    def _parse_response(self, data: Any, city: str) -> WeatherRecord:
        """Parse the WeatherAPI response into a WeatherRecord."""
        if not isinstance(data, dict):
            raise InvalidResponse("Invalid data received from weather API", details={"city": city})

        current = data.get("current")
        location = data.get("location")
        if not isinstance(current, dict) or not isinstance(location, dict):
            logger.warning(f"Weather response for {city} lacks current/location")
            raise InvalidResponse("Invalid data received from weather API", details={"city": city})

        condition = current.get("condition") or {}
        text = condition.get("text") if isinstance(condition, dict) else None
        if not isinstance(condition, dict) or (text is not None and not isinstance(text, str)):
            logger.warning(f"Weather response for {city} has a malformed condition")
            raise InvalidResponse("Invalid data received from weather API", details={"city": city})
        code = condition.get("code")
        if code is None:
            code = FALLBACK_CONDITION_CODE
        is_day = current.get("is_day") == 1

        try:
            return WeatherRecord(
                temp_f=current["temp_f"],
                temp_c=current["temp_c"],
                feels_like_f=current["feelslike_f"],
                feels_like_c=current["feelslike_c"],
                humidity=current["humidity"],
                wind_mph=current["wind_mph"],
                wind_kph=current["wind_kph"],
                description=(text or "").lower(),
                icon=icon_for_condition(int(code), is_day),
                is_day=is_day,
                location_name=location["name"],
                region=location.get("region") or "",
                country=location.get("country") or "",
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Error parsing weather response for {city}: {e}")
            raise InvalidResponse(f"Parse error: {e}", details={"city": city}) from e
