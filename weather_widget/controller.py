"""Widget controller tying city resolution, fetching and presentation."""

import logging
from collections.abc import Callable

from .exceptions import InvalidResponse, NetworkError
from .models.config import DEFAULT_ICON_BASE_URL
from .models.weather import Failure, FetchOutcome, Loading, Success, WeatherRecord
from .presentation import DisplayNode, build
from .services.city_resolver import CityResolver, ResolverState
from .services.profile import ProfileSource
from .services.weather_service import WeatherService

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to load weather data."

OutcomeListener = Callable[[FetchOutcome], None]


class WeatherWidget:
    """State owner for one weather card.

    Holds the current city and the current fetch outcome. Every fetch is
    tagged with a request id and the city it was issued for; a result whose
    tag is no longer the latest is dropped on arrival.
    """

    def __init__(
        self,
        service: WeatherService,
        resolver: CityResolver,
        profile_source: ProfileSource,
        allow_city_override: bool = True,
        icon_base_url: str = DEFAULT_ICON_BASE_URL,
    ):
        self.service = service
        self.resolver = resolver
        self.profile_source = profile_source
        self.allow_city_override = allow_city_override
        self.icon_base_url = icon_base_url
        self._outcome: FetchOutcome = Loading()
        self._request_id = 0
        self._pending: tuple[int, str] | None = None
        self._listeners: list[OutcomeListener] = []

    @property
    def outcome(self) -> FetchOutcome:
        return self._outcome

    @property
    def city(self) -> str | None:
        return self.resolver.city

    @property
    def record(self) -> WeatherRecord | None:
        """Current record, or None unless the last fetch succeeded."""
        if isinstance(self._outcome, Success):
            return self._outcome.record
        return None

    @property
    def is_loading(self) -> bool:
        return isinstance(self._outcome, Loading)

    def subscribe(self, listener: OutcomeListener) -> None:
        """Register a callable invoked with every new outcome."""
        self._listeners.append(listener)

    def _set_outcome(self, outcome: FetchOutcome) -> None:
        self._outcome = outcome
        for listener in list(self._listeners):
            try:
                listener(outcome)
            except Exception as e:
                logger.error(f"Outcome listener failed: {e}")

    async def start(self) -> FetchOutcome:
        """Resolve the city and load its weather."""
        request_id = self._request_id
        city = await self.resolver.resolve(self.profile_source)
        # A user override already issued its own fetch meanwhile
        if self._request_id != request_id:
            return self._outcome
        return await self.load(city)

    async def load(self, city: str) -> FetchOutcome:
        """Fetch weather for a city and publish the result if still current."""
        self._request_id += 1
        tag = (self._request_id, city)
        self._pending = tag
        self._set_outcome(Loading())

        try:
            record = await self.service.fetch_weather(city)
            outcome: FetchOutcome = Success(record=record)
        except (NetworkError, InvalidResponse) as e:
            logger.error(f"Failed to load weather for {city}: {e}")
            outcome = Failure(reason=FAILURE_MESSAGE)
        except Exception as e:
            logger.error(f"Unexpected error loading weather for {city}: {e}")
            outcome = Failure(reason=FAILURE_MESSAGE)

        if self._pending != tag:
            logger.debug(f"Discarding stale weather result for {city} (request {tag[0]})")
            return self._outcome

        self._pending = None
        self._set_outcome(outcome)
        return outcome

    async def refresh(self) -> FetchOutcome:
        """Fetch the current city again."""
        if self.resolver.state == ResolverState.RESOLVING:
            logger.debug("Refresh ignored: city still resolving")
            return self._outcome
        city = self.city
        if city is None:
            return await self.start()
        return await self.load(city)

    async def change_city(self, city: str) -> bool:
        """Apply a user override and load the new city.

        Returns:
            False if overrides are disabled or the input is blank
        """
        if not self.allow_city_override:
            logger.info("City override ignored: overrides disabled")
            return False
        if not self.resolver.override(city):
            return False
        await self.load(self.resolver.city or city.strip())
        return True

    def render(self) -> DisplayNode:
        """Display tree for the current outcome."""
        return build(self._outcome, self.icon_base_url, self.allow_city_override)
