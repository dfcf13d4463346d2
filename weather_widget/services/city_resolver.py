"""Resolution of the city the widget shows."""

import logging
from enum import Enum

from ..exceptions import ProfileUnavailable
from ..models.config import DEFAULT_CITY
from .profile import ProfileSource

logger = logging.getLogger(__name__)


class ResolverState(str, Enum):
    """Lifecycle of the active city."""

    UNSET = "unset"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class CityResolver:
    """Decides which city to query.

    A configured city wins from the start. Otherwise the city comes from the
    host profile, falling back to ``default_city``. A user override always
    wins, including over a profile lookup that is still pending.
    """

    def __init__(self, default_city: str = DEFAULT_CITY, configured_city: str | None = None):
        self.default_city = default_city
        self._city: str | None = None
        self._state = ResolverState.UNSET
        self._generation = 0

        configured = (configured_city or "").strip()
        if configured:
            self._city = configured
            self._state = ResolverState.RESOLVED

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def city(self) -> str | None:
        """The resolved city, or None before resolution."""
        return self._city if self._state == ResolverState.RESOLVED else None

    async def resolve(self, profile_source: ProfileSource) -> str:
        """Resolve the city from the host profile if not already resolved."""
        if self._state == ResolverState.RESOLVED and self._city:
            return self._city

        self._state = ResolverState.RESOLVING
        generation = self._generation
        city = await self._city_from_profile(profile_source)

        # An override landed while we were waiting on the host
        if generation != self._generation:
            logger.debug(f"Dropping profile city {city!r}, overridden by {self._city!r}")
            return self._city or city

        self._city = city
        self._state = ResolverState.RESOLVED
        logger.info(f"Resolved city: {city}")
        return city

    async def _city_from_profile(self, profile_source: ProfileSource) -> str:
        try:
            profile = await profile_source.get_user_information()
        except ProfileUnavailable as e:
            logger.warning(f"Profile unavailable, using {self.default_city}: {e}")
            return self.default_city
        except Exception as e:
            logger.error(f"Error reading user profile, using {self.default_city}: {e}")
            return self.default_city

        if profile.city is None:
            logger.info(f"Profile has no location, using {self.default_city}")
            return self.default_city
        return profile.city

    def override(self, city: str) -> bool:
        """Set the city explicitly. Blank input is ignored.

        Returns:
            True if the city changed state, False if the input was blank
        """
        city = city.strip() if city else ""
        if not city:
            return False

        self._generation += 1
        self._city = city
        self._state = ResolverState.RESOLVED
        logger.info(f"City overridden: {city}")
        return True
