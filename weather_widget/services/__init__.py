"""Services for fetching weather and resolving the city."""

from .city_resolver import CityResolver, ResolverState
from .conditions import icon_for_condition, icon_url
from .profile import HttpProfileSource, ProfileSource, StaticProfileSource
from .weather_service import WeatherService

__all__ = [
    "CityResolver",
    "HttpProfileSource",
    "ProfileSource",
    "ResolverState",
    "StaticProfileSource",
    "WeatherService",
    "icon_for_condition",
    "icon_url",
]
