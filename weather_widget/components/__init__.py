"""UI components for the weather widget."""

from .city_prompt import CityPrompt
from .weather_card import CityHeading, WeatherCard

__all__ = ["CityHeading", "CityPrompt", "WeatherCard"]
