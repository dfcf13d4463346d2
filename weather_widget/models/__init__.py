"""Data models for the weather widget."""

from .config import Config, Settings, WeatherApiConfig, WidgetConfig
from .profile import UserProfile
from .weather import Failure, FetchOutcome, Loading, OutcomeKind, Success, WeatherRecord

__all__ = [
    "Config",
    "Failure",
    "FetchOutcome",
    "Loading",
    "OutcomeKind",
    "Settings",
    "Success",
    "UserProfile",
    "WeatherApiConfig",
    "WeatherRecord",
    "WidgetConfig",
]
