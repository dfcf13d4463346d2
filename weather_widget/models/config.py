"""Configuration models using Pydantic for validation."""

import json
import os
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigError

DEFAULT_API_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_ICON_BASE_URL = "https://eirastaffbase.github.io/weather-time/resources/img/"
DEFAULT_CITY = "New York City"
API_KEY_ENV_VAR = "WEATHER_API_KEY"


def _validate_http_url(v: str) -> str:
    try:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got '{parsed.scheme}'")
        if not parsed.netloc:
            raise ValueError("URL must have a valid host")
    except Exception as e:
        raise ValueError(f"Invalid URL '{v}': {e}")
    return v


class WeatherApiConfig(BaseModel):
    """Weather provider configuration."""

    api_key: str = Field(default_factory=lambda: os.environ.get(API_KEY_ENV_VAR, ""))
    base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = 10.0
    icon_base_url: str = DEFAULT_ICON_BASE_URL

    @field_validator("base_url", "icon_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that URL is a valid HTTP/HTTPS URL."""
        return _validate_http_url(v)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive and at most a minute."""
        if not 0 < v <= 60:
            raise ValueError(f"Timeout must be between 0 and 60 seconds, got {v}")
        return v


class WidgetConfig(BaseModel):
    """Widget placement configuration."""

    city: str | None = None
    allow_city_override: bool = True
    default_city: str = Field(default=DEFAULT_CITY, min_length=1)
    profile_location: str | None = None  # Static profile location when no profile URL
    profile_url: str | None = None

    @field_validator("profile_url")
    @classmethod
    def validate_profile_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _validate_http_url(v)

    @field_validator("city")
    @classmethod
    def normalize_city(cls, v: str | None) -> str | None:
        """Treat a blank city as unset."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class Settings(BaseModel):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Config(BaseModel):
    """Main configuration model."""

    weather: WeatherApiConfig = Field(default_factory=WeatherApiConfig)
    widget: WidgetConfig = Field(default_factory=WidgetConfig)
    settings: Settings = Field(default_factory=Settings)

    @classmethod
    def load(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = json.load(f)
            return cls.model_validate(data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}", details={"path": str(path)})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}", details={"path": str(path)})

    @classmethod
    def load_or_default(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration or return default if file doesn't exist."""
        try:
            return cls.load(path)
        except FileNotFoundError:
            return cls()
