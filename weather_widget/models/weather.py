"""Weather data models."""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (72.5 -> 73, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def one_decimal(value: float) -> str:
    """Format with one decimal place, exact halves going up (0.25 -> "0.3")."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class WeatherRecord(BaseModel):
    """Current conditions for one location, normalized from the provider."""

    model_config = ConfigDict(frozen=True)

    temp_f: float
    temp_c: float
    feels_like_f: float
    feels_like_c: float
    humidity: int
    wind_mph: float
    wind_kph: float
    description: str = ""
    icon: str
    is_day: bool
    location_name: str
    region: str = ""
    country: str = ""
    fetched_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_temperature(self) -> str:
        """Rounded Fahrenheit temperature with unit, e.g. '72°F'."""
        return f"{round_half_up(self.temp_f)}°F"

    @property
    def display_feels_like(self) -> str:
        return f"{round_half_up(self.feels_like_f)}°F"

    @property
    def display_wind(self) -> str:
        """Wind speed in mph with one decimal place."""
        return f"{one_decimal(self.wind_mph)} mph"

    @property
    def display_humidity(self) -> str:
        return f"{self.humidity}%"


class OutcomeKind(str, Enum):
    """Which presentation branch a fetch outcome drives."""

    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class Loading(BaseModel):
    """A fetch is in flight."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.LOADING] = OutcomeKind.LOADING


class Success(BaseModel):
    """A fetch completed with a record."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.SUCCESS] = OutcomeKind.SUCCESS
    record: WeatherRecord


class Failure(BaseModel):
    """A fetch failed; reason is shown to the user when present."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.FAILURE] = OutcomeKind.FAILURE
    reason: str | None = None


FetchOutcome = Loading | Success | Failure
