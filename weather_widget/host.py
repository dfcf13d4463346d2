"""Host adapter: block definition, registry and the widget entry point."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import __version__
from .controller import WeatherWidget
from .exceptions import BlockRegistrationError
from .models.config import Config
from .presentation import DisplayNode
from .services.city_resolver import CityResolver
from .services.conditions import icon_url
from .services.profile import ProfileSource
from .services.weather_service import WeatherService

logger = logging.getLogger(__name__)

BLOCK_NAME = "weather-widget"
BLOCK_LABEL = "Weather Widget"
BLOCK_AUTHOR = "weather-widget"


class WidgetAttributes(BaseModel):
    """Attributes a host may set on the widget."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    city: str | None = Field(default=None, title="City")
    allow_city_override: bool = Field(
        default=True, alias="allow-city-override", title="Allow city override"
    )

    @field_validator("city")
    @classmethod
    def blank_city_is_unset(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


def configuration_schema() -> dict[str, Any]:
    """JSON schema for the host's configuration dialog."""
    return WidgetAttributes.model_json_schema(by_alias=True)


UI_SCHEMA: dict[str, dict[str, str]] = {
    "city": {
        "ui:help": "Enter a default city name or leave blank to use the user's location.",
    },
    "allow-city-override": {
        "ui:widget": "checkbox",
        "ui:help": "Allow users to click the city name to override the location",
    },
}


class BlockDefinition(BaseModel):
    """What the host needs to know to offer the widget."""

    name: str
    label: str
    attributes: list[str] = Field(default_factory=list)
    block_level: str = "block"
    configuration_schema: dict[str, Any] = Field(default_factory=dict)
    ui_schema: dict[str, Any] = Field(default_factory=dict)
    icon_url: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Block names must contain at least one hyphen."""
        if "-" not in v:
            raise ValueError(f"Block name must contain a hyphen, got '{v}'")
        return v


class ExternalBlockDefinition(BaseModel):
    """Block definition plus authorship metadata."""

    block_definition: BlockDefinition
    author: str
    version: str


class BlockRegistry:
    """Blocks known to a host, keyed by name."""

    def __init__(self) -> None:
        self._blocks: dict[str, ExternalBlockDefinition] = {}

    def define_block(self, definition: ExternalBlockDefinition) -> None:
        name = definition.block_definition.name
        if name in self._blocks:
            raise BlockRegistrationError(
                f"Block '{name}' is already defined", details={"name": name}
            )
        self._blocks[name] = definition
        logger.debug(f"Registered block {name} v{definition.version}")

    def get(self, name: str) -> ExternalBlockDefinition | None:
        return self._blocks.get(name)

    def names(self) -> list[str]:
        return sorted(self._blocks)


def block_definition(config: Config | None = None) -> ExternalBlockDefinition:
    """The weather widget's block definition."""
    config = config or Config()
    return ExternalBlockDefinition(
        block_definition=BlockDefinition(
            name=BLOCK_NAME,
            label=BLOCK_LABEL,
            attributes=["city", "allow-city-override"],
            configuration_schema=configuration_schema(),
            ui_schema=UI_SCHEMA,
            icon_url=icon_url("sunny.svg", config.weather.icon_base_url),
        ),
        author=BLOCK_AUTHOR,
        version=__version__,
    )


def define_block(registry: BlockRegistry, config: Config | None = None) -> ExternalBlockDefinition:
    """Register the weather widget with a host registry."""
    definition = block_definition(config)
    registry.define_block(definition)
    return definition


def create_widget(
    attributes: WidgetAttributes | dict[str, Any] | None,
    profile_source: ProfileSource,
    config: Config | None = None,
    service: WeatherService | None = None,
) -> WeatherWidget:
    """Build a widget from host attributes and a profile accessor.

    Host attributes take precedence over the widget section of the config.
    """
    config = config or Config()
    if not isinstance(attributes, WidgetAttributes):
        attributes = WidgetAttributes.model_validate(attributes or {})

    city = attributes.city or config.widget.city
    allow_override = attributes.allow_city_override and config.widget.allow_city_override

    if service is None:
        service = WeatherService(
            api_key=config.weather.api_key,
            base_url=config.weather.base_url,
            timeout=config.weather.timeout_seconds,
        )

    return WeatherWidget(
        service=service,
        resolver=CityResolver(default_city=config.widget.default_city, configured_city=city),
        profile_source=profile_source,
        allow_city_override=allow_override,
        icon_base_url=config.weather.icon_base_url,
    )


async def render_block(
    attributes: WidgetAttributes | dict[str, Any] | None,
    profile_source: ProfileSource,
    config: Config | None = None,
    service: WeatherService | None = None,
) -> DisplayNode:
    """Resolve the city, fetch once and return the display tree."""
    widget = create_widget(attributes, profile_source, config, service)
    await widget.start()
    return widget.render()
