"""Terminal host application for the weather widget."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from .components.weather_card import WeatherCard
from .controller import WeatherWidget
from .host import BlockRegistry, WidgetAttributes, create_widget, define_block
from .models.config import Config
from .models.weather import FetchOutcome
from .services.profile import HttpProfileSource, ProfileSource, StaticProfileSource
from .services.weather_service import WeatherService

logger = logging.getLogger(__name__)


def profile_source_for(config: Config) -> ProfileSource:
    """Profile source described by the widget config."""
    if config.widget.profile_url:
        return HttpProfileSource(config.widget.profile_url)
    return StaticProfileSource(config.widget.profile_location)


class WeatherWidgetApp(App):
    """Hosts a single weather card."""

    TITLE = "Weather"

    CSS = """
    Screen {
        align: center middle;
    }

    WeatherCard {
        width: 60;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("c", "change_city", "Change City", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        config: Config | None = None,
        config_path: Path | None = None,
        attributes: WidgetAttributes | None = None,
        profile_source: ProfileSource | None = None,
        service: WeatherService | None = None,
    ) -> None:
        super().__init__()
        if config is None:
            config = Config.load_or_default(config_path or Path("config.json"))
        self.config = config
        self.registry = BlockRegistry()
        self.block = define_block(self.registry, config)
        self.widget: WeatherWidget = create_widget(
            attributes,
            profile_source or profile_source_for(config),
            config,
            service,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield WeatherCard(allow_city_override=self.widget.allow_city_override)
        yield Footer()

    def on_mount(self) -> None:
        self.widget.subscribe(self._on_outcome)
        self.query_one(WeatherCard).show(self.widget.render())
        self.run_worker(self.widget.start(), exclusive=False)

    def _on_outcome(self, outcome: FetchOutcome) -> None:
        logger.debug(f"Weather outcome: {outcome.kind.value}")
        city = self.widget.city
        self.sub_title = city or ""
        self.query_one(WeatherCard).show(self.widget.render())

    def on_weather_card_city_override(self, event: WeatherCard.CityOverride) -> None:
        """Load weather for a user-entered city."""
        self.run_worker(self.widget.change_city(event.city), exclusive=False)

    def action_refresh(self) -> None:
        """Fetch the current city again."""
        self.run_worker(self.widget.refresh(), exclusive=False)

    def action_change_city(self) -> None:
        """Open the city prompt."""
        self.query_one(WeatherCard).action_prompt_city()
