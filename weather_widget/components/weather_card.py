"""Weather card component rendering display trees in the terminal."""

import logging

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Label, Rule, Static

from ..presentation import (
    DAY_GRADIENT,
    NIGHT_GRADIENT,
    OVERRIDE_CITY_ACTION,
    STORM_GRADIENT,
    DisplayNode,
    build_loading,
)
from .city_prompt import CityPrompt

logger = logging.getLogger(__name__)

# Terminals can't show the SVG icons, so each icon gets a glyph
ICON_GLYPHS = {
    "sunny.svg": "☀",
    "clear-moon.svg": "☾",
    "partly-cloudy-sun.svg": "⛅",
    "partly-cloudy-moon.svg": "☁☾",
    "cloudy.svg": "☁",
    "double-clouds.svg": "☁☁",
    "drizzle.svg": "🌦",
    "drizzle-moon.svg": "☂",
    "rain.svg": "🌧",
    "snow.svg": "❄",
    "thunderstorm.svg": "⛈",
}
DEFAULT_GLYPH = "?"

GRADIENT_CLASSES = {
    DAY_GRADIENT: "day",
    STORM_GRADIENT: "storm",
    NIGHT_GRADIENT: "night",
}


def escape_markup(text: str) -> str:
    """Escape Rich markup characters in provider or user text."""
    return text.replace("[", r"\[").replace("]", r"\]")


def glyph_for_icon(src: str) -> str:
    """Glyph for an icon URL or filename."""
    return ICON_GLYPHS.get(src.rsplit("/", 1)[-1], DEFAULT_GLYPH)


class CityHeading(Static):
    """Clickable location name."""

    class Clicked(Message):
        """Message sent when the heading is clicked."""

        def __init__(self, location_name: str) -> None:
            super().__init__()
            self.location_name = location_name

    def __init__(self, location_name: str, clickable: bool = True) -> None:
        super().__init__(
            f"[bold]{escape_markup(location_name)}[/bold]", markup=True, classes="card-heading"
        )
        self.location_name = location_name
        self.clickable = clickable
        if clickable:
            self.tooltip = "Click to change city"

    def on_click(self, event: events.Click) -> None:
        if self.clickable:
            self.post_message(self.Clicked(self.location_name))


class WeatherCard(Static):
    """Card displaying a weather display tree."""

    DEFAULT_CSS = """
    WeatherCard {
        height: auto;
        min-height: 12;
        padding: 1 2;
        color: white;
    }

    WeatherCard.day {
        background: #6BC7FF;
    }

    WeatherCard.storm {
        background: #455a64;
    }

    WeatherCard.night {
        background: #243B55;
    }

    WeatherCard #card-body {
        height: auto;
        align: center middle;
    }

    WeatherCard .state-message {
        width: 100%;
        content-align: center middle;
        text-align: center;
        padding: 4 0;
    }

    WeatherCard .card-heading {
        width: 100%;
        text-align: center;
    }

    WeatherCard .card-icon {
        width: 100%;
        text-align: center;
        padding: 1 0;
    }

    WeatherCard .card-temperature {
        width: 100%;
        text-align: center;
        text-style: bold;
    }

    WeatherCard .card-description {
        width: 100%;
        text-align: center;
    }

    WeatherCard .card-details {
        height: auto;
    }

    WeatherCard .card-column {
        width: 1fr;
        height: auto;
    }

    WeatherCard .card-column Label {
        width: 100%;
        text-align: center;
    }
    """

    class CityOverride(Message):
        """Message sent when the user enters a new city."""

        def __init__(self, city: str) -> None:
            super().__init__()
            self.city = city

    def __init__(self, allow_city_override: bool = True) -> None:
        super().__init__()
        self.allow_city_override = allow_city_override
        self._tree: DisplayNode = build_loading()

    @property
    def tree(self) -> DisplayNode:
        return self._tree

    def compose(self) -> ComposeResult:
        yield Vertical(id="card-body")

    def on_mount(self) -> None:
        self.show(self._tree)

    def show(self, tree: DisplayNode) -> None:
        """Replace the card contents with a new display tree."""
        self._tree = tree
        self.remove_class(*GRADIENT_CLASSES.values())
        self.add_class(GRADIENT_CLASSES.get(tree.style.get("background", ""), "night"))
        if not self.is_mounted:
            return

        body = self.query_one("#card-body", Vertical)
        body.remove_children()
        body.mount_all(self._to_widgets(tree))

    def _to_widgets(self, panel: DisplayNode) -> list[Widget]:
        """Translate the top-level panel's children into Textual widgets."""
        if not panel.children:
            return [Label(panel.text, markup=False, classes="state-message")]

        widgets: list[Widget] = []
        texts_seen = 0
        for node in panel.children:
            if node.tag == "heading":
                widgets.append(CityHeading(node.text, node.action == OVERRIDE_CITY_ACTION))
            elif node.tag == "image":
                widgets.append(Static(glyph_for_icon(node.attrs.get("src", "")), classes="card-icon"))
            elif node.tag == "text":
                # Temperature comes first, description second
                css_class = "card-temperature" if texts_seen == 0 else "card-description"
                texts_seen += 1
                widgets.append(Static(node.full_text, markup=False, classes=css_class))
            elif node.tag == "divider":
                widgets.append(Rule())
            elif node.tag == "row":
                widgets.append(
                    Horizontal(
                        *(self._column(column) for column in node.children),
                        classes="card-details",
                    )
                )
            else:
                logger.debug(f"Skipping unsupported node {node.tag}")
        return widgets

    def _column(self, column: DisplayNode) -> Vertical:
        labels = [Label(child.full_text, markup=False) for child in column.children]
        return Vertical(*labels, classes="card-column")

    def on_city_heading_clicked(self, event: CityHeading.Clicked) -> None:
        event.stop()
        self._open_prompt(event.location_name)

    def action_prompt_city(self) -> None:
        """Open the city prompt from the keyboard."""
        heading = self._tree.find("heading")
        if heading is None or heading.action != OVERRIDE_CITY_ACTION:
            return
        self._open_prompt(heading.text)

    def _open_prompt(self, current: str) -> None:
        if not self.allow_city_override:
            return

        def on_answer(city: str | None) -> None:
            if city and city.strip():
                self.post_message(self.CityOverride(city.strip()))

        self.app.push_screen(CityPrompt(current), on_answer)
