"""Builds display trees for the weather card.

The builder is pure: a fetch outcome goes in, a tree of ``DisplayNode``
comes out. Rendering the tree is the host's job (see
``components.weather_card`` for the terminal host).
"""

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel, Field

from .models.config import DEFAULT_ICON_BASE_URL
from .models.weather import (
    Failure,
    FetchOutcome,
    Loading,
    Success,
    WeatherRecord,
    one_decimal,
    round_half_up,
)
from .services.conditions import icon_url

NIGHT_GRADIENT = "linear-gradient(160deg, #2C3E50 0%, #243B55 100%)"
STORM_GRADIENT = "linear-gradient(160deg, #455a64 0%, #37474f 100%)"
DAY_GRADIENT = "linear-gradient(160deg, #89CFF0 0%, #6BC7FF 100%)"

WET_KEYWORDS = ("rain", "shower", "drizzle", "thunder")

LOADING_MESSAGE = "Loading weather …"
NO_DATA_MESSAGE = "No data"
OVERRIDE_CITY_ACTION = "override-city"

NodeTag = Literal["panel", "heading", "image", "text", "span", "divider", "row", "column"]

_STATE_PANEL_STYLE = {
    "width": "100%",
    "min-height": "250px",
    "border-radius": "16px",
    "padding": "20px",
    "color": "white",
    "display": "flex",
    "align-items": "center",
    "justify-content": "center",
}


class DisplayNode(BaseModel):
    """A styled node in a rendering-library independent UI tree."""

    tag: NodeTag
    text: str = ""
    style: dict[str, Any] = Field(default_factory=dict)
    attrs: dict[str, str] = Field(default_factory=dict)
    action: str | None = None
    children: list["DisplayNode"] = Field(default_factory=list)

    def iter(self) -> Iterator["DisplayNode"]:
        """Walk the tree depth-first, starting with this node."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find(self, tag: str) -> "DisplayNode | None":
        """First node with the given tag, or None."""
        return next((node for node in self.iter() if node.tag == tag), None)

    def find_all(self, tag: str) -> list["DisplayNode"]:
        return [node for node in self.iter() if node.tag == tag]

    @property
    def full_text(self) -> str:
        """Text of this node followed by its children's text."""
        return self.text + "".join(child.full_text for child in self.children)


DisplayNode.model_rebuild()


def gradient(is_day: bool, description: str | None) -> str:
    """Pick the card background from time of day and conditions."""
    if not is_day:
        return NIGHT_GRADIENT
    desc = (description or "").lower()
    if any(keyword in desc for keyword in WET_KEYWORDS):
        return STORM_GRADIENT
    return DAY_GRADIENT


def build_loading() -> DisplayNode:
    """Placeholder shown while the first fetch for a city is in flight."""
    return DisplayNode(
        tag="panel",
        text=LOADING_MESSAGE,
        style={**_STATE_PANEL_STYLE, "background": gradient(True, ""), "font-size": "18px"},
    )


def build_failure(reason: str | None = None) -> DisplayNode:
    """Error panel; night styling for readability."""
    return DisplayNode(
        tag="panel",
        text=reason or NO_DATA_MESSAGE,
        style={
            **_STATE_PANEL_STYLE,
            "background": gradient(False, ""),
            "font-size": "16px",
            "text-align": "center",
        },
    )


def _detail_column(label: str, value: str, unit: str) -> DisplayNode:
    return DisplayNode(
        tag="column",
        style={"text-align": "center", "flex": 1},
        children=[
            DisplayNode(tag="text", text=label, style={"font-size": "12px", "opacity": 0.8}),
            DisplayNode(
                tag="text",
                text=value,
                style={"font-size": "20px", "font-weight": 600},
                children=[
                    DisplayNode(
                        tag="span", text=unit, style={"font-size": "12px", "margin-left": 2}
                    )
                ],
            ),
        ],
    )


def build_card(
    record: WeatherRecord,
    icon_base_url: str = DEFAULT_ICON_BASE_URL,
    allow_city_override: bool = True,
) -> DisplayNode:
    """Full weather card for a successful fetch."""
    heading_style: dict[str, Any] = {
        "margin": 0,
        "margin-bottom": 8,
        "font-size": "24px",
        "font-weight": "600",
    }
    if allow_city_override:
        heading_style["cursor"] = "pointer"

    return DisplayNode(
        tag="panel",
        style={
            "width": "100%",
            "border-radius": "16px",
            "padding": "20px",
            "color": "#FFFFFF",
            "background": gradient(record.is_day, record.description),
            "display": "flex",
            "flex-direction": "column",
            "align-items": "center",
        },
        children=[
            DisplayNode(
                tag="heading",
                text=record.location_name,
                style=heading_style,
                attrs={"prompt-default": record.location_name},
                action=OVERRIDE_CITY_ACTION if allow_city_override else None,
            ),
            DisplayNode(
                tag="image",
                attrs={"src": icon_url(record.icon, icon_base_url), "alt": "Weather icon"},
                style={"width": 120, "height": 120, "margin": "0 auto"},
            ),
            DisplayNode(
                tag="text",
                text=str(round_half_up(record.temp_f)),
                style={"font-size": "56px", "font-weight": 700, "margin-top": 12},
                children=[
                    DisplayNode(
                        tag="span", text="°F", style={"font-size": "36px", "margin-left": 4}
                    )
                ],
            ),
            DisplayNode(
                tag="text",
                text=record.description,
                style={"font-size": "18px", "margin-top": 4, "text-transform": "capitalize"},
            ),
            DisplayNode(
                tag="divider",
                style={"border-bottom": "1px solid rgba(255, 255, 255, 0.3)", "margin": "16px 0"},
            ),
            DisplayNode(
                tag="row",
                style={"width": "100%", "display": "flex", "margin-top": "12px"},
                children=[
                    _detail_column("Wind", one_decimal(record.wind_mph), "mph"),
                    _detail_column("Humidity", str(record.humidity), "%"),
                    _detail_column("Feels like", str(round_half_up(record.feels_like_f)), "°F"),
                ],
            ),
        ],
    )


def build(
    outcome: FetchOutcome,
    icon_base_url: str = DEFAULT_ICON_BASE_URL,
    allow_city_override: bool = True,
) -> DisplayNode:
    """Display tree for any fetch outcome."""
    if isinstance(outcome, Success):
        return build_card(outcome.record, icon_base_url, allow_city_override)
    if isinstance(outcome, Failure):
        return build_failure(outcome.reason)
    if isinstance(outcome, Loading):
        return build_loading()
    raise TypeError(f"Unknown fetch outcome: {outcome!r}")
