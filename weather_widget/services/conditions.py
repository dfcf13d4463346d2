"""Mapping of WeatherAPI condition codes to icon filenames."""

DEFAULT_ICON = "default.svg"

# (day icon, night icon) per condition group
_GROUPS: list[tuple[tuple[int, ...], str, str]] = [
    ((1000,), "sunny.svg", "clear-moon.svg"),
    ((1003,), "partly-cloudy-sun.svg", "partly-cloudy-moon.svg"),
    ((1006,), "cloudy.svg", "cloudy.svg"),
    ((1009, 1030, 1135, 1147), "double-clouds.svg", "double-clouds.svg"),
    ((1063, 1072, 1150, 1153, 1168, 1171), "drizzle.svg", "drizzle-moon.svg"),
    (
        (1180, 1183, 1186, 1189, 1192, 1195, 1198, 1201, 1240, 1243, 1246),
        "rain.svg",
        "rain.svg",
    ),
    (
        (
            1066, 1069, 1114, 1117, 1204, 1207, 1210, 1213, 1216, 1219,
            1222, 1225, 1237, 1249, 1252, 1255, 1258, 1261, 1264,
        ),
        "snow.svg",
        "snow.svg",
    ),
    ((1087, 1273, 1276, 1279, 1282), "thunderstorm.svg", "thunderstorm.svg"),
]

CONDITION_ICONS: dict[int, tuple[str, str]] = {
    code: (day, night) for codes, day, night in _GROUPS for code in codes
}


def icon_for_condition(code: int, is_day: bool) -> str:
    """Return the icon filename for a provider condition code.

    Unknown codes fall back to DEFAULT_ICON for both day and night.
    """
    icons = CONDITION_ICONS.get(code)
    if icons is None:
        return DEFAULT_ICON
    day_icon, night_icon = icons
    return day_icon if is_day else night_icon


def icon_url(icon: str, base_url: str) -> str:
    """Join an icon filename onto the icon base URL."""
    return f"{base_url.rstrip('/')}/{icon}"
