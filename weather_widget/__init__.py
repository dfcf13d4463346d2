"""Weather widget - current conditions card for a city."""

__version__ = "1.0.0"
