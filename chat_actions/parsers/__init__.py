"""Domain-specific command parsers."""

from . import guards, todo, calendar, location, follow_up

__all__ = ["guards", "todo", "calendar", "location", "follow_up"]
