"""ThingsToDo - browse and plan travel activities from the terminal."""

__version__ = "0.3.0"
