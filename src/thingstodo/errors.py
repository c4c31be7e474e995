"""Error types raised across ThingsToDo."""


class ThingsToDoError(Exception):
    """Base class for application errors."""


class DataLoadError(ThingsToDoError):
    """The activity source is missing, unreadable or malformed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load activities from {source}: {reason}")
        self.source = source
        self.reason = reason


class RemoteGenerationError(ThingsToDoError):
    """The text-generation service failed or returned an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FacetValidationError(ThingsToDoError, ValueError):
    """A facet value does not name any of the currently valid options."""

    def __init__(self, facet: str, value: str):
        super().__init__(f"Unknown {facet} value '{value}'")
        self.facet = facet
        self.value = value
