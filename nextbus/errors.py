class NextBusError(Exception):
    """Base class for every failure that aborts a NextBus run."""


class ConfigError(NextBusError):
    """A required configuration value is missing or malformed."""


class ServerError(NextBusError):
    """The transit API returned a response that can't be used."""

    def __init__(self, message="Server error"):
        super().__init__(message)


class ResolutionError(NextBusError):
    """A resolution stage found nothing, or its results contradict each other."""


class EmptyResultError(NextBusError):
    """Resolution succeeded but no departures were found for any stop."""
