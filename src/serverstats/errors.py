"""Exceptions raised by serverstats."""


class ServerStatsError(Exception):
    """Base class for all serverstats errors."""


class TransportError(ServerStatsError):
    """The stats endpoint could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FormatError(ServerStatsError):
    """The response body is not a JSON object."""


class ConfigError(ServerStatsError):
    """Invalid client configuration."""
