"""serverstats - terminal client for a Glances-compatible stats endpoint."""

__version__ = "0.1.0"
