"""Customer management REST API with JWT bearer authentication."""

__version__ = "0.1.0"
