"""Workspace session discovery, caching and resolution."""

__version__ = "0.1.0"
