"""Configuration for sessionkeeper."""

from .settings import Settings, load_config

__all__ = ["Settings", "load_config"]
