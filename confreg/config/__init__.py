"""Application configuration."""

from .settings import Configuration, get_configuration, load_configuration

__all__ = ["Configuration", "get_configuration", "load_configuration"]
