"""Core identifier, container, configuration and logging utilities."""

from .config import AppSettings, ContainerSettings, LoggingSettings, load_settings
from .container import Container, bootstrap, default_container, set_default_container
from .errors import DependencyNotFoundError, RegistrationError, ResolvableError
from .identifier import InjectIdentifier
from .interfaces import Resolvable
from .logging import configure_logging

__all__ = [
    "AppSettings",
    "Container",
    "ContainerSettings",
    "DependencyNotFoundError",
    "InjectIdentifier",
    "LoggingSettings",
    "RegistrationError",
    "Resolvable",
    "ResolvableError",
    "bootstrap",
    "configure_logging",
    "default_container",
    "load_settings",
    "set_default_container",
]
