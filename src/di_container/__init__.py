"""Minimal dependency-injection container keyed by type and/or string key."""

from .core import (
    AppSettings,
    Container,
    ContainerSettings,
    DependencyNotFoundError,
    InjectIdentifier,
    LoggingSettings,
    RegistrationError,
    Resolvable,
    ResolvableError,
    bootstrap,
    configure_logging,
    default_container,
    load_settings,
    set_default_container,
)
from .injection import MISSING, Injected, InjectedSafe, inject, inject_safe

__all__ = [
    "AppSettings",
    "Container",
    "ContainerSettings",
    "DependencyNotFoundError",
    "InjectIdentifier",
    "Injected",
    "InjectedSafe",
    "LoggingSettings",
    "MISSING",
    "RegistrationError",
    "Resolvable",
    "ResolvableError",
    "bootstrap",
    "configure_logging",
    "default_container",
    "inject",
    "inject_safe",
    "load_settings",
    "set_default_container",
]
