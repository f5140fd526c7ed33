"""Container configuration models and loader utilities.

Settings come from an optional ``.env`` file, then from the process
environment, then from keyword overrides. Variables are named
``DI_CONTAINER_<SECTION>__<FIELD>``, for example
``DI_CONTAINER_CONTAINER__STRICT_TYPES=false`` or
``DI_CONTAINER_LOGGING__LEVEL=debug``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator


class ContainerSettings(BaseModel):
    """Settings controlling container behaviour."""

    thread_safe: bool = Field(
        default=True, description="Guard the dependency mapping with a lock"
    )
    strict_types: bool = Field(
        default=True,
        description="Check resolved values against the identifier type",
    )


class LoggingSettings(BaseModel):
    """Logging preferences for the ``di_container`` logger."""

    level: str = Field(default="WARNING", description="Package logger level")
    structured: bool = Field(
        default=False, description="Use the brace-style structured format"
    )
    console: bool = Field(
        default=False,
        description="Attach a console handler instead of propagating to root",
    )

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown logging level: {value}")
        return normalized


class AppSettings(BaseModel):
    """Aggregated configuration."""

    container: ContainerSettings = Field(default_factory=ContainerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


ENV_PREFIX = "DI_CONTAINER_"


def _prefixed(entries: Mapping[str, str | None]) -> dict[str, str]:
    return {
        name: value
        for name, value in entries.items()
        if name.startswith(ENV_PREFIX) and value
    }


def _section_tree(entries: Mapping[str, str]) -> dict[str, dict[str, str]]:
    """Group ``DI_CONTAINER_<SECTION>__<FIELD>`` entries by section.

    Values stay strings; pydantic coerces ``"false"``, ``"0"`` or ``"off"``
    into the boolean fields.
    """
    tree: dict[str, dict[str, str]] = {}
    for name, value in entries.items():
        section, _, field = name.removeprefix(ENV_PREFIX).lower().partition("__")
        if not section or not field:
            continue
        tree.setdefault(section, {})[field] = value
    return tree


@lru_cache(maxsize=1)
def load_settings(
    env_file: Path | str | None = None,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load settings, applying env file, environment and overrides in order.

    Overrides use the same section__field naming as the environment, e.g.
    ``load_settings(container__strict_types=False)``.
    """
    entries: dict[str, str] = {}
    if env_file and Path(env_file).is_file():
        entries.update(_prefixed(dotenv_values(env_file)))
    if include_environment:
        entries.update(_prefixed(os.environ))

    tree: dict[str, dict[str, Any]] = _section_tree(entries)
    for name, value in overrides.items():
        section, _, field = name.lower().partition("__")
        if not field:
            raise TypeError(f"Override {name!r} must be named <section>__<field>")
        tree.setdefault(section, {})[field] = value
    return AppSettings.model_validate(tree)


__all__ = [
    "AppSettings",
    "ContainerSettings",
    "ENV_PREFIX",
    "LoggingSettings",
    "load_settings",
]
