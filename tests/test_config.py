"""Tests for configuration loading and the settings-driven default container."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import ValidationError

from di_container.core.config import load_settings
from di_container.core.container import (
    Container,
    bootstrap,
    default_container,
    set_default_container,
)
from di_container.core.logging import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Ensure each test sees fresh settings and a lazily rebuilt default."""

    load_settings.cache_clear()
    previous = set_default_container(None)
    yield
    set_default_container(previous)
    load_settings.cache_clear()


def test_defaults_loaded_without_env_file() -> None:
    """Default values should be returned when no overrides are present."""

    settings = load_settings(include_environment=False)
    assert settings.container.thread_safe is True
    assert settings.container.strict_types is True
    assert settings.logging.level == "WARNING"
    assert settings.logging.console is False


def test_env_file_overrides(tmp_path: Path) -> None:
    """Values defined in an env file should override defaults."""

    env_file = tmp_path / "test.env"
    env_file.write_text(
        "DI_CONTAINER_CONTAINER__STRICT_TYPES=off\n"
        "DI_CONTAINER_LOGGING__LEVEL=debug\n"
        "DI_CONTAINER_LOGGING__CONSOLE=\n"
        "UNRELATED=1\n",
        encoding="utf-8",
    )

    settings = load_settings(env_file=env_file, include_environment=False)
    assert settings.container.strict_types is False
    assert settings.logging.level == "DEBUG"
    assert settings.logging.console is False


def test_environment_overrides_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text("DI_CONTAINER_CONTAINER__THREAD_SAFE=true\n", encoding="utf-8")
    monkeypatch.setenv("DI_CONTAINER_CONTAINER__THREAD_SAFE", "false")

    settings = load_settings(env_file=env_file)
    assert settings.container.thread_safe is False


def test_keyword_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DI_CONTAINER_CONTAINER__STRICT_TYPES", "false")

    settings = load_settings(container__strict_types=True)
    assert settings.container.strict_types is True


def test_malformed_override_is_rejected() -> None:
    with pytest.raises(TypeError, match="section"):
        load_settings(strict_types=False)


def test_unknown_logging_level_is_rejected() -> None:
    with pytest.raises(ValidationError):
        load_settings(include_environment=False, logging__level="chatty")


def test_default_container_follows_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DI_CONTAINER_CONTAINER__STRICT_TYPES", "false")
    monkeypatch.setenv("DI_CONTAINER_CONTAINER__THREAD_SAFE", "false")

    container = default_container()

    assert container.settings.strict_types is False
    assert container.settings.thread_safe is False
    assert default_container() is container


def test_bootstrap_installs_configured_default(tmp_path: Path) -> None:
    env_file = tmp_path / "app.env"
    env_file.write_text(
        "DI_CONTAINER_CONTAINER__STRICT_TYPES=false\n"
        "DI_CONTAINER_LOGGING__LEVEL=INFO\n",
        encoding="utf-8",
    )
    logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = logger.level

    try:
        container = bootstrap(env_file=env_file)

        assert default_container() is container
        assert container.settings.strict_types is False
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(previous_level)


def test_container_built_from_loaded_settings() -> None:
    settings = load_settings(include_environment=False)
    container = Container(settings.container)

    assert container.settings.strict_types is True
