"""Dependency container keyed by :class:`InjectIdentifier`."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Any, TypeVar

from .config import ContainerSettings, load_settings
from .errors import DependencyNotFoundError, RegistrationError
from .identifier import InjectIdentifier
from .logging import configure_logging

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


def _matches_type(value: Any, expected: Any) -> bool:
    """Return ``True`` when ``value`` can be handed out as ``expected``."""
    if expected is None:
        return True
    try:
        return isinstance(value, expected)
    except TypeError:
        # Parameterised generics and plain protocols cannot be checked.
        return True


class Container:
    """Eager dependency store.

    Factories run at registration time and receive the container itself, so
    they can resolve anything registered before them. Registering an
    identifier again replaces the stored value.
    """

    def __init__(self, settings: ContainerSettings | None = None) -> None:
        """Initialise empty container storage."""
        self.settings = settings or ContainerSettings()
        self._dependencies: dict[InjectIdentifier[Any], Any] = {}
        self._lock: threading.RLock | None = (
            threading.RLock() if self.settings.thread_safe else None
        )

    @classmethod
    def from_container(
        cls, other: Container, settings: ContainerSettings | None = None
    ) -> Container:
        """Create an independent container seeded with ``other``'s entries."""
        container = cls(settings or other.settings)
        container.dependencies = other.dependencies
        return container

    @contextmanager
    def _guard(self) -> Iterator[None]:
        with self._lock if self._lock is not None else nullcontext():
            yield

    @property
    def dependencies(self) -> dict[InjectIdentifier[Any], Any]:
        """Snapshot of the stored entries."""
        with self._guard():
            return dict(self._dependencies)

    @dependencies.setter
    def dependencies(self, entries: Mapping[InjectIdentifier[Any], Any]) -> None:
        with self._guard():
            self._dependencies = dict(entries)
        LOGGER.debug("Replaced container contents with %d entries", len(entries))

    def __len__(self) -> int:
        with self._guard():
            return len(self._dependencies)

    def __contains__(self, identifier: object) -> bool:
        with self._guard():
            return identifier in self._dependencies

    def register(
        self, identifier: InjectIdentifier[T], factory: Callable[[Container], T]
    ) -> None:
        """Invoke ``factory`` and store its result under ``identifier``.

        Raises:
            RegistrationError: the factory raised; any previous entry is kept.
        """
        with self._guard():
            try:
                value = factory(self)
            except Exception as exc:
                LOGGER.exception("Factory for %r failed", identifier)
                raise RegistrationError(identifier) from exc
            replaced = identifier in self._dependencies
            self._dependencies[identifier] = value
        LOGGER.debug(
            "%s %r", "Replaced" if replaced else "Registered", identifier
        )

    def register_for(
        self,
        factory: Callable[[Container], T],
        type: type[T] | None = None,
        key: str | None = None,
    ) -> None:
        """Register using an identifier built from ``type`` and ``key``."""
        self.register(InjectIdentifier.by(type=type, key=key), factory)

    def resolve(self, identifier: InjectIdentifier[T]) -> T:
        """Return the value stored under ``identifier``.

        Raises:
            DependencyNotFoundError: nothing is stored under the identifier, or
                the stored value is not an instance of ``identifier.type``.
        """
        with self._guard():
            try:
                value = self._dependencies[identifier]
            except KeyError:
                LOGGER.debug("No dependency registered for %r", identifier)
                raise DependencyNotFoundError.for_identifier(identifier) from None
        if self.settings.strict_types and not _matches_type(value, identifier.type):
            LOGGER.debug(
                "Dependency for %r has unexpected type %s",
                identifier,
                type(value).__name__,
            )
            raise DependencyNotFoundError.for_identifier(identifier)
        return value

    def resolve_for(self, type: type[T] | None = None, key: str | None = None) -> T:
        """Resolve using an identifier built from ``type`` and ``key``."""
        return self.resolve(InjectIdentifier.by(type=type, key=key))

    def try_resolve(self, identifier: InjectIdentifier[T]) -> T | None:
        """Resolve a dependency if available; return ``None`` otherwise."""
        try:
            return self.resolve(identifier)
        except DependencyNotFoundError:
            return None

    def try_resolve_for(
        self, type: type[T] | None = None, key: str | None = None
    ) -> T | None:
        return self.try_resolve(InjectIdentifier.by(type=type, key=key))

    def remove(self, identifier: InjectIdentifier[Any]) -> None:
        """Drop the entry for ``identifier``; missing entries are ignored."""
        with self._guard():
            removed = identifier in self._dependencies
            self._dependencies.pop(identifier, None)
        if removed:
            LOGGER.debug("Removed %r", identifier)

    def remove_for(self, type: Any | None = None, key: str | None = None) -> None:
        self.remove(InjectIdentifier.by(type=type, key=key))

    def remove_all_dependencies(self) -> None:
        """Drop every stored entry."""
        with self._guard():
            count = len(self._dependencies)
            self._dependencies.clear()
        LOGGER.debug("Removed all %d dependencies", count)


_default_container: Container | None = None
_default_lock = threading.Lock()


def default_container() -> Container:
    """Return the process-wide default container.

    It is created on first use from :func:`load_settings`, so
    ``DI_CONTAINER_CONTAINER__*`` variables decide its behaviour.
    """
    global _default_container
    with _default_lock:
        if _default_container is None:
            _default_container = Container(load_settings().container)
            LOGGER.debug("Created default container: %r", _default_container.settings)
        return _default_container


def set_default_container(container: Container | None) -> Container | None:
    """Swap the process-wide default container and return the previous one.

    Passing ``None`` makes the next :func:`default_container` call build a
    fresh container from the current settings.
    """
    global _default_container
    with _default_lock:
        previous = _default_container
        _default_container = container
    return previous


def bootstrap(env_file: Path | str | None = None) -> Container:
    """Load settings, configure package logging and install a new default.

    Intended for application start-up; returns the installed container.
    """
    settings = load_settings(env_file=env_file)
    configure_logging(settings.logging)
    container = Container(settings.container)
    set_default_container(container)
    LOGGER.info("Installed default container (%r)", settings.container)
    return container


__all__ = [
    "Container",
    "bootstrap",
    "default_container",
    "set_default_container",
]
