"""Lazy injection helpers reading from a :class:`Container` at the point of use."""

from __future__ import annotations

import logging
import types
import typing
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from di_container.core.container import default_container
from di_container.core.errors import DependencyNotFoundError
from di_container.core.identifier import InjectIdentifier
from di_container.core.interfaces import Resolvable

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


class _Missing:
    """Marker for an absent default value."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def as_identifier(target: InjectIdentifier[T] | type[T]) -> InjectIdentifier[T]:
    """Return ``target`` unchanged or wrap a bare type into an identifier."""
    if isinstance(target, InjectIdentifier):
        return target
    return InjectIdentifier.by(type=target)


def inject(
    target: InjectIdentifier[T] | type[T],
    *,
    default: Any = MISSING,
    container: Resolvable | None = None,
) -> Callable[[], T]:
    """Return an accessor resolving ``target`` on first call and caching it.

    When resolution fails the ``default`` is returned instead. Without a
    default the failure is fatal: it is logged and
    :class:`DependencyNotFoundError` propagates to the caller.
    """
    identifier = as_identifier(target)
    source = container if container is not None else default_container()
    cache: list[Any] = []

    def accessor() -> T:
        if cache:
            return cache[0]
        try:
            value = source.resolve(identifier)
        except DependencyNotFoundError as exc:
            if default is MISSING:
                LOGGER.critical("Required dependency unavailable: %s", exc)
                raise
            LOGGER.debug("Using default value for %r", identifier)
            value = default
        cache.append(value)
        return value

    return accessor


def inject_safe(
    target: InjectIdentifier[T] | type[T],
    *,
    container: Resolvable | None = None,
) -> Callable[[], T | None]:
    """Return an accessor that yields ``None`` when ``target`` is unavailable."""
    return inject(target, default=None, container=container)


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


class _InjectedAttribute(Generic[T]):
    """Shared descriptor plumbing: resolve once per instance, then cache."""

    optional = False

    def __init__(
        self,
        target: InjectIdentifier[T] | type[T] | None = None,
        *,
        container: Resolvable | None = None,
    ) -> None:
        self._target = target
        self._container = container
        self._name: str | None = None
        self._owner: type | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self._owner = owner
        self._name = name

    def _identifier(self) -> InjectIdentifier[Any]:
        if self._target is not None:
            return as_identifier(self._target)
        annotation = self._annotation()
        if self.optional:
            annotation = _unwrap_optional(annotation)
        return InjectIdentifier.by(type=annotation)

    def _annotation(self) -> Any:
        if self._owner is None or self._name is None:
            raise TypeError(f"{type(self).__name__} must be declared on a class")
        try:
            hints = typing.get_type_hints(self._owner)
        except NameError:
            hints = dict(getattr(self._owner, "__annotations__", {}))
        annotation = hints.get(self._name)
        if annotation is None or isinstance(annotation, str):
            raise TypeError(
                f"Cannot infer the dependency type of "
                f"{self._owner.__name__}.{self._name}; pass it explicitly"
            )
        return annotation

    def _resolve(self) -> Any:
        raise NotImplementedError

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        value = self._resolve()
        try:
            instance.__dict__[self._name] = value
        except AttributeError:
            # Slotted instances have no __dict__; resolve on every access.
            LOGGER.debug(
                "%s has no __dict__, %s is not cached", type(instance).__name__, self._name
            )
        return value


class Injected(_InjectedAttribute[T]):
    """Class attribute resolving a required dependency on first access.

    ``text: str = Injected()`` resolves ``InjectIdentifier.by(type=str)``;
    ``text: str = Injected(InjectIdentifier.by(key="text"))`` uses the given
    identifier. Without a ``default`` a missing dependency raises
    :class:`DependencyNotFoundError`.
    """

    def __init__(
        self,
        target: InjectIdentifier[T] | type[T] | None = None,
        *,
        default: Any = MISSING,
        container: Resolvable | None = None,
    ) -> None:
        super().__init__(target, container=container)
        self._default = default

    def _resolve(self) -> Any:
        accessor = inject(
            self._identifier(), default=self._default, container=self._container
        )
        return accessor()


class InjectedSafe(_InjectedAttribute[T]):
    """Class attribute resolving an optional dependency, ``None`` when absent."""

    optional = True

    def _resolve(self) -> Any:
        return inject_safe(self._identifier(), container=self._container)()


__all__ = [
    "Injected",
    "InjectedSafe",
    "MISSING",
    "as_identifier",
    "inject",
    "inject_safe",
]
