"""Identifiers naming dependency slots inside a container."""

from __future__ import annotations

import typing
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def describe_type(value_type: Any) -> str:
    """Return a short, human readable name for ``value_type``.

    Parameterised aliases such as ``list[int]`` keep their arguments.
    """
    if typing.get_origin(value_type) is not None:
        return repr(value_type)
    name = getattr(value_type, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(value_type)


class InjectIdentifier(Generic[T]):
    """Immutable key built from an optional type and an optional string key.

    Two identifiers are equal when their keys are equal and either both lack a
    type or both types compare equal. Plain classes compare by identity while
    aliases such as ``list[int]`` compare by value, so building the same alias
    twice names the same slot. The hash mixes in the type only when present.

    The generic parameter is a static hint only. ``InjectIdentifier[str].by(
    key="k")`` and ``InjectIdentifier[int].by(key="k")`` are the same
    identifier, so key-only registrations under a shared key overwrite each
    other regardless of the value type the caller expects.
    """

    __slots__ = ("_type", "_key")

    def __init__(self, type: type[T] | None = None, key: str | None = None) -> None:
        object.__setattr__(self, "_type", type)
        object.__setattr__(self, "_key", key)

    @classmethod
    def by(
        cls, type: type[T] | None = None, key: str | None = None
    ) -> InjectIdentifier[T]:
        """Build an identifier from a type and/or a key."""
        return cls(type=type, key=key)

    @property
    def type(self) -> type[T] | None:
        return self._type

    @property
    def key(self) -> str | None:
        return self._key

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InjectIdentifier):
            return NotImplemented
        return self._key == other._key and self._type == other._type

    def __hash__(self) -> int:
        if self._type is None:
            return hash((self._key,))
        return hash((self._key, self._type))

    def __repr__(self) -> str:
        type_name = None if self._type is None else describe_type(self._type)
        return f"InjectIdentifier(type={type_name}, key={self._key!r})"


__all__ = ["InjectIdentifier", "describe_type"]
