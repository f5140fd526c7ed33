"""Protocol interfaces for code that consumes a container."""

from __future__ import annotations

from typing import Protocol, TypeVar

from .identifier import InjectIdentifier

T = TypeVar("T")


class Resolvable(Protocol):
    """Anything able to hand out dependencies by identifier."""

    def resolve(self, identifier: InjectIdentifier[T]) -> T:
        """Return the dependency stored under ``identifier``."""
        raise NotImplementedError

    def try_resolve(self, identifier: InjectIdentifier[T]) -> T | None:
        """Return the dependency or ``None`` when it cannot be resolved."""
        raise NotImplementedError


__all__ = ["Resolvable"]
