"""Error taxonomy for dependency registration and resolution."""

from __future__ import annotations

from typing import Any

from .identifier import InjectIdentifier, describe_type


class ResolvableError(RuntimeError):
    """Base class for container errors."""


class DependencyNotFoundError(ResolvableError):
    """Raised when a dependency is missing or has an unexpected type.

    The message names the type when one is known and only falls back to the
    key otherwise, so ``DependencyNotFoundError(str, "k")`` reads
    ``"Could not find dependency for type: str "``.
    """

    def __init__(self, type: Any | None = None, key: str | None = None) -> None:
        self.type = type
        self.key = key
        super().__init__(self.describe(type, key))

    @staticmethod
    def describe(value_type: Any | None, key: str | None) -> str:
        message = "Could not find dependency for "
        if value_type is not None:
            message += f"type: {describe_type(value_type)} "
        elif key is not None:
            message += f"key: {key}"
        return message

    @classmethod
    def for_identifier(cls, identifier: InjectIdentifier[Any]) -> DependencyNotFoundError:
        return cls(identifier.type, identifier.key)


class RegistrationError(ResolvableError):
    """Raised when a factory fails while registering a dependency."""

    def __init__(self, identifier: InjectIdentifier[Any]) -> None:
        self.identifier = identifier
        super().__init__(f"Factory for {identifier!r} failed")


__all__ = ["DependencyNotFoundError", "RegistrationError", "ResolvableError"]
