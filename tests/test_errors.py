"""Tests for error messages raised by the container."""

from __future__ import annotations

from di_container.core.errors import (
    DependencyNotFoundError,
    RegistrationError,
    ResolvableError,
)
from di_container.core.identifier import InjectIdentifier


def test_message_reports_type() -> None:
    error = DependencyNotFoundError(str, None)
    assert str(error) == "Could not find dependency for type: str "


def test_message_reports_key_when_type_missing() -> None:
    error = DependencyNotFoundError(None, "someKey")
    assert str(error) == "Could not find dependency for key: someKey"


def test_type_takes_precedence_over_key() -> None:
    error = DependencyNotFoundError(str, "someKey")
    assert str(error) == "Could not find dependency for type: str "


def test_message_without_type_or_key() -> None:
    error = DependencyNotFoundError(None, None)
    assert str(error) == "Could not find dependency for "


def test_error_carries_identifier_parts() -> None:
    error = DependencyNotFoundError.for_identifier(InjectIdentifier.by(type=int, key="n"))

    assert error.type is int
    assert error.key == "n"
    assert isinstance(error, ResolvableError)


def test_registration_error_keeps_identifier() -> None:
    identifier = InjectIdentifier.by(key="broken")
    error = RegistrationError(identifier)

    assert error.identifier is identifier
    assert "broken" in str(error)


def test_message_keeps_alias_arguments() -> None:
    error = DependencyNotFoundError(list[int], None)
    assert str(error) == "Could not find dependency for type: list[int] "
