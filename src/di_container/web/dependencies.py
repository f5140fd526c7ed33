"""FastAPI dependencies resolving values from a :class:`Container`."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import FastAPI, HTTPException, Request, status

from di_container.core.container import Container, default_container
from di_container.core.errors import DependencyNotFoundError
from di_container.core.identifier import InjectIdentifier
from di_container.injection import as_identifier

T = TypeVar("T")

CONTAINER_STATE_ATTR = "di_container"

LOGGER = logging.getLogger(__name__)


def install_container(app: FastAPI, container: Container) -> None:
    """Make ``container`` the source for dependencies served by ``app``."""
    setattr(app.state, CONTAINER_STATE_ATTR, container)
    LOGGER.info("Installed container with %d dependencies", len(container))


def get_container(request: Request) -> Container:
    """Return the container installed on the app, or the default container."""
    container = getattr(request.app.state, CONTAINER_STATE_ATTR, None)
    if container is None:
        return default_container()
    return container


def provide(target: InjectIdentifier[T] | type[T]) -> Callable[[Request], T]:
    """Build a ``Depends`` callable resolving a required dependency.

    A missing dependency is a server fault and is reported as HTTP 500.
    """
    identifier = as_identifier(target)

    def dependency(request: Request) -> Any:
        try:
            return get_container(request).resolve(identifier)
        except DependencyNotFoundError as exc:
            LOGGER.error("Request needed unavailable dependency: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(exc),
            ) from exc

    return dependency


def provide_safe(
    target: InjectIdentifier[T] | type[T],
) -> Callable[[Request], T | None]:
    """Build a ``Depends`` callable yielding ``None`` for missing dependencies."""
    identifier = as_identifier(target)

    def dependency(request: Request) -> Any:
        return get_container(request).try_resolve(identifier)

    return dependency


__all__ = [
    "CONTAINER_STATE_ATTR",
    "get_container",
    "install_container",
    "provide",
    "provide_safe",
]
