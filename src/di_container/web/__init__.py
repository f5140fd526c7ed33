"""FastAPI integration for dependency containers."""

from .dependencies import get_container, install_container, provide, provide_safe

__all__ = ["get_container", "install_container", "provide", "provide_safe"]
