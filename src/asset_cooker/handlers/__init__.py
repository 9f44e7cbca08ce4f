"""Asset handler interfaces, built-in handlers and registry."""

from .base import AssetHandler
from .registry import HandlerRegistration, HandlerRegistry, create_default_registry

__all__ = [
    "AssetHandler",
    "HandlerRegistration",
    "HandlerRegistry",
    "create_default_registry",
]
