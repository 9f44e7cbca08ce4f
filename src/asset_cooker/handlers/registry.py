"""Handler registry and explicit handler module loading."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from asset_cooker.errors import HandlerRegistrationError
from asset_cooker.handlers.base import AssetHandler
from asset_cooker.handlers.builtins import CopyHandler, ShaderHandler
from asset_cooker.handlers.mesh import MeshHandler
from asset_cooker.schemas import PipelineSettings
from asset_cooker.types import WILDCARD_EXTENSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerRegistration:
    """Active claim of one extension (or the wildcard) by a handler."""

    extension: str
    priority: int
    handler: AssetHandler


class HandlerRegistry:
    """Resolution table from file extension to handler.

    Built once from an ordered list of handlers. For every extension, and for
    the single wildcard slot, the claim with the highest priority is kept; on
    equal priority the later handler in the list wins.
    """

    def __init__(self, handlers: Iterable[AssetHandler] = ()) -> None:
        self._by_extension: dict[str, HandlerRegistration] = {}
        self._wildcard: HandlerRegistration | None = None
        self._handlers: list[AssetHandler] = []
        for handler in handlers:
            self._register(handler)

    def _register(self, handler: AssetHandler) -> None:
        name = getattr(handler, "name", "").strip()
        if not name:
            raise HandlerRegistrationError("Handler must define a non-empty 'name'.")
        self._handlers.append(handler)

        for extension, priority in handler.claimed_extensions():
            claim = HandlerRegistration(extension=extension, priority=priority, handler=handler)
            current = (
                self._wildcard
                if extension == WILDCARD_EXTENSION
                else self._by_extension.get(extension)
            )
            if current is not None and current.priority > priority:
                logger.debug(
                    "Ignoring %s claim on '%s' (priority %d); %s holds it at priority %d.",
                    name,
                    extension,
                    priority,
                    current.handler.name,
                    current.priority,
                )
                continue
            if extension == WILDCARD_EXTENSION:
                self._wildcard = claim
            else:
                self._by_extension[extension] = claim

    def resolve(self, extension: str) -> AssetHandler | None:
        """Return the handler for an extension.

        Parameters
        ----------
        extension : str
            File extension including the leading dot, compared exactly.

        Returns
        -------
        AssetHandler | None
            Extension-specific handler, else the wildcard handler, else ``None``.
        """
        registration = self._by_extension.get(extension)
        if registration is not None:
            return registration.handler
        if self._wildcard is not None:
            return self._wildcard.handler
        return None

    def registrations(self) -> list[HandlerRegistration]:
        """Return active extension claims sorted by extension."""
        return [self._by_extension[key] for key in sorted(self._by_extension)]

    def wildcard(self) -> HandlerRegistration | None:
        """Return the active wildcard claim, if any."""
        return self._wildcard

    def names(self) -> list[str]:
        """Return names of every registered handler, sorted."""
        return sorted({handler.name for handler in self._handlers})


def load_handler_module(module_or_path: str) -> list[AssetHandler]:
    """Load handlers from a module name or file path.

    .. warning::
        This executes code from the specified module. Only load handler
        modules from trusted sources.

    Parameters
    ----------
    module_or_path : str
        Python import path or filesystem path of the handler module.

    Returns
    -------
    list[AssetHandler]
        Handlers exposed by the module, in declaration order.
    """
    module = _import_module_or_path(module_or_path)
    return _handlers_from_module(module)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Raises
    ------
    HandlerRegistrationError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise HandlerRegistrationError(f"Unable to load handler module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise HandlerRegistrationError(
            f"Unable to import handler module '{module_or_path}': {exc}"
        ) from exc


def _handlers_from_module(module: ModuleType) -> list[AssetHandler]:
    """Collect handler definitions exposed by a module."""
    if hasattr(module, "register_handlers"):
        return list(module.register_handlers())

    handlers_obj = getattr(module, "HANDLERS", None)
    if handlers_obj is not None:
        return list(handlers_obj)

    handler_obj = getattr(module, "HANDLER", None)
    if handler_obj is not None:
        return [handler_obj]

    raise HandlerRegistrationError(
        "Handler module must expose register_handlers(), HANDLERS, or HANDLER."
    )


def builtin_handlers(settings: PipelineSettings) -> list[AssetHandler]:
    """Return the built-in handlers in registration order."""
    return [
        CopyHandler(),
        ShaderHandler(settings),
        MeshHandler(settings),
    ]


def create_default_registry(
    settings: PipelineSettings | None = None,
    extra_modules: Iterable[str] | None = None,
) -> HandlerRegistry:
    """Create the registry of built-in and explicitly requested handlers.

    Parameters
    ----------
    settings : PipelineSettings | None, optional
        Settings passed to handlers that read processor settings.
    extra_modules : Iterable[str] | None, optional
        Additional handler modules, registered after the built-ins.

    Returns
    -------
    HandlerRegistry
        Fully built registry.
    """
    handlers = builtin_handlers(settings or PipelineSettings())
    for module in extra_modules or []:
        handlers.extend(load_handler_module(module))
    return HandlerRegistry(handlers)
