import importlib
import logging
from collections.abc import Iterable

from annogen.core.dispatch import HandlerSet

logger = logging.getLogger(__name__)

_BUILTIN_HANDLERS = {
    "lua": "annogen.handlers.lua:handlers",
    "sol2": "annogen.handlers.lua:handlers",
}


class HandlerLoadError(ImportError):
    pass


def resolve_handler_spec(spec: str) -> str:
    normalized = spec.strip()
    return _BUILTIN_HANDLERS.get(normalized.lower(), normalized)


def load_handler_set(spec: str) -> HandlerSet:
    """Load a ``HandlerSet`` from ``package.module:attribute`` or a builtin alias."""
    target = resolve_handler_spec(spec)
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise HandlerLoadError(
            f"Invalid handler spec '{spec}'. Use 'package.module:attribute' or one of {sorted(_BUILTIN_HANDLERS)}"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise HandlerLoadError(f"Cannot import handler module '{module_name}': {exc}") from exc

    handler_set = getattr(module, attribute, None)
    if not isinstance(handler_set, HandlerSet):
        raise HandlerLoadError(f"'{target}' is not a HandlerSet")

    logger.debug("Loaded %r from %s", handler_set, target)
    return handler_set


def load_handlers(specs: Iterable[str]) -> HandlerSet:
    merged: HandlerSet | None = None
    for spec in specs:
        handler_set = load_handler_set(spec)
        merged = handler_set if merged is None else merged.merge(handler_set)
    if merged is None:
        raise HandlerLoadError("No handler sets given")
    return merged
