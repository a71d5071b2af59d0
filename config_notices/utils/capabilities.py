"""Runtime capability introspection.

Answers "is this module importable" and "does it expose this callable/class"
questions. Anything that fails to import counts as absent.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class RuntimeCapabilities:
    """Probe the running interpreter for optional libraries."""

    def _import(self, module: str) -> Any:
        try:
            return importlib.import_module(module)
        except ImportError as exc:
            logger.debug("Capability probe: %s is not importable (%s)", module, exc)
            return None

    def module_available(self, module: str) -> bool:
        return self._import(module) is not None

    def _attribute(self, module: str, name: str) -> Any:
        loaded = self._import(module)
        if loaded is None:
            return _MISSING
        return getattr(loaded, name, _MISSING)

    def function_exists(self, module: str, name: str) -> bool:
        attr = self._attribute(module, name)
        return attr is not _MISSING and callable(attr)

    def class_exists(self, module: str, name: str) -> bool:
        return inspect.isclass(self._attribute(module, name))


__all__ = ["RuntimeCapabilities"]
