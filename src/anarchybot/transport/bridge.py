# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Thin wrapper over JSPyBridge.

Importing ``javascript`` starts a Node.js process, so the import is deferred
until a session is actually opened.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from anarchybot.errors import AdapterError
from anarchybot.logging import get_logger

logger = get_logger(__name__)


class JsBridge:
    """Access to Node modules and event emitters."""

    def __init__(self) -> None:
        self._modules: dict[str, Any] = {}

    def require(self, module: str) -> Any:
        """Load a Node module (installed on first use by JSPyBridge).

        Raises:
            AdapterError: If the module cannot be loaded
        """
        if module not in self._modules:
            from javascript import require

            logger.debug("js_require", module=module)
            try:
                self._modules[module] = require(module)
            except Exception as e:
                raise AdapterError(f"Cannot load Node module {module!r}: {e}") from e
        return self._modules[module]

    def on(self, emitter: Any, event: str, handler: Callable[..., None]) -> None:
        """Register ``handler(this, *args)`` for ``event`` on a JS emitter."""
        from javascript import On

        On(emitter, event)(handler)

    def values(self, obj: Any) -> list[Any]:
        """Return ``Object.values(obj)`` as a Python list."""
        from javascript import globalThis

        if obj is None:
            return []
        return list(globalThis.Object.values(obj))
