"""Named extension points for the block's markup.

Each hook is an ordered chain of handlers.  ``apply`` threads a value
through every handler registered under a name, lowest priority first and
in registration order within a priority; each handler receives the
previous handler's return value followed by the hook's context
arguments.  With nothing registered the value passes through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

MARKUP_HOOK = "sitecounts_block_markup"
"""Receives the wrapper template before substitution."""

CONTENT_HOOK = "sitecounts_block_content"
"""Receives the fully assembled markup."""

DEFAULT_PRIORITY = 10

Handler = Callable[..., Any]


@dataclass
class _Registration:
    handler: Handler
    priority: int
    order: int


@dataclass
class Hooks:
    """Registry of named handler chains owned by one block instance."""

    _chains: dict[str, list[_Registration]] = field(default_factory=dict, init=False)
    _counter: int = field(default=0, init=False)

    def register(self, name: str, handler: Handler, priority: int = DEFAULT_PRIORITY) -> None:
        """Add *handler* to the chain called *name*."""
        chain = self._chains.setdefault(name, [])
        chain.append(_Registration(handler, priority, self._counter))
        chain.sort(key=lambda r: (r.priority, r.order))
        self._counter += 1

    def remove(self, name: str, handler: Handler) -> bool:
        """Remove every registration of *handler* under *name*.

        Returns True if anything was removed.
        """
        chain = self._chains.get(name, [])
        kept = [r for r in chain if r.handler is not handler]
        removed = len(kept) != len(chain)
        if kept:
            self._chains[name] = kept
        else:
            self._chains.pop(name, None)
        return removed

    def has(self, name: str) -> bool:
        return bool(self._chains.get(name))

    def apply(self, name: str, value: Any, *context: Any) -> Any:
        """Run *value* through the chain called *name* and return the result."""
        for registration in self._chains.get(name, ()):
            value = registration.handler(value, *context)
        if name in self._chains:
            logger.debug("Applied %d handler(s) for %s", len(self._chains[name]), name)
        return value
