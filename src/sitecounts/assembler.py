"""Wrapper template assembly with the two markup hooks."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sitecounts.hooks import CONTENT_HOOK, MARKUP_HOOK, Hooks

logger = logging.getLogger(__name__)

WRAPPER_TEMPLATE = "<div {0}><ul>{1}</ul><p>{2}</p>{3}</div>"
"""Slots: wrapper attributes, count summary, current item line, filtered list."""

_SLOT = re.compile(r"\{([0-3])\}")


@dataclass(frozen=True)
class Fragments:
    """The four rendered pieces substituted into the wrapper template."""

    wrapper_attributes: str
    counts: str
    current_item: str
    filtered_list: str

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.wrapper_attributes, self.counts, self.current_item, self.filtered_list)


class TemplateAssembler:
    """Substitutes fragments into the (possibly overridden) wrapper template.

    ``MARKUP_HOOK`` handlers receive the template followed by the four
    fragments and return a replacement template.  ``CONTENT_HOOK``
    handlers receive the final markup and return what the block outputs.
    """

    def __init__(self, hooks: Hooks, template: str = WRAPPER_TEMPLATE):
        self._hooks = hooks
        self._template = template

    def assemble(self, fragments: Fragments) -> str:
        parts = fragments.as_tuple()
        template = self._hooks.apply(MARKUP_HOOK, self._template, *parts)
        if template != self._template:
            logger.debug("Wrapper template overridden by %s handlers", MARKUP_HOOK)
        # Only the four slots are replaced; other braces are literal text.
        markup = _SLOT.sub(lambda m: parts[int(m.group(1))], template)
        return self._hooks.apply(CONTENT_HOOK, markup)
