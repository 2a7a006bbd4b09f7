"""Presentational attributes derived from the shared block context.

Colour and font-size values set on a parent block reach this block as
context.  Named values (from the theme palette) become ``has-*`` classes;
custom values become inline styles.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

from sitecounts.i18n import esc_attr
from sitecounts.models import PresentationAttributes

_KEBAB_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[\s_]+")


def to_kebab_case(value: str) -> str:
    """``vividRed`` / ``vivid_red`` / ``Vivid Red`` -> ``vivid-red``."""
    return _KEBAB_BOUNDARY.sub("-", value.strip()).lower()


class PresentationBuilder(ABC):
    """Turns the shared style context into CSS classes and inline styles."""

    @abstractmethod
    def build_attributes(self, style_context: dict[str, Any]) -> PresentationAttributes:
        """Return the classes and styles for *style_context*."""


class ContextStyleBuilder(PresentationBuilder):
    """Colour and font-size derivation used by the host's list blocks."""

    def build_attributes(self, style_context: dict[str, Any]) -> PresentationAttributes:
        colors = self._colors(style_context)
        font_sizes = self._font_sizes(style_context)
        return PresentationAttributes(
            css_classes=colors.css_classes + font_sizes.css_classes,
            inline_styles=colors.inline_styles + font_sizes.inline_styles,
        )

    def _colors(self, context: dict[str, Any]) -> PresentationAttributes:
        classes: list[str] = []
        styles = ""

        has_named_text = "textColor" in context
        has_custom_text = "customTextColor" in context
        if has_named_text or has_custom_text:
            classes.append("has-text-color")
        if has_named_text:
            classes.append(f"has-{to_kebab_case(context['textColor'])}-color")
        elif has_custom_text:
            styles += f"color: {context['customTextColor']};"

        has_named_bg = "backgroundColor" in context
        has_custom_bg = "customBackgroundColor" in context
        if has_named_bg or has_custom_bg:
            classes.append("has-background")
        if has_named_bg:
            classes.append(f"has-{to_kebab_case(context['backgroundColor'])}-background-color")
        elif has_custom_bg:
            styles += f"background-color: {context['customBackgroundColor']};"

        return PresentationAttributes(css_classes=classes, inline_styles=styles)

    def _font_sizes(self, context: dict[str, Any]) -> PresentationAttributes:
        if "fontSize" in context:
            return PresentationAttributes(css_classes=[f"has-{context['fontSize']}-font-size"])
        custom = (context.get("style") or {}).get("typography", {}).get("fontSize")
        if custom is not None:
            return PresentationAttributes(inline_styles=f"font-size: {custom};")
        return PresentationAttributes()


def block_class_name(block_name: str) -> str:
    """``xwp/site-counts`` -> ``wp-block-xwp-site-counts``."""
    return "wp-block-" + block_name.replace("/", "-")


def build_wrapper_attributes(
    block_name: str,
    presentation: PresentationAttributes,
    extra_class: str = "",
) -> str:
    """Serialize the wrapper element's ``class`` and ``style`` attributes.

    Empty attributes are omitted.  Values are HTML-escaped.
    """
    classes = [block_class_name(block_name), *presentation.css_classes]
    if extra_class.strip():
        classes.append(extra_class.strip())
    parts = [f'class="{esc_attr(" ".join(c for c in classes if c))}"']
    style = presentation.inline_styles.strip()
    if style:
        parts.append(f'style="{esc_attr(style)}"')
    return " ".join(parts)
