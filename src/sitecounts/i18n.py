"""Message translation and escaping helpers for block output."""

from __future__ import annotations

import gettext
import logging
from typing import Any

from markupsafe import escape

from sitecounts.config import I18nSectionConfig

logger = logging.getLogger(__name__)


def load_translations(config: I18nSectionConfig) -> gettext.NullTranslations:
    """Return the catalogue for the configured language.

    Falls back to identity translations when no catalogue is found.
    """
    if not config.locale_dir:
        return gettext.NullTranslations()
    languages = [config.language] if config.language else None
    translations = gettext.translation(
        config.domain,
        localedir=config.locale_dir,
        languages=languages,
        fallback=True,
    )
    if type(translations) is gettext.NullTranslations:
        logger.warning(
            "No %s catalogue under %s, using untranslated messages",
            config.domain,
            config.locale_dir,
        )
    return translations


def absint(value: Any) -> int:
    """Coerce *value* to a non-negative integer; unparseable values become 0."""
    try:
        return abs(int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def esc_html(text: str) -> str:
    """Escape *text* for HTML, writing quotes as the host platform does."""
    return str(escape(text)).replace("&#34;", "&quot;").replace("&#39;", "&#039;")


esc_attr = esc_html


def esc_html_gettext(translations: gettext.NullTranslations, message: str) -> str:
    """Translate *message* and escape the result for HTML output."""
    return esc_html(translations.gettext(message))
