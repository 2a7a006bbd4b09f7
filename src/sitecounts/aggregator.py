"""Published item counts per public content type."""

from __future__ import annotations

import gettext
import logging

from sitecounts.i18n import absint, esc_html, esc_html_gettext
from sitecounts.models import ContentStatus, CountResult
from sitecounts.repository import ContentRepository

logger = logging.getLogger(__name__)

COUNT_MESSAGE = "There are {count} {name}."


class CountAggregator:
    """Formats one ``<li>`` summary line per public content type."""

    def __init__(self, repository: ContentRepository, translations: gettext.NullTranslations):
        self._repository = repository
        self._translations = translations

    def collect(self) -> list[tuple[str, CountResult]]:
        """Return ``(display_name, result)`` pairs in directory order."""
        results: list[tuple[str, CountResult]] = []
        for descriptor in self._repository.list_public_types():
            count = self._repository.count(descriptor.slug, ContentStatus.PUBLISH)
            result = CountResult(type_slug=descriptor.slug, count=absint(count))
            results.append((descriptor.display_name, result))
        logger.debug("Counted %d public content types", len(results))
        return results

    def render(self) -> str:
        message = esc_html_gettext(self._translations, COUNT_MESSAGE)
        return "".join(
            "<li>" + message.format(count=result.count, name=esc_html(name)) + "</li>"
            for name, result in self.collect()
        )
