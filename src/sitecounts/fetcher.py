"""The filtered list of recent posts shown under the counts."""

from __future__ import annotations

import gettext
import logging

from sitecounts.i18n import esc_html, esc_html_gettext
from sitecounts.models import ContentItem, ListQuerySpec, RenderContext
from sitecounts.repository import ContentRepository

logger = logging.getLogger(__name__)

HEADING_MESSAGE = "{limit} posts with the tag of {tag} and the category of {category}"


class FilteredListFetcher:
    """Runs the list query once and renders the matches.

    The query fetches one item more than is displayed so that skipping the
    current item can still leave a full list.  Skipped slots are not
    backfilled.
    """

    def __init__(
        self,
        repository: ContentRepository,
        spec: ListQuerySpec,
        translations: gettext.NullTranslations,
    ):
        self._repository = repository
        self._spec = spec
        self._translations = translations

    @property
    def spec(self) -> ListQuerySpec:
        return self._spec

    def fetch(self, context: RenderContext) -> tuple[list[ContentItem], bool]:
        """Return the displayable items and whether the query matched anything."""
        items = self._repository.query_items(self._spec)
        current = context.current_item_id
        shown = [item for item in items if current is None or item.id != current]
        if len(shown) != len(items):
            logger.debug("Skipped current item %s from list", current)
        return shown, bool(items)

    def render(self, context: RenderContext) -> str:
        shown, matched = self.fetch(context)
        if not matched:
            return ""
        entries = "".join(f"<li> {esc_html(item.title)} </li>" for item in shown)
        heading = esc_html_gettext(self._translations, HEADING_MESSAGE).format(
            limit=self._spec.display_limit,
            tag=esc_html(self._spec.tag),
            category=esc_html(self._spec.category),
        )
        return f"<h2>{heading}</h2><ul>{entries}</ul>"
