"""The Site Counts block: metadata and the render entry point.

Renders the number of published items per public content type, the
current item id, and up to five posts published between 9AM and 5PM
with the category ``baz`` and the tag ``foo``.
"""

from __future__ import annotations

import gettext
import json
import logging
from importlib import resources
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sitecounts.aggregator import CountAggregator
from sitecounts.assembler import Fragments, TemplateAssembler
from sitecounts.config import SiteCountsConfig
from sitecounts.fetcher import FilteredListFetcher
from sitecounts.hooks import Hooks
from sitecounts.i18n import absint, esc_html_gettext, load_translations
from sitecounts.models import BlockAttributes, BlockInstance, RenderContext, RenderResult
from sitecounts.presentation import (
    ContextStyleBuilder,
    PresentationBuilder,
    build_wrapper_attributes,
)
from sitecounts.repository import ContentRepository

logger = logging.getLogger(__name__)

CURRENT_ITEM_MESSAGE = "The current post ID is {id}"


class BlockMetadata(BaseModel):
    """Subset of ``block.json`` the renderer relies on."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    title: str = ""
    textdomain: str = ""
    uses_context: list[str] = Field(default_factory=list, alias="usesContext")


def load_block_metadata() -> BlockMetadata:
    """Read the ``block.json`` shipped with the package."""
    raw = resources.files("sitecounts").joinpath("block.json").read_text(encoding="utf-8")
    return BlockMetadata.model_validate(json.loads(raw))


class SiteCountsBlock:
    """Renders the block against an injected repository.

    Args:
        repository: Content repository and content-type directory.
        hooks: Extension points; a fresh empty registry when omitted.
        presentation: Style-context to CSS derivation.
        translations: Message catalogue; loaded from *config* when omitted.
        config: Block configuration; defaults when omitted.
        metadata: Block metadata; the packaged ``block.json`` when omitted.
    """

    def __init__(
        self,
        repository: ContentRepository,
        *,
        hooks: Hooks | None = None,
        presentation: PresentationBuilder | None = None,
        translations: gettext.NullTranslations | None = None,
        config: SiteCountsConfig | None = None,
        metadata: BlockMetadata | None = None,
    ) -> None:
        self.config = config or SiteCountsConfig()
        self.metadata = metadata or load_block_metadata().model_copy(
            update={"name": self.config.block.name}
        )
        self.hooks = hooks if hooks is not None else Hooks()
        self._repository = repository
        self._presentation = presentation or ContextStyleBuilder()
        self._translations = (
            translations if translations is not None else load_translations(self.config.i18n)
        )

    def render(
        self,
        attributes: BlockAttributes | dict[str, Any] | None,
        content: str,
        block: BlockInstance | dict[str, Any],
    ) -> str:
        """Render callback: return the block's markup.

        *content* is the saved inner content, which this dynamic block
        ignores.
        """
        return self.render_result(attributes, block).markup

    def render_result(
        self,
        attributes: BlockAttributes | dict[str, Any] | None,
        block: BlockInstance | dict[str, Any],
    ) -> RenderResult:
        attrs = (
            attributes
            if isinstance(attributes, BlockAttributes)
            else BlockAttributes.model_validate(attributes or {})
        )
        instance = (
            block if isinstance(block, BlockInstance) else BlockInstance.model_validate(block)
        )
        context = self._render_context(instance)
        logger.debug(
            "Rendering %s for current item %s", self.metadata.name, context.current_item_id
        )

        counts_markup = CountAggregator(self._repository, self._translations).render()
        list_markup = FilteredListFetcher(
            self._repository, self.config.to_query_spec(), self._translations
        ).render(context)

        presentation = self._presentation.build_attributes(context.style_context)
        wrapper_attributes = build_wrapper_attributes(
            self.metadata.name, presentation, attrs.class_name
        )

        current_item_markup = esc_html_gettext(self._translations, CURRENT_ITEM_MESSAGE).format(
            id=absint(context.current_item_id)
        )

        fragments = Fragments(
            wrapper_attributes=wrapper_attributes,
            counts=counts_markup,
            current_item=current_item_markup,
            filtered_list=list_markup,
        )
        return RenderResult(markup=TemplateAssembler(self.hooks).assemble(fragments))

    def _render_context(self, block: BlockInstance) -> RenderContext:
        # Only context keys the block declares in usesContext reach it.
        allowed = set(self.metadata.uses_context)
        style_context = {k: v for k, v in block.context.items() if k in allowed}
        return RenderContext(current_item_id=block.current_item_id, style_context=style_context)
