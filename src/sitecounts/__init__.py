"""Site Counts — a dynamic block summarising site content.

Renders published item counts per public content type and a short list
of posts filtered by publish hour, category and tag, with hooks for
rewriting the wrapper template and the final markup.
"""

from sitecounts.block import BlockMetadata, SiteCountsBlock, load_block_metadata
from sitecounts.config import SiteCountsConfig, load_config
from sitecounts.hooks import CONTENT_HOOK, MARKUP_HOOK, Hooks
from sitecounts.models import (
    BlockAttributes,
    BlockInstance,
    ContentItem,
    ContentRecord,
    ContentStatus,
    ContentTypeDescriptor,
    CountResult,
    ListQuerySpec,
    PresentationAttributes,
    RenderContext,
    RenderResult,
    TimeWindow,
)
from sitecounts.presentation import ContextStyleBuilder, PresentationBuilder
from sitecounts.repository import ContentRepository, ContentStore

__version__ = "0.1.0"

__all__ = [
    "CONTENT_HOOK",
    "MARKUP_HOOK",
    "BlockAttributes",
    "BlockInstance",
    "BlockMetadata",
    "ContentItem",
    "ContentRecord",
    "ContentRepository",
    "ContentStatus",
    "ContentStore",
    "ContentTypeDescriptor",
    "ContextStyleBuilder",
    "CountResult",
    "Hooks",
    "ListQuerySpec",
    "PresentationAttributes",
    "PresentationBuilder",
    "RenderContext",
    "RenderResult",
    "SiteCountsBlock",
    "SiteCountsConfig",
    "TimeWindow",
    "load_block_metadata",
    "load_config",
]
