"""Block domain models — pure Pydantic v2 data types.

These models describe what the Site Counts block reads from the content
repository and what it hands back to the host.  No I/O, no business
logic; the repository, the block and the CLI all import from here.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Repository data
# ---------------------------------------------------------------------------


class ContentStatus(StrEnum):
    """Publication status of a content record."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"


class ContentTypeDescriptor(BaseModel):
    """A registered content type, e.g. ``post`` labelled "Posts"."""

    model_config = ConfigDict(frozen=True)

    slug: str
    display_name: str
    public: bool = True


class CountResult(BaseModel):
    """Number of published items of one content type."""

    type_slug: str
    count: int = Field(ge=0)


class ContentItem(BaseModel):
    """Read-only projection of a content record used for list output."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str


class ContentRecord(BaseModel):
    """A stored content item as the repository keeps it."""

    id: int
    title: str
    item_type: str = "post"
    status: ContentStatus = ContentStatus.PUBLISH
    published_at: datetime
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def to_item(self) -> ContentItem:
        return ContentItem(id=self.id, title=self.title)


# ---------------------------------------------------------------------------
# Query specification
# ---------------------------------------------------------------------------


class TimeWindow(BaseModel):
    """Hour-of-day window; both bounds are inclusive."""

    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(default=9, ge=0, le=23)
    end_hour: int = Field(default=17, ge=0, le=23)

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour <= self.end_hour


class ListQuerySpec(BaseModel):
    """Filtered list query issued once per render."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(default=6, ge=1)
    item_type: str = "post"
    status: ContentStatus = ContentStatus.PUBLISH
    time_window: TimeWindow = Field(default_factory=TimeWindow)
    category: str = "baz"
    tag: str = "foo"

    @property
    def display_limit(self) -> int:
        """Items shown at most; one fetched slot covers the skipped current item."""
        return max(self.max_results - 1, 0)

    def matches(self, record: ContentRecord) -> bool:
        """Return True if *record* satisfies every predicate of this query."""
        return (
            record.item_type == self.item_type
            and record.status == self.status
            and self.time_window.contains(record.published_at.hour)
            and self.category in record.categories
            and self.tag in record.tags
        )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class PresentationAttributes(BaseModel):
    """CSS classes and inline styles derived from the shared style context."""

    css_classes: list[str] = Field(default_factory=list)
    inline_styles: str = ""


class BlockAttributes(BaseModel):
    """Attributes saved with the block instance.

    Only ``className`` is interpreted; anything else is carried through
    untouched and never validated.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    class_name: str = Field(default="", alias="className")


class BlockInstance(BaseModel):
    """The block as the host hands it to the render callback."""

    context: dict[str, Any] = Field(default_factory=dict)
    current_item_id: int | None = None


class RenderContext(BaseModel):
    """Per-render view of the host context."""

    model_config = ConfigDict(frozen=True)

    current_item_id: int | None = None
    style_context: dict[str, Any] = Field(default_factory=dict)

    @field_validator("current_item_id")
    @classmethod
    def _zero_means_absent(cls, value: int | None) -> int | None:
        # The host reports "no current item" as id 0.
        return value or None


class RenderResult(BaseModel):
    """Final markup returned to the host."""

    markup: str
