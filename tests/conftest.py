"""Shared fixtures for the Site Counts tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest
from sitecounts.models import (
    ContentItem,
    ContentStatus,
    ContentTypeDescriptor,
    ListQuerySpec,
)
from sitecounts.repository import ContentRepository


class FakeRepository(ContentRepository):
    """Canned answers; records every query it receives."""

    def __init__(
        self,
        types: Sequence[ContentTypeDescriptor] = (),
        counts: dict[str, int] | None = None,
        items: Sequence[ContentItem] = (),
    ) -> None:
        self.types = tuple(types)
        self.counts = counts or {}
        self.items = tuple(items)
        self.count_calls: list[tuple[str, ContentStatus]] = []
        self.queries: list[ListQuerySpec] = []

    def list_public_types(self) -> tuple[ContentTypeDescriptor, ...]:
        return tuple(t for t in self.types if t.public)

    def count(self, item_type: str, status: ContentStatus) -> int:
        self.count_calls.append((item_type, status))
        return self.counts.get(item_type, 0)

    def query_items(self, spec: ListQuerySpec) -> tuple[ContentItem, ...]:
        self.queries.append(spec)
        return self.items[: spec.max_results]


@pytest.fixture
def make_repository() -> Callable[..., FakeRepository]:
    return FakeRepository


@pytest.fixture
def post_and_page() -> list[ContentTypeDescriptor]:
    return [
        ContentTypeDescriptor(slug="post", display_name="Posts"),
        ContentTypeDescriptor(slug="page", display_name="Pages"),
    ]
