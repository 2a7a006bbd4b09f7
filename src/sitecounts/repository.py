"""Content repository interface and a JSON-backed reference store.

The block only reads from the repository: a count per content type, one
filtered list query, and the directory of public content types.  The
host platform supplies the real implementation; ``ContentStore`` keeps
records in a single JSON file so the block can run standalone.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field

from sitecounts.models import (
    ContentItem,
    ContentRecord,
    ContentStatus,
    ContentTypeDescriptor,
    ListQuerySpec,
)

logger = logging.getLogger(__name__)

STORE_FILENAME = ".sitecounts-store.json"

DEFAULT_TYPES = (
    ContentTypeDescriptor(slug="post", display_name="Posts"),
    ContentTypeDescriptor(slug="page", display_name="Pages"),
    ContentTypeDescriptor(slug="attachment", display_name="Media"),
)


class ContentRepository(ABC):
    """Read-only queries the block issues against the content repository."""

    @abstractmethod
    def list_public_types(self) -> tuple[ContentTypeDescriptor, ...]:
        """Return the public content types in registration order."""

    @abstractmethod
    def count(self, item_type: str, status: ContentStatus) -> int:
        """Return the number of items of *item_type* with *status*."""

    @abstractmethod
    def query_items(self, spec: ListQuerySpec) -> tuple[ContentItem, ...]:
        """Return at most ``spec.max_results`` matching items, newest first."""


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    types: list[ContentTypeDescriptor] = Field(default_factory=lambda: list(DEFAULT_TYPES))
    records: list[ContentRecord] = Field(default_factory=list)


class ContentStore(ContentRepository):
    """JSON-backed content repository.

    *path* may name the store file directly or a directory, in which case
    the store lives in ``STORE_FILENAME`` inside it.  Loads on init and
    saves after every mutation.
    """

    def __init__(self, path: Path) -> None:
        self._path = path / STORE_FILENAME if path.is_dir() else path
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    # ── Write operations ─────────────────────────────────────────

    def register_type(self, descriptor: ContentTypeDescriptor) -> None:
        """Insert or replace a content type by slug, keeping its position."""
        for index, existing in enumerate(self._data.types):
            if existing.slug == descriptor.slug:
                self._data.types[index] = descriptor
                break
        else:
            self._data.types.append(descriptor)
        self._save()

    def upsert(self, record: ContentRecord) -> None:
        """Insert or replace a content record by id."""
        self._data.records = [r for r in self._data.records if r.id != record.id]
        self._data.records.append(record)
        self._save()

    # ── Read operations ──────────────────────────────────────────

    def get(self, item_id: int) -> ContentRecord | None:
        """Return a record by id, or None if not found."""
        for record in self._data.records:
            if record.id == item_id:
                return record
        return None

    def list_public_types(self) -> tuple[ContentTypeDescriptor, ...]:
        return tuple(t for t in self._data.types if t.public)

    def count(self, item_type: str, status: ContentStatus) -> int:
        return sum(
            1 for r in self._data.records if r.item_type == item_type and r.status == status
        )

    def query_items(self, spec: ListQuerySpec) -> tuple[ContentItem, ...]:
        matches = [r for r in self._data.records if spec.matches(r)]
        # Newest first; id breaks ties so equal timestamps stay deterministic.
        matches.sort(key=lambda r: (r.published_at, r.id), reverse=True)
        logger.debug("Query %s matched %d records", spec, len(matches))
        return tuple(r.to_item() for r in matches[: spec.max_results])
