"""Catalog of registry entries.

Applies identity normalization and language detection to loaded items and
indexes the resulting entries by collection and slug.
"""

import logging
import posixpath
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from copilot_registry.config import RegistryConfig
from copilot_registry.core.collections import COLLECTIONS, CollectionKey
from copilot_registry.core.identity import (
    create_slug,
    effective_path,
    get_display_path,
    get_file_name,
    strip_extension,
)
from copilot_registry.core.language import Language, get_language
from copilot_registry.core.loader import load_items
from copilot_registry.core.types import DEFAULT_ROOT_MARKER, Item, URLPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """Registry entry with derived presentation fields."""

    item: Item
    slug: str
    title: str
    file_name: str
    display_path: str
    extension: str
    language: Language

    @property
    def collection(self) -> str:
        return self.item.collection

    @property
    def path(self) -> URLPath:
        return URLPath(f"/{self.item.collection}/{self.slug}")

    @property
    def description(self) -> str | None:
        return (self.item.data or {}).get("description")

    def to_summary(self) -> dict[str, Any]:
        """Convert to a summary dictionary for JSON listings."""
        return {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "path": self.path,
            "fileName": self.file_name,
            "displayPath": self.display_path,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to a full dictionary including content."""
        result = self.to_summary()
        result.update(
            {
                "collection": self.collection,
                "language": self.language.value,
                "data": dict(self.item.data or {}),
                "content": self.item.body or "",
            }
        )
        return result


@dataclass(frozen=True)
class SlugCollision:
    """Item dropped because its slug was already taken."""

    collection: str
    slug: str
    kept: str
    dropped: str


def create_entry(item: Item, *, root_marker: str = DEFAULT_ROOT_MARKER) -> Entry:
    """Derive an entry from an item.

    The slug comes from the item id (relative to the collection directory);
    file name and display path come from the effective path.

    Args:
        item: Loaded content item
        root_marker: Root marker segment configured for the registry

    Returns:
        Entry with derived fields
    """
    path = effective_path(item)
    base_name = posixpath.basename(path)
    extension = posixpath.splitext(base_name)[1]
    title = (item.data or {}).get("title") or strip_extension(base_name)

    return Entry(
        item=item,
        slug=create_slug(item.id or path, root_marker=root_marker),
        title=title,
        file_name=get_file_name(item, root_marker=root_marker),
        display_path=get_display_path(item, root_marker=root_marker),
        extension=extension,
        language=get_language(extension, item.body),
    )


class Catalog:
    """Registry entries indexed by collection and slug."""

    __slots__ = ("_by_collection", "_collisions")

    def __init__(
        self,
        by_collection: dict[str, dict[str, Entry]],
        collisions: list[SlugCollision],
    ) -> None:
        self._by_collection = by_collection
        self._collisions = collisions

    @property
    def collisions(self) -> list[SlugCollision]:
        return list(self._collisions)

    def collections(self) -> list[CollectionKey]:
        """Get collection keys in table order, including empty collections."""
        return list(COLLECTIONS)

    def get_entries(self, collection: str) -> list[Entry]:
        """Get entries of a collection in load order.

        Args:
            collection: Collection key

        Returns:
            Entries, empty if the collection is unknown or empty
        """
        return list(self._by_collection.get(collection, {}).values())

    def get_entry(self, collection: str, slug: str) -> Entry | None:
        """Get entry by collection and slug.

        Args:
            collection: Collection key (e.g., "settings")
            slug: Entry slug (e.g., "python-formatting")

        Returns:
            Entry if found, None otherwise
        """
        return self._by_collection.get(collection, {}).get(slug)

    def count(self, collection: str) -> int:
        return len(self._by_collection.get(collection, {}))


def build_catalog(
    items: Iterable[Item],
    *,
    root_marker: str = DEFAULT_ROOT_MARKER,
) -> Catalog:
    """Build a catalog from items.

    When two items of a collection produce the same slug the first one is
    kept and the collision is logged and recorded.

    Args:
        items: Loaded content items
        root_marker: Root marker segment configured for the registry

    Returns:
        Catalog instance
    """
    by_collection: dict[str, dict[str, Entry]] = {key.value: {} for key in COLLECTIONS}
    collisions: list[SlugCollision] = []

    for item in items:
        entry = create_entry(item, root_marker=root_marker)
        entries = by_collection.setdefault(item.collection, {})
        existing = entries.get(entry.slug)
        if existing is not None:
            collision = SlugCollision(
                collection=item.collection,
                slug=entry.slug,
                kept=effective_path(existing.item),
                dropped=effective_path(item),
            )
            logger.warning(
                f"Slug collision in {collision.collection}: {collision.dropped} "
                f"maps to {collision.slug!r} already used by {collision.kept}"
            )
            collisions.append(collision)
            continue
        entries[entry.slug] = entry

    return Catalog(by_collection, collisions)


class CatalogLoader:
    """Loads the catalog from the registry and caches it until invalidated."""

    def __init__(self, registry: RegistryConfig) -> None:
        self._registry = registry
        self._catalog: Catalog | None = None
        self._lock = threading.Lock()

    def load(self) -> Catalog:
        """Return the cached catalog, rebuilding it if invalidated.

        Files that fail to parse are skipped with a warning.
        """
        with self._lock:
            if self._catalog is None:
                items = load_items(self._registry, strict=False)
                self._catalog = build_catalog(items, root_marker=self._registry.root_marker)
            return self._catalog

    def invalidate(self) -> None:
        """Drop the cached catalog so the next load reads the registry again."""
        with self._lock:
            self._catalog = None
