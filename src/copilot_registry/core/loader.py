"""Filesystem loader for registry collections.

Walks each collection base directory and produces content items with
validated metadata. Markdown files may carry YAML frontmatter; JSON files
supply metadata from their top-level object.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from copilot_registry.config import RegistryConfig
from copilot_registry.core.collections import COLLECTIONS, CollectionKey, MetadataError
from copilot_registry.core.types import Item

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


class ContentParseError(ValueError):
    """Raised when a content file cannot be parsed."""


def load_items(registry: RegistryConfig, *, strict: bool = True) -> list[Item]:
    """Load items of every collection.

    Args:
        registry: Registry configuration
        strict: Raise on unparsable files instead of skipping them

    Returns:
        Items in collection table order, sorted by path within a collection

    Raises:
        ContentParseError: If strict and a file cannot be parsed
    """
    items: list[Item] = []
    for key in COLLECTIONS:
        items.extend(load_collection(key, registry, strict=strict))
    return items


def load_collection(
    key: CollectionKey,
    registry: RegistryConfig,
    *,
    strict: bool = True,
) -> list[Item]:
    """Load items of a single collection.

    Args:
        key: Collection to load
        registry: Registry configuration
        strict: Raise on unparsable files instead of skipping them

    Returns:
        Items sorted by path

    Raises:
        ContentParseError: If strict and a file cannot be parsed
    """
    base_dir = registry.collection_dir(key)
    if not base_dir.is_dir():
        logger.debug(f"Collection directory not found, skipping: {base_dir}")
        return []

    items: list[Item] = []
    for path in _discover_files(base_dir, COLLECTIONS[key].patterns):
        try:
            items.append(_load_item(key, path, base_dir, registry))
        except ContentParseError as e:
            if strict:
                raise
            logger.warning(f"Skipping {path}: {e}")

    logger.debug(f"Loaded {len(items)} items from {key}")
    return items


def _discover_files(base_dir: Path, patterns: tuple[str, ...]) -> list[Path]:
    found: set[Path] = set()
    for pattern in patterns:
        found.update(path for path in base_dir.glob(pattern) if path.is_file())
    return sorted(found)


def _load_item(
    key: CollectionKey,
    path: Path,
    base_dir: Path,
    registry: RegistryConfig,
) -> Item:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        raw, body = _parse_json(text, path), text
    else:
        raw, body = _parse_frontmatter(text, path)

    try:
        data = COLLECTIONS[key].parse_metadata(raw)
    except MetadataError as e:
        raise ContentParseError(f"Invalid metadata in {path}: {e}") from e

    return Item(
        id=path.relative_to(base_dir).as_posix(),
        collection=key.value,
        file_path=_loader_path(key, path, base_dir, registry.root_marker),
        data=data,
        body=body,
    )


def _loader_path(key: CollectionKey, path: Path, base_dir: Path, root_marker: str) -> str:
    """Collection-rooted path behind the root marker.

    Always shaped "<root_marker><collection>/<relative path>", whatever the
    collection directory is called on disk.
    """
    return f"{root_marker}{key.value}/{path.relative_to(base_dir).as_posix()}"


def _parse_json(text: str, path: Path) -> dict[str, Any] | None:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ContentParseError(f"Failed to parse JSON in {path}: {e}") from e

    if isinstance(payload, dict):
        return payload
    return None


def _parse_frontmatter(text: str, path: Path) -> tuple[dict[str, Any] | None, str]:
    """Split markdown into frontmatter mapping and body.

    Returns:
        Tuple of (frontmatter or None, body text)
    """
    normalized = text.lstrip("\ufeff")
    lines = normalized.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None, normalized

    end = next(
        (i for i, line in enumerate(lines[1:], start=1) if line.strip() == FRONTMATTER_DELIMITER),
        None,
    )
    if end is None:
        raise ContentParseError(f"Unterminated frontmatter block in {path}")

    frontmatter_text = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])
    try:
        payload = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
    except yaml.YAMLError as e:
        raise ContentParseError(f"Failed to parse frontmatter in {path}: {e}") from e

    if payload is None:
        return None, body
    if not isinstance(payload, dict):
        raise ContentParseError(f"Frontmatter in {path} must be a YAML mapping")
    return payload, body
