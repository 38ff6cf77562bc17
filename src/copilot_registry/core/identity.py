"""Path identity normalization.

Derives the slug, display path and short file name of a content item from
its raw path. All functions are pure: the result depends only on the item's
own path, its collection and the root marker passed in.
"""

import posixpath
import re

from copilot_registry.core.types import DEFAULT_ROOT_MARKER, Item

# Compound suffixes come first so "foo.instructions.md" loses the whole suffix.
# Matching is case-sensitive: "FOO.MD" keeps its extension.
_EXTENSION_PATTERN = re.compile(r"\.(?:instructions|prompt)\.md\Z|\.(?:md|json)\Z")


class InvalidItemError(ValueError):
    """Raised when an item carries neither a file path nor an id."""


def create_slug(raw_path: str, *, root_marker: str = DEFAULT_ROOT_MARKER) -> str:
    """Create a URL slug from a raw item path.

    The root marker prefix and one recognised extension are stripped, the
    remaining directory separators become hyphens and the result is
    lower-cased. Directory context is kept so that equally named files in
    different folders get distinct slugs.

    Args:
        raw_path: Item id or file path (e.g., "registry/python/style.instructions.md")
        root_marker: Leading segment to strip (e.g., "registry/")

    Returns:
        Slug (e.g., "python-style")
    """
    slug = _strip_prefix(raw_path, root_marker)
    slug = strip_extension(slug)
    slug = slug.replace("/", "-")
    return slug.lower()


def get_file_name(item: Item, *, root_marker: str = DEFAULT_ROOT_MARKER) -> str:
    """Get a short file label for an item.

    Files directly inside the collection directory are labelled by their
    file name alone; nested files keep their immediate parent directory.

    Args:
        item: Content item
        root_marker: Leading segment that never appears in the label

    Returns:
        File name (e.g., "settings.json" or "python/settings.json")

    Raises:
        InvalidItemError: If the item has neither file_path nor id
    """
    path = effective_path(item)
    base_name = posixpath.basename(path)
    dir_name = posixpath.basename(posixpath.dirname(path))

    if not dir_name or dir_name == item.collection:
        return base_name
    if f"{dir_name}/" == root_marker:
        return base_name
    return f"{dir_name}/{base_name}"


def get_display_path(item: Item, *, root_marker: str = DEFAULT_ROOT_MARKER) -> str:
    """Get the item path relative to its collection directory.

    Args:
        item: Content item
        root_marker: Leading segment to strip

    Returns:
        Relative path with extension (e.g., "sub/readme.md")

    Raises:
        InvalidItemError: If the item has neither file_path nor id
    """
    path = _strip_prefix(effective_path(item), root_marker)
    return _strip_prefix(path, f"{item.collection}/")


def strip_extension(path: str) -> str:
    """Remove one recognised content extension from the end of a path.

    Examples:
        "style.instructions.md" -> "style"
        "README.MD" -> "README.MD"
    """
    return _EXTENSION_PATTERN.sub("", path, count=1)


def effective_path(item: Item) -> str:
    """Return the path used for identity derivation.

    Raises:
        InvalidItemError: If the item has neither file_path nor id
    """
    path = item.file_path or item.id
    if not path:
        raise InvalidItemError(
            f"Item in collection {item.collection!r} has neither file_path nor id"
        )
    return path


def _strip_prefix(path: str, prefix: str) -> str:
    if prefix and path.startswith(prefix):
        return path[len(prefix) :]
    return path
