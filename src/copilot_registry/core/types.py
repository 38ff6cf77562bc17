"""Core type definitions."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NewType

# URL path for routing (e.g., "/settings", "/copilot-prompts/review-code")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Leading path segment denoting the content repository root
DEFAULT_ROOT_MARKER = "registry/"


@dataclass(frozen=True)
class Item:
    """Content item as produced by the loader.

    Attributes:
        id: Loader-assigned identifier, a path relative to the collection
            base directory (may carry the root marker prefix)
        collection: Collection key the item belongs to
        file_path: Raw path as seen by the loader, preferred over id
        data: Validated metadata, opaque to the identity functions
        body: Raw text content, used for language sniffing
    """

    id: str
    collection: str
    file_path: str | None = None
    data: Mapping[str, Any] | None = None
    body: str | None = None
