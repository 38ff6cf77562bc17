"""Collection table.

Defines the fixed set of content collections, the files each one picks up
and the metadata fields each one accepts.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

_WORD_START = re.compile(r"\b\w")


class CollectionKey(StrEnum):
    """Content collection keys."""

    COPILOT_INSTRUCTIONS = "copilot-instructions"
    COPILOT_PROMPTS = "copilot-prompts"
    SETTINGS = "settings"
    EXTENSIONS = "extensions"
    DEVCONTAINERS = "devcontainers"
    SETTINGS_MCP = "settings-mcp"


class MetadataError(ValueError):
    """Raised when item metadata does not match its collection fields."""


@dataclass(frozen=True)
class CollectionDefinition:
    """Files and metadata accepted by a collection.

    Attributes:
        key: Collection key
        patterns: Glob patterns relative to the collection base directory
        fields: Accepted metadata fields, all optional strings
        defaults: Values applied when a field is missing
    """

    key: CollectionKey
    patterns: tuple[str, ...]
    fields: tuple[str, ...]
    defaults: Mapping[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return format_collection_name(self.key)

    def parse_metadata(self, raw: Mapping[str, Any] | None) -> dict[str, str]:
        """Validate raw metadata against the collection fields.

        Unknown fields are dropped and defaults applied.

        Args:
            raw: Frontmatter or JSON object, None when the file has none

        Returns:
            Metadata with known fields only

        Raises:
            MetadataError: If a known field is present but not a string
        """
        metadata = dict(self.defaults)
        if raw is None:
            return metadata

        for name in self.fields:
            if name not in raw or raw[name] is None:
                continue
            value = raw[name]
            if not isinstance(value, str):
                raise MetadataError(f"{self.key}.{name} must be a string")
            metadata[name] = value

        return metadata


_MARKDOWN = ("**/*.md",)
_JSON_AND_MARKDOWN = ("**/*.json", "**/*.md")

COLLECTIONS: dict[CollectionKey, CollectionDefinition] = {
    CollectionKey.COPILOT_INSTRUCTIONS: CollectionDefinition(
        key=CollectionKey.COPILOT_INSTRUCTIONS,
        patterns=_MARKDOWN,
        fields=("applyTo", "description", "title"),
        defaults={"applyTo": "**"},
    ),
    CollectionKey.COPILOT_PROMPTS: CollectionDefinition(
        key=CollectionKey.COPILOT_PROMPTS,
        patterns=_MARKDOWN,
        fields=("description", "category", "title"),
    ),
    CollectionKey.SETTINGS: CollectionDefinition(
        key=CollectionKey.SETTINGS,
        patterns=_JSON_AND_MARKDOWN,
        fields=("name", "description", "category", "title"),
    ),
    CollectionKey.EXTENSIONS: CollectionDefinition(
        key=CollectionKey.EXTENSIONS,
        patterns=_JSON_AND_MARKDOWN,
        fields=("name", "description", "publisher", "category", "title"),
    ),
    CollectionKey.DEVCONTAINERS: CollectionDefinition(
        key=CollectionKey.DEVCONTAINERS,
        patterns=_JSON_AND_MARKDOWN,
        fields=("name", "description", "image", "title"),
    ),
    CollectionKey.SETTINGS_MCP: CollectionDefinition(
        key=CollectionKey.SETTINGS_MCP,
        patterns=_JSON_AND_MARKDOWN,
        fields=("name", "description", "server", "title"),
    ),
}


def get_collection(key: str) -> CollectionDefinition | None:
    """Look up a collection definition by key, None for unknown keys."""
    try:
        return COLLECTIONS[CollectionKey(key)]
    except ValueError:
        return None


def format_collection_name(key: str) -> str:
    """Format a collection key for display.

    Args:
        key: Collection key (e.g., "copilot-instructions")

    Returns:
        Display name (e.g., "Copilot Instructions")
    """
    spaced = key.replace("-", " ")
    return _WORD_START.sub(lambda match: match.group().upper(), spaced)
