"""Navigation tree builder.

Builds navigation trees from a Catalog for UI presentation: one section per
collection with its entries as children.
"""

from dataclasses import dataclass, field
from typing import TypedDict

from copilot_registry.core.catalog import Catalog
from copilot_registry.core.collections import format_collection_name
from copilot_registry.core.types import URLPath


class NavItemDict(TypedDict, total=False):
    """Dictionary representation of a navigation item."""

    title: str
    path: str
    children: list["NavItemDict"]


@dataclass
class NavItem:
    """Navigation item with children for UI tree."""

    title: str
    path: URLPath
    children: list["NavItem"] = field(default_factory=list)

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavItemDict = {"title": self.title, "path": self.path}
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def build_navigation(catalog: Catalog) -> list[NavItem]:
    """Build navigation tree from catalog.

    Args:
        catalog: Catalog to build navigation from

    Returns:
        One NavItem per collection, entries as children
    """
    return [
        NavItem(
            title=format_collection_name(key),
            path=URLPath(f"/{key}"),
            children=[
                NavItem(title=entry.title, path=entry.path)
                for entry in catalog.get_entries(key)
            ],
        )
        for key in catalog.collections()
    ]
